from __future__ import annotations

import logging

from flask import Flask, flash, render_template

from ..common.web import admin_required
from ..container import Container
from ..core.exceptions import ApiError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    @app.route("/admin/dashboard", endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        overview = None
        try:
            overview = service.overview()
        except ApiError:
            logger.exception("load dashboard failed")
            flash("Erro ao carregar dashboard", "danger")

        alerts = []
        try:
            alerts = container.driver_service.license_alerts(container.driver_service.list())
        except ApiError:
            logger.exception("load license alerts failed")

        return render_template(
            "admin/dashboard.html",
            overview=overview,
            license_alerts=alerts,
            active_page="admin_dashboard",
        )
