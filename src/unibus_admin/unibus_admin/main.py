from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, flash, has_request_context, redirect, render_template, session, url_for

from config import get_settings_module

from .backend.client import ApiConfig
from .common.datetime_utils import format_br_date, month_label
from .common.web import clear_auth_session, current_user, display_label
from .container import build_container
from .core.constants import DEFAULT_API_BASE_URL, DEFAULT_API_TIMEOUT, DEFAULT_CACHE_TTL_SECONDS, DEFAULT_PAGE_SIZE
from .core.exceptions import AuthenticationError, NotFoundError
from .admins.controller import register as register_admins
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .boarding_points.controller import register as register_boarding_points
from .buses.controller import register as register_buses
from .dashboard.controller import register as register_dashboard
from .drivers.controller import register as register_drivers
from .emergencies.controller import register as register_emergencies
from .enrollments.controller import register as register_enrollments
from .institutions.controller import register as register_institutions
from .notifications.controller import register as register_notifications
from .payments.controller import register as register_payments
from .routes.controller import register as register_routes
from .students.controller import register as register_students


def _session_token() -> Optional[str]:
    if not has_request_context():
        return None
    return session.get("token")


def _forget_session() -> None:
    if has_request_context():
        clear_auth_session()


def create_app(*, session=None, overrides=None) -> Flask:
    """Build the web app.

    ``session`` replaces the ``requests.Session`` used to reach the backend and
    ``overrides`` updates the config loaded from the settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["API_BASE_URL"] = getattr(settings, "API_BASE_URL", DEFAULT_API_BASE_URL)
    app.config["API_TIMEOUT"] = float(getattr(settings, "API_TIMEOUT", DEFAULT_API_TIMEOUT))
    app.config["CACHE_TTL_SECONDS"] = float(getattr(settings, "CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS))
    app.config["PAGE_SIZE"] = int(getattr(settings, "PAGE_SIZE", DEFAULT_PAGE_SIZE))
    app.config.update(overrides or {})

    log_level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.logger.setLevel(log_level)

    if app.config["DEBUG"]:
        app.logger.info("[unibus-admin] settings=%s api=%s", settings_module, app.config["API_BASE_URL"])

    container = build_container(
        api_config=ApiConfig(base_url=app.config["API_BASE_URL"], timeout=app.config["API_TIMEOUT"]),
        cache_ttl=app.config["CACHE_TTL_SECONDS"],
        token_provider=_session_token,
        on_unauthorized=_forget_session,
        session=session,
    )
    app.extensions["unibus_container"] = container

    app.jinja_env.globals["csrf_token"] = lambda: ""
    app.jinja_env.globals["current_user"] = current_user
    app.jinja_env.filters["br_date"] = format_br_date
    app.jinja_env.filters["month_label"] = month_label
    app.jinja_env.filters["label"] = display_label

    register_auth(app, container)
    register_dashboard(app, container)
    register_students(app, container)
    register_drivers(app, container)
    register_buses(app, container)
    register_routes(app, container)
    register_payments(app, container)
    register_boarding_points(app, container)
    register_notifications(app, container)
    register_emergencies(app, container)
    register_institutions(app, container)
    register_admins(app, container)
    register_enrollments(app, container)
    register_attendance(app, container)

    @app.errorhandler(AuthenticationError)
    def handle_expired_session(e):
        clear_auth_session()
        flash(str(e) or "Sessão expirada. Faça login novamente.", "warning")
        return redirect(url_for("login"))

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return render_template("404.html", message=str(e)), 404

    @app.errorhandler(404)
    def handle_unknown_page(e):
        return render_template("404.html", message="Página não encontrada"), 404

    return app
