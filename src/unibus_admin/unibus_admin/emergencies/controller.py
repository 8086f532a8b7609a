from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.listing import filter_records, paginate
from ..common.web import admin_required, filter_arg, load_list, page_arg, search_arg
from ..container import Container
from ..core.enums import EmergencyStatus, EmergencyType
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)

FORM_FIELDS = ("type", "description", "location", "route_id", "driver_id")


def register(app: Flask, container: Container) -> None:
    service = container.emergency_service

    def _form(*extra: str) -> dict:
        return {name: request.form.get(name, "") for name in FORM_FIELDS + extra}

    def _render_form(emergency):
        return render_template(
            "admin/emergencia_form.html",
            emergency=emergency,
            form=request.form,
            types=list(EmergencyType),
            statuses=list(EmergencyStatus),
            routes=load_list(container.route_service.list, "Erro ao carregar rotas"),
            drivers=load_list(container.driver_service.list, "Erro ao carregar motoristas"),
            active_page="admin_emergencies",
        )

    @app.route("/admin/emergencias", endpoint="admin_emergencies")
    @admin_required
    def admin_emergencies():
        q = search_arg()
        status = filter_arg("status")
        emergencies = load_list(service.list, "Erro ao carregar emergências")
        filtered = filter_records(emergencies, search=q, fields=("description", "location", "type"), status=status)
        return render_template(
            "admin/emergencias.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            status=status,
            statuses=list(EmergencyStatus),
            counts=service.status_counts(emergencies),
            total=len(emergencies),
            active_page="admin_emergencies",
        )

    @app.route("/admin/emergencias/nova", methods=["GET", "POST"], endpoint="admin_emergency_new")
    @admin_required
    def admin_emergency_new():
        if request.method == "POST":
            try:
                service.create(**_form())
                flash("Emergência registrada com sucesso!", "success")
                return redirect(url_for("admin_emergencies"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create emergency failed")
                flash("Erro ao registrar emergência", "danger")

        return _render_form(None)

    @app.route("/admin/emergencias/<int:emergency_id>/editar", methods=["GET", "POST"], endpoint="admin_emergency_edit")
    @admin_required
    def admin_emergency_edit(emergency_id: int):
        emergency = service.get(emergency_id)
        if request.method == "POST":
            try:
                service.update(emergency_id, **_form("status"))
                flash("Emergência atualizada com sucesso!", "success")
                return redirect(url_for("admin_emergencies"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("update emergency %s failed", emergency_id)
                flash("Erro ao atualizar emergência", "danger")

        return _render_form(emergency)

    @app.route("/admin/emergencias/<int:emergency_id>/resolver", methods=["POST"], endpoint="admin_emergency_resolve")
    @admin_required
    def admin_emergency_resolve(emergency_id: int):
        try:
            service.resolve(emergency_id)
            flash("Emergência resolvida com sucesso!", "success")
        except ApiError:
            logger.exception("resolve emergency %s failed", emergency_id)
            flash("Erro ao resolver emergência", "danger")

        return redirect(url_for("admin_emergencies"))

    @app.route("/admin/emergencias/<int:emergency_id>/excluir", methods=["POST"], endpoint="admin_emergency_delete")
    @admin_required
    def admin_emergency_delete(emergency_id: int):
        try:
            service.delete(emergency_id)
            flash("Emergência excluída com sucesso!", "success")
        except ApiError:
            logger.exception("delete emergency %s failed", emergency_id)
            flash("Erro ao excluir emergência", "danger")

        return redirect(url_for("admin_emergencies"))
