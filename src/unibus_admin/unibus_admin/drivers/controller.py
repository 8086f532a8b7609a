from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.listing import filter_records, paginate
from ..common.web import admin_required, load_list, page_arg, search_arg
from ..container import Container
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)

FORM_FIELDS = ("name", "email", "phone", "cpf", "cnh", "vehicle", "license_expiry", "birth_date")


def register(app: Flask, container: Container) -> None:
    service = container.driver_service

    def _form(*extra: str) -> dict:
        return {name: request.form.get(name, "") for name in FORM_FIELDS + extra}

    def _render_form(driver):
        return render_template("admin/motorista_form.html", driver=driver, form=request.form, active_page="admin_drivers")

    @app.route("/admin/motoristas", endpoint="admin_drivers")
    @admin_required
    def admin_drivers():
        q = search_arg()
        drivers = load_list(service.list, "Erro ao carregar motoristas")
        filtered = filter_records(drivers, search=q, fields=("name", "email", "cpf", "cnh", "vehicle"))
        return render_template(
            "admin/motoristas.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            total=len(drivers),
            alerts=service.license_alerts(drivers),
            active_page="admin_drivers",
        )

    @app.route("/admin/motoristas/novo", methods=["GET", "POST"], endpoint="admin_driver_new")
    @admin_required
    def admin_driver_new():
        if request.method == "POST":
            try:
                service.create(**_form("password"))
                flash("Motorista criado com sucesso!", "success")
                return redirect(url_for("admin_drivers"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create driver failed")
                flash("Erro ao salvar motorista", "danger")

        return _render_form(None)

    @app.route("/admin/motoristas/<int:driver_id>/editar", methods=["GET", "POST"], endpoint="admin_driver_edit")
    @admin_required
    def admin_driver_edit(driver_id: int):
        driver = service.get(driver_id)
        if request.method == "POST":
            try:
                service.update(driver_id, **_form())
                flash("Motorista atualizado com sucesso!", "success")
                return redirect(url_for("admin_drivers"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("update driver %s failed", driver_id)
                flash("Erro ao salvar motorista", "danger")

        return _render_form(driver)

    @app.route("/admin/motoristas/<int:driver_id>/excluir", methods=["POST"], endpoint="admin_driver_delete")
    @admin_required
    def admin_driver_delete(driver_id: int):
        try:
            service.delete(driver_id)
            flash("Motorista excluído com sucesso!", "success")
        except ApiError:
            logger.exception("delete driver %s failed", driver_id)
            flash("Erro ao excluir motorista", "danger")

        return redirect(url_for("admin_drivers"))
