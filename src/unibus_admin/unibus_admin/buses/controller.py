from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.listing import filter_records, paginate
from ..common.web import admin_required, filter_arg, load_list, page_arg, search_arg
from ..container import Container
from ..core.enums import BusStatus
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)

FORM_FIELDS = ("placa", "modelo", "ano", "capacidade", "status")


def register(app: Flask, container: Container) -> None:
    service = container.bus_service

    def _form() -> dict:
        return {name: request.form.get(name, "") for name in FORM_FIELDS}

    def _render_form(bus):
        return render_template(
            "admin/onibus_form.html",
            bus=bus,
            form=request.form,
            statuses=list(BusStatus),
            active_page="admin_buses",
        )

    @app.route("/admin/onibus", endpoint="admin_buses")
    @admin_required
    def admin_buses():
        q = search_arg()
        status = filter_arg("status")
        buses = load_list(service.list, "Erro ao carregar ônibus")
        filtered = filter_records(buses, search=q, fields=("placa", "modelo"), status=status)
        return render_template(
            "admin/onibus.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            status=status,
            statuses=list(BusStatus),
            counts=service.status_counts(buses),
            total=len(buses),
            total_capacity=sum(b.capacidade for b in buses),
            active_page="admin_buses",
        )

    @app.route("/admin/onibus/novo", methods=["GET", "POST"], endpoint="admin_bus_new")
    @admin_required
    def admin_bus_new():
        if request.method == "POST":
            try:
                service.create(**_form())
                flash("Ônibus criado com sucesso!", "success")
                return redirect(url_for("admin_buses"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create bus failed")
                flash("Erro ao salvar ônibus", "danger")

        return _render_form(None)

    @app.route("/admin/onibus/<int:bus_id>/editar", methods=["GET", "POST"], endpoint="admin_bus_edit")
    @admin_required
    def admin_bus_edit(bus_id: int):
        bus = service.get(bus_id)
        if request.method == "POST":
            try:
                service.update(bus_id, **_form())
                flash("Ônibus atualizado com sucesso!", "success")
                return redirect(url_for("admin_buses"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("update bus %s failed", bus_id)
                flash("Erro ao salvar ônibus", "danger")

        return _render_form(bus)

    @app.route("/admin/onibus/<int:bus_id>/status", methods=["POST"], endpoint="admin_bus_status")
    @admin_required
    def admin_bus_status(bus_id: int):
        try:
            service.update_status(bus_id, request.form.get("status", ""))
            flash("Status do ônibus atualizado!", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except ApiError:
            logger.exception("update bus %s status failed", bus_id)
            flash("Erro ao atualizar status do ônibus", "danger")

        return redirect(url_for("admin_buses"))

    @app.route("/admin/onibus/<int:bus_id>/excluir", methods=["POST"], endpoint="admin_bus_delete")
    @admin_required
    def admin_bus_delete(bus_id: int):
        try:
            service.delete(bus_id)
            flash("Ônibus excluído com sucesso!", "success")
        except ApiError:
            logger.exception("delete bus %s failed", bus_id)
            flash("Erro ao excluir ônibus", "danger")

        return redirect(url_for("admin_buses"))
