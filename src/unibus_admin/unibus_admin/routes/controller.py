from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.listing import filter_records, paginate
from ..common.web import admin_required, filter_arg, load_list, page_arg, search_arg
from ..container import Container
from ..core.enums import RouteDirection, RouteStatus
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)

FORM_FIELDS = ("date", "direction", "departure_time", "driver_id", "status")


def register(app: Flask, container: Container) -> None:
    service = container.route_service

    def _form() -> dict:
        return {name: request.form.get(name, "") for name in FORM_FIELDS}

    def _render_form(route):
        drivers = load_list(container.driver_service.list, "Erro ao carregar motoristas")
        return render_template(
            "admin/rota_form.html",
            route=route,
            form=request.form,
            drivers=drivers,
            directions=list(RouteDirection),
            statuses=list(RouteStatus),
            active_page="admin_routes",
        )

    @app.route("/admin/rotas", endpoint="admin_routes")
    @admin_required
    def admin_routes():
        q = search_arg()
        status = filter_arg("status")
        routes = load_list(service.list, "Erro ao carregar rotas")
        names = {}
        if any(not r.driver_name for r in routes):
            names = {d.id: d.name for d in load_list(container.driver_service.list, "Erro ao carregar motoristas")}
        routes = service.with_driver_names(routes, names)
        filtered = filter_records(routes, search=q, fields=("name", "direction", "driver_name", "date"), status=status)
        return render_template(
            "admin/rotas.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            status=status,
            statuses=list(RouteStatus),
            counts=service.status_counts(routes),
            total=len(routes),
            active_page="admin_routes",
        )

    @app.route("/admin/rotas/nova", methods=["GET", "POST"], endpoint="admin_route_new")
    @admin_required
    def admin_route_new():
        if request.method == "POST":
            try:
                service.create(**_form())
                flash("Rota criada com sucesso!", "success")
                return redirect(url_for("admin_routes"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create route failed")
                flash("Erro ao salvar rota. Verifique os dados e tente novamente.", "danger")

        return _render_form(None)

    @app.route("/admin/rotas/<int:route_id>/editar", methods=["GET", "POST"], endpoint="admin_route_edit")
    @admin_required
    def admin_route_edit(route_id: int):
        route = service.get(route_id)
        if request.method == "POST":
            try:
                service.update(route_id, **_form())
                flash("Rota atualizada com sucesso!", "success")
                return redirect(url_for("admin_routes"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("update route %s failed", route_id)
                flash("Erro ao salvar rota. Verifique os dados e tente novamente.", "danger")

        return _render_form(route)

    @app.route("/admin/rotas/<int:route_id>/excluir", methods=["POST"], endpoint="admin_route_delete")
    @admin_required
    def admin_route_delete(route_id: int):
        try:
            service.delete(route_id)
            flash("Rota excluída com sucesso!", "success")
        except ApiError:
            logger.exception("delete route %s failed", route_id)
            flash("Erro ao excluir rota", "danger")

        return redirect(url_for("admin_routes"))
