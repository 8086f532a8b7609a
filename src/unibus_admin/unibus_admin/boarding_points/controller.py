from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.listing import filter_records, paginate
from ..common.web import admin_required, filter_arg, load_list, page_arg, search_arg
from ..container import Container
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)

FORM_FIELDS = ("name", "address", "neighborhood", "city", "lat", "lng")


def register(app: Flask, container: Container) -> None:
    service = container.boarding_point_service

    def _form() -> dict:
        return {name: request.form.get(name, "") for name in FORM_FIELDS}

    def _render_form(point):
        return render_template(
            "admin/ponto_form.html",
            point=point,
            form=request.form,
            active_page="admin_boarding_points",
        )

    @app.route("/admin/pontos", endpoint="admin_boarding_points")
    @admin_required
    def admin_boarding_points():
        q = search_arg()
        city = filter_arg("city")
        points = load_list(service.list, "Erro ao carregar pontos de embarque")
        filtered = filter_records(points, search=q, fields=("name", "address", "neighborhood", "city"), city=city)
        return render_template(
            "admin/pontos.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            city=city,
            cities=sorted({p.city for p in points if p.city}),
            total=len(points),
            counts=service.status_counts(points),
            with_coordinates=sum(1 for p in points if p.has_coordinates),
            active_page="admin_boarding_points",
        )

    @app.route("/admin/pontos/novo", methods=["GET", "POST"], endpoint="admin_boarding_point_new")
    @admin_required
    def admin_boarding_point_new():
        if request.method == "POST":
            try:
                service.create(**_form())
                flash("Ponto de embarque criado com sucesso!", "success")
                return redirect(url_for("admin_boarding_points"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create boarding point failed")
                flash("Erro ao salvar ponto de embarque", "danger")

        return _render_form(None)

    @app.route("/admin/pontos/<int:point_id>/editar", methods=["GET", "POST"], endpoint="admin_boarding_point_edit")
    @admin_required
    def admin_boarding_point_edit(point_id: int):
        point = service.get(point_id)
        if request.method == "POST":
            try:
                service.update(point_id, **_form())
                flash("Ponto de embarque atualizado com sucesso!", "success")
                return redirect(url_for("admin_boarding_points"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("update boarding point %s failed", point_id)
                flash("Erro ao salvar ponto de embarque", "danger")

        return _render_form(point)

    @app.route("/admin/pontos/<int:point_id>/excluir", methods=["POST"], endpoint="admin_boarding_point_delete")
    @admin_required
    def admin_boarding_point_delete(point_id: int):
        try:
            service.delete(point_id)
            flash("Ponto de embarque excluído com sucesso!", "success")
        except ApiError:
            logger.exception("delete boarding point %s failed", point_id)
            flash("Erro ao excluir ponto de embarque", "danger")

        return redirect(url_for("admin_boarding_points"))
