from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.datetime_utils import today
from ..common.listing import filter_records, paginate
from ..common.web import admin_required, filter_arg, load_list, page_arg, search_arg, student_required
from ..container import Container
from ..core.exceptions import ApiError, ValidationError
from ..routes.service import ACTIVE_STATUSES

logger = logging.getLogger(__name__)

FORM_FIELDS = ("route_id", "student_id", "boarding_point_id")
UPCOMING_LIMIT = 5


def register(app: Flask, container: Container) -> None:
    service = container.enrollment_service

    def _form() -> dict:
        data = {name: request.form.get(name, "") for name in FORM_FIELDS}
        data["confirmed"] = request.form.get("confirmed") == "on"
        return data

    def _render_form(enrollment):
        return render_template(
            "admin/rota_aluno_form.html",
            enrollment=enrollment,
            form=request.form,
            routes=load_list(container.route_service.list, "Erro ao carregar rotas"),
            students=load_list(container.student_service.list, "Erro ao carregar alunos"),
            points=load_list(container.boarding_point_service.list, "Erro ao carregar pontos de embarque"),
            active_page="admin_enrollments",
        )

    def _back():
        return redirect(url_for("admin_enrollments"))

    @app.route("/admin/rota-aluno", endpoint="admin_enrollments")
    @admin_required
    def admin_enrollments():
        q = search_arg()
        route_id = filter_arg("route_id")
        if route_id and route_id.isdigit():
            enrollments = load_list(lambda: service.by_route(int(route_id)), "Erro ao carregar vínculos aluno/rota")
        else:
            enrollments = load_list(service.list, "Erro ao carregar vínculos aluno/rota")
        filtered = filter_records(
            enrollments, search=q, fields=("student_name", "route_destination", "point_name", "student_id")
        )
        return render_template(
            "admin/rota_aluno.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            route_id=route_id,
            routes=load_list(container.route_service.list, "Erro ao carregar rotas"),
            total=len(enrollments),
            confirmed=sum(1 for e in enrollments if e.is_confirmed),
            active_page="admin_enrollments",
        )

    @app.route("/admin/rota-aluno/novo", methods=["GET", "POST"], endpoint="admin_enrollment_new")
    @admin_required
    def admin_enrollment_new():
        if request.method == "POST":
            try:
                service.create(**_form())
                flash("Aluno vinculado à rota com sucesso!", "success")
                return _back()
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create enrollment failed")
                flash("Erro ao vincular aluno à rota", "danger")

        return _render_form(None)

    @app.route("/admin/rota-aluno/<int:enrollment_id>/editar", methods=["GET", "POST"], endpoint="admin_enrollment_edit")
    @admin_required
    def admin_enrollment_edit(enrollment_id: int):
        enrollment = service.get(enrollment_id)
        if request.method == "POST":
            try:
                service.update(enrollment_id, **_form())
                flash("Vínculo atualizado com sucesso!", "success")
                return _back()
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("update enrollment %s failed", enrollment_id)
                flash("Erro ao salvar vínculo", "danger")

        return _render_form(enrollment)

    @app.route("/admin/rota-aluno/<int:enrollment_id>/confirmar", methods=["POST"], endpoint="admin_enrollment_confirm")
    @admin_required
    def admin_enrollment_confirm(enrollment_id: int):
        try:
            service.confirm(enrollment_id)
            flash("Vínculo confirmado!", "success")
        except ApiError:
            logger.exception("confirm enrollment %s failed", enrollment_id)
            flash("Erro ao confirmar vínculo", "danger")
        return _back()

    @app.route("/admin/rota-aluno/<int:enrollment_id>/cancelar", methods=["POST"], endpoint="admin_enrollment_cancel")
    @admin_required
    def admin_enrollment_cancel(enrollment_id: int):
        try:
            service.cancel(enrollment_id)
            flash("Vínculo cancelado!", "success")
        except ApiError:
            logger.exception("cancel enrollment %s failed", enrollment_id)
            flash("Erro ao cancelar vínculo", "danger")
        return _back()

    @app.route("/admin/rota-aluno/<int:enrollment_id>/excluir", methods=["POST"], endpoint="admin_enrollment_delete")
    @admin_required
    def admin_enrollment_delete(enrollment_id: int):
        try:
            service.delete(enrollment_id)
            flash("Vínculo excluído com sucesso!", "success")
        except ApiError:
            logger.exception("delete enrollment %s failed", enrollment_id)
            flash("Erro ao excluir vínculo", "danger")
        return _back()

    @app.route("/aluno/rotas", endpoint="student_routes")
    @student_required
    def student_routes():
        user_id = session.get("user_id")
        enrollments = load_list(lambda: service.by_student(int(user_id)), "Erro ao carregar suas rotas")
        routes = load_list(container.route_service.list, "Erro ao carregar rotas")
        names = {}
        if any(not r.driver_name for r in routes):
            names = {d.id: d.name for d in load_list(container.driver_service.list, "Erro ao carregar motoristas")}
        routes = container.route_service.with_driver_names(routes, names)

        day = today().isoformat()
        active = [r for r in routes if r.status in ACTIVE_STATUSES]
        mine = {e.route_id for e in enrollments}
        return render_template(
            "aluno/rotas.html",
            enrollments=enrollments,
            today_routes=[r for r in active if r.date == day],
            upcoming_routes=[r for r in active if r.date and r.date > day][:UPCOMING_LIMIT],
            my_route_ids=mine,
            points=load_list(container.boarding_point_service.list, "Erro ao carregar pontos de embarque"),
            active_page="student_routes",
        )
