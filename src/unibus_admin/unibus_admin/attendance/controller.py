from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.datetime_utils import today
from ..common.listing import count_by, filter_records, paginate
from ..common.web import admin_required, driver_required, filter_arg, load_list, page_arg, search_arg
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import ApiError, ValidationError
from ..routes.service import ACTIVE_STATUSES

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("student_name", "route_name", "student_id", "observation")


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service
    routes = container.route_service

    def _driver_id() -> int:
        return int(session.get("user_id") or 0)

    @app.route("/admin/presencas", endpoint="admin_attendance")
    @admin_required
    def admin_attendance():
        q = search_arg()
        status = filter_arg("status")
        route_id = filter_arg("route_id")
        day = filter_arg("date")
        try:
            records = service.list(route_id=route_id)
        except ValidationError as e:
            flash(str(e), "danger")
            records = []
        except ApiError:
            logger.exception("load attendance failed")
            flash("Erro ao carregar presenças", "danger")
            records = []

        filtered = filter_records(records, search=q, fields=SEARCH_FIELDS, status=status, date=day)
        return render_template(
            "admin/presencas.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            status=status,
            route_id=route_id,
            date=day,
            statuses=list(AttendanceStatus),
            routes=load_list(routes.list, "Erro ao carregar rotas"),
            summary=service.summarize(filtered),
            active_page="admin_attendance",
        )

    @app.route("/admin/presencas/<int:attendance_id>/excluir", methods=["POST"], endpoint="admin_attendance_delete")
    @admin_required
    def admin_attendance_delete(attendance_id: int):
        try:
            service.delete(attendance_id)
            flash("Registro de presença excluído com sucesso!", "success")
        except ApiError:
            logger.exception("delete attendance %s failed", attendance_id)
            flash("Erro ao excluir registro de presença", "danger")

        return redirect(url_for("admin_attendance"))

    @app.route("/motorista/dashboard", endpoint="driver_dashboard")
    @driver_required
    def driver_dashboard():
        my_routes = load_list(lambda: routes.for_driver(_driver_id()), "Erro ao carregar rotas")
        day = today().isoformat()
        today_routes = [r for r in my_routes if r.date == day or r.status in ACTIVE_STATUSES]
        upcoming = sorted(
            (r for r in today_routes if r.status in ACTIVE_STATUSES),
            key=lambda r: (r.date or "", r.departure_time or ""),
        )
        return render_template(
            "motorista/dashboard.html",
            routes=my_routes,
            today_routes=today_routes,
            expected_students=sum(r.enrolled for r in today_routes),
            next_route=upcoming[0] if upcoming else None,
            counts=count_by(my_routes, "status"),
            active_page="driver_dashboard",
        )

    @app.route("/motorista/presencas", methods=["GET", "POST"], endpoint="driver_attendance")
    @driver_required
    def driver_attendance():
        if request.method == "POST":
            route_id = request.form.get("route_id", "")
            student_ids = request.form.getlist("student_ids")
            try:
                statuses = {int(sid): f"present_{sid}" in request.form for sid in student_ids}
            except ValueError:
                statuses = {}
            try:
                count = service.mark_route(route_id, statuses, request.form.get("observation", ""))
                flash(f"Presença confirmada para {count} aluno(s)!", "success")
                return redirect(url_for("driver_history"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("mark attendance for route %s failed", route_id)
                flash("Erro ao confirmar presença", "danger")
            return redirect(url_for("driver_attendance", route_id=route_id or None))

        route_id = filter_arg("route_id")
        active = load_list(lambda: routes.active_for_driver(_driver_id()), "Erro ao carregar rotas")
        students = []
        if route_id and route_id.isdigit():
            students = load_list(
                lambda: container.student_service.list_by_route(int(route_id)),
                "Erro ao carregar alunos da rota",
            )
        return render_template(
            "motorista/presencas.html",
            routes=active,
            route_id=route_id,
            students=students,
            active_page="driver_attendance",
        )

    @app.route("/motorista/historico", endpoint="driver_history")
    @driver_required
    def driver_history():
        status = filter_arg("status")
        route_id = filter_arg("route_id")
        my_routes = load_list(lambda: routes.for_driver(_driver_id()), "Erro ao carregar rotas")
        route_ids = {r.id for r in my_routes}
        records = [r for r in load_list(service.list, "Erro ao carregar presenças") if r.route_id in route_ids]
        filtered = filter_records(records, status=status, route_id=route_id)
        return render_template(
            "motorista/historico.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            status=status,
            route_id=route_id,
            routes=my_routes,
            statuses=list(AttendanceStatus),
            summary=service.summarize(filtered),
            active_page="driver_history",
        )
