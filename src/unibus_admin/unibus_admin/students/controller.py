from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.listing import filter_records, paginate
from ..common.web import admin_required, filter_arg, load_list, page_arg, search_arg
from ..container import Container
from ..core.enums import StudentShift
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)

COMMON_FIELDS = ("name", "email", "phone", "cpf", "address", "city", "course", "shift")


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    def _form(*extra: str) -> dict:
        return {name: request.form.get(name, "") for name in COMMON_FIELDS + extra}

    def _render_form(student):
        routes = load_list(container.route_service.list, "Erro ao carregar rotas")
        return render_template(
            "admin/aluno_form.html",
            student=student,
            form=request.form,
            shifts=list(StudentShift),
            routes=routes,
            active_page="admin_students",
        )

    @app.route("/admin/alunos", endpoint="admin_students")
    @admin_required
    def admin_students():
        q = search_arg()
        shift = filter_arg("shift")
        students = load_list(service.list, "Erro ao carregar alunos")
        filtered = filter_records(students, search=q, fields=("name", "email", "cpf", "course"), shift=shift)
        return render_template(
            "admin/alunos.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            shift=shift,
            shifts=list(StudentShift),
            counts=service.shift_counts(students),
            total=len(students),
            active_page="admin_students",
        )

    @app.route("/admin/alunos/novo", methods=["GET", "POST"], endpoint="admin_student_new")
    @admin_required
    def admin_student_new():
        if request.method == "POST":
            try:
                service.create(**_form("route", "enrollment_date"))
                flash("Aluno criado com sucesso!", "success")
                return redirect(url_for("admin_students"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create student failed")
                flash("Erro ao salvar aluno", "danger")

        return _render_form(None)

    @app.route("/admin/alunos/<int:student_id>/editar", methods=["GET", "POST"], endpoint="admin_student_edit")
    @admin_required
    def admin_student_edit(student_id: int):
        student = service.get(student_id)
        if request.method == "POST":
            try:
                service.update(student_id, **_form("status"))
                flash("Aluno atualizado com sucesso!", "success")
                return redirect(url_for("admin_students"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("update student %s failed", student_id)
                flash("Erro ao salvar aluno", "danger")

        return _render_form(student)

    @app.route("/admin/alunos/<int:student_id>/excluir", methods=["POST"], endpoint="admin_student_delete")
    @admin_required
    def admin_student_delete(student_id: int):
        try:
            service.delete(student_id)
            flash("Aluno excluído com sucesso!", "success")
        except ApiError:
            logger.exception("delete student %s failed", student_id)
            flash("Erro ao excluir aluno", "danger")

        return redirect(url_for("admin_students"))
