from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.listing import filter_records, paginate
from ..common.web import admin_required, filter_arg, load_list, page_arg, search_arg, student_required
from ..container import Container
from ..core.enums import NotificationType
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)

FORM_FIELDS = ("title", "message", "type")


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    def _form() -> dict:
        return {name: request.form.get(name, "") for name in FORM_FIELDS}

    def _render_form(notification):
        return render_template(
            "admin/notificacao_form.html",
            notification=notification,
            form=request.form,
            types=list(NotificationType),
            students=load_list(container.student_service.list, "Erro ao carregar alunos") if notification is None else [],
            active_page="admin_notifications",
        )

    @app.route("/admin/notificacoes", endpoint="admin_notifications")
    @admin_required
    def admin_notifications():
        q = search_arg()
        kind = filter_arg("type")
        notifications = load_list(service.list, "Erro ao carregar notificações")
        filtered = filter_records(notifications, search=q, fields=("title", "message"), type=kind)
        return render_template(
            "admin/notificacoes.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            type=kind,
            types=list(NotificationType),
            counts=service.counts(notifications),
            active_page="admin_notifications",
        )

    @app.route("/admin/notificacoes/nova", methods=["GET", "POST"], endpoint="admin_notification_new")
    @admin_required
    def admin_notification_new():
        if request.method == "POST":
            try:
                service.create(target_ids=request.form.getlist("target_ids"), **_form())
                flash("Notificação enviada com sucesso!", "success")
                return redirect(url_for("admin_notifications"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create notification failed")
                flash("Erro ao enviar notificação", "danger")

        return _render_form(None)

    @app.route(
        "/admin/notificacoes/<int:notification_id>/editar", methods=["GET", "POST"], endpoint="admin_notification_edit"
    )
    @admin_required
    def admin_notification_edit(notification_id: int):
        notification = service.get(notification_id)
        if request.method == "POST":
            try:
                service.update(notification_id, **_form())
                flash("Notificação atualizada com sucesso!", "success")
                return redirect(url_for("admin_notifications"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("update notification %s failed", notification_id)
                flash("Erro ao salvar notificação", "danger")

        return _render_form(notification)

    @app.route(
        "/admin/notificacoes/<int:notification_id>/lida", methods=["POST"], endpoint="admin_notification_read"
    )
    @admin_required
    def admin_notification_read(notification_id: int):
        try:
            service.mark_as_read(notification_id)
            flash("Notificação marcada como lida", "success")
        except ApiError:
            logger.exception("mark notification %s read failed", notification_id)
            flash("Erro ao marcar notificação como lida", "danger")

        return redirect(url_for("admin_notifications"))

    @app.route(
        "/admin/notificacoes/<int:notification_id>/excluir", methods=["POST"], endpoint="admin_notification_delete"
    )
    @admin_required
    def admin_notification_delete(notification_id: int):
        try:
            service.delete(notification_id)
            flash("Notificação excluída com sucesso!", "success")
        except ApiError:
            logger.exception("delete notification %s failed", notification_id)
            flash("Erro ao excluir notificação", "danger")

        return redirect(url_for("admin_notifications"))

    @app.route("/aluno/notificacoes", endpoint="student_notifications")
    @student_required
    def student_notifications():
        user_id = session.get("user_id")
        kind = filter_arg("type")
        notifications = load_list(lambda: service.for_student(user_id), "Erro ao carregar notificações")
        filtered = filter_records(notifications, type=kind)
        return render_template(
            "aluno/notificacoes.html",
            notifications=filtered,
            type=kind,
            types=list(NotificationType),
            counts=service.counts(notifications, user_id),
            user_id=user_id,
            active_page="student_notifications",
        )

    @app.route(
        "/aluno/notificacoes/<int:notification_id>/lida", methods=["POST"], endpoint="student_notification_read"
    )
    @student_required
    def student_notification_read(notification_id: int):
        try:
            service.mark_as_read(notification_id)
        except ApiError:
            logger.exception("mark notification %s read failed", notification_id)
            flash("Erro ao marcar notificação como lida", "danger")

        return redirect(url_for("student_notifications"))
