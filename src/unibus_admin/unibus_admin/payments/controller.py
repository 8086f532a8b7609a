from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.datetime_utils import month_label, today
from ..common.listing import filter_records, paginate
from ..common.web import admin_required, filter_arg, load_list, page_arg, search_arg, student_required
from ..container import Container
from ..core.enums import PaymentMethod, PaymentStatus
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("student_name", "student_id", "id")
UPDATE_FIELDS = ("amount", "status", "payment_method", "payment_date")


def register(app: Flask, container: Container) -> None:
    service = container.payment_service

    def _form(*extra: str) -> dict:
        return {name: request.form.get(name, "") for name in UPDATE_FIELDS + extra}

    def _load_named():
        payments = load_list(service.list, "Erro ao carregar pagamentos")
        names = {}
        if any(not p.student_name for p in payments):
            names = {s.id: s.name for s in load_list(container.student_service.list, "Erro ao carregar alunos")}
        return service.with_student_names(payments, names)

    def _filtered():
        q = search_arg()
        status = filter_arg("status")
        month = filter_arg("month")
        payments = _load_named()
        filtered = filter_records(payments, search=q, fields=SEARCH_FIELDS, status=status, month=month)
        return payments, filtered, q, status, month

    def _render_form(payment):
        students = load_list(container.student_service.list, "Erro ao carregar alunos")
        return render_template(
            "admin/pagamento_form.html",
            payment=payment,
            form=request.form,
            students=students,
            statuses=list(PaymentStatus),
            methods=list(PaymentMethod),
            default_month=today().strftime("%Y-%m"),
            active_page="admin_payments",
        )

    @app.route("/admin/pagamentos", endpoint="admin_payments")
    @admin_required
    def admin_payments():
        payments, filtered, q, status, month = _filtered()
        return render_template(
            "admin/pagamentos.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            status=status,
            month=month,
            statuses=list(PaymentStatus),
            methods=list(PaymentMethod),
            months=service.months(payments),
            summary=service.summary(filtered),
            month_label=month_label,
            active_page="admin_payments",
        )

    @app.route("/admin/pagamentos.csv", endpoint="admin_payments_csv")
    @admin_required
    def admin_payments_csv():
        _, filtered, _, _, month = _filtered()
        filename = f"pagamentos_{month or today().strftime('%Y%m%d')}.csv"
        return app.response_class(
            service.to_csv(filtered),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/admin/pagamentos/novo", methods=["GET", "POST"], endpoint="admin_payment_new")
    @admin_required
    def admin_payment_new():
        if request.method == "POST":
            try:
                service.create(**_form("student_id", "month"))
                flash("Pagamento criado com sucesso!", "success")
                return redirect(url_for("admin_payments"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create payment failed")
                flash("Erro ao salvar pagamento", "danger")

        return _render_form(None)

    @app.route("/admin/pagamentos/<int:payment_id>/editar", methods=["GET", "POST"], endpoint="admin_payment_edit")
    @admin_required
    def admin_payment_edit(payment_id: int):
        payment = service.get(payment_id)
        if request.method == "POST":
            try:
                service.update(payment_id, **_form())
                flash("Pagamento atualizado com sucesso!", "success")
                return redirect(url_for("admin_payments"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("update payment %s failed", payment_id)
                flash("Erro ao salvar pagamento", "danger")

        return _render_form(payment)

    @app.route("/admin/pagamentos/<int:payment_id>/confirmar", methods=["POST"], endpoint="admin_payment_confirm")
    @admin_required
    def admin_payment_confirm(payment_id: int):
        try:
            service.confirm(payment_id, request.form.get("payment_method", ""))
            flash("Pagamento marcado como pago!", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except ApiError:
            logger.exception("confirm payment %s failed", payment_id)
            flash("Erro ao confirmar pagamento", "danger")

        return redirect(url_for("admin_payments"))

    @app.route("/admin/pagamentos/<int:payment_id>/excluir", methods=["POST"], endpoint="admin_payment_delete")
    @admin_required
    def admin_payment_delete(payment_id: int):
        try:
            service.delete(payment_id)
            flash("Pagamento excluído com sucesso!", "success")
        except ApiError:
            logger.exception("delete payment %s failed", payment_id)
            flash("Erro ao excluir pagamento", "danger")

        return redirect(url_for("admin_payments"))

    @app.route("/aluno/pagamentos", endpoint="student_payments")
    @student_required
    def student_payments():
        status = filter_arg("status")
        payments = load_list(
            lambda: service.list(student_id=session.get("user_id"), status=status),
            "Erro ao carregar pagamentos",
        )
        return render_template(
            "aluno/pagamentos.html",
            payments=payments,
            status=status,
            statuses=list(PaymentStatus),
            summary=service.summary(payments),
            month_label=month_label,
            active_page="student_payments",
        )
