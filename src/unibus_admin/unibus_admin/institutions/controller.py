from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.listing import filter_records, paginate
from ..common.web import admin_required, load_list, page_arg, search_arg
from ..container import Container
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)

FORM_FIELDS = ("nome", "cidade", "endereco", "telefone", "cep")


def register(app: Flask, container: Container) -> None:
    service = container.institution_service

    def _form() -> dict:
        return {name: request.form.get(name, "") for name in FORM_FIELDS}

    @app.route("/admin/instituicoes", endpoint="admin_institutions")
    @admin_required
    def admin_institutions():
        q = search_arg()
        institutions = load_list(service.list, "Erro ao carregar instituições")
        filtered = filter_records(institutions, search=q, fields=("nome", "cidade", "endereco"))
        return render_template(
            "admin/instituicoes.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            total=len(institutions),
            cities=len({i.cidade for i in institutions if i.cidade}),
            active_page="admin_institutions",
        )

    @app.route("/admin/instituicoes/novo", methods=["GET", "POST"], endpoint="admin_institution_new")
    @admin_required
    def admin_institution_new():
        if request.method == "POST":
            try:
                service.create(**_form())
                flash("Instituição criada com sucesso!", "success")
                return redirect(url_for("admin_institutions"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create institution failed")
                flash("Erro ao salvar instituição", "danger")

        return render_template("admin/instituicao_form.html", institution=None, form=request.form, active_page="admin_institutions")

    @app.route("/admin/instituicoes/<int:institution_id>/editar", methods=["GET", "POST"], endpoint="admin_institution_edit")
    @admin_required
    def admin_institution_edit(institution_id: int):
        institution = service.get(institution_id)
        if request.method == "POST":
            try:
                service.update(institution_id, **_form())
                flash("Instituição atualizada com sucesso!", "success")
                return redirect(url_for("admin_institutions"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("update institution %s failed", institution_id)
                flash("Erro ao salvar instituição", "danger")

        return render_template("admin/instituicao_form.html", institution=institution, form=request.form, active_page="admin_institutions")

    @app.route("/admin/instituicoes/<int:institution_id>/excluir", methods=["POST"], endpoint="admin_institution_delete")
    @admin_required
    def admin_institution_delete(institution_id: int):
        try:
            service.delete(institution_id)
            flash("Instituição excluída com sucesso!", "success")
        except ApiError:
            logger.exception("delete institution %s failed", institution_id)
            flash("Erro ao excluir instituição", "danger")

        return redirect(url_for("admin_institutions"))
