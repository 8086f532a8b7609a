from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.listing import count_by, filter_records, paginate
from ..common.web import admin_required, filter_arg, load_list, page_arg, search_arg
from ..container import Container
from ..core.exceptions import ApiError, AuthorizationError, ValidationError

logger = logging.getLogger(__name__)

FORM_FIELDS = ("name", "email", "password", "phone", "access_level")


def register(app: Flask, container: Container) -> None:
    def _form() -> dict:
        return {name: request.form.get(name, "") for name in FORM_FIELDS}

    @app.route("/admin/usuarios", endpoint="admin_users")
    @admin_required
    def admin_users():
        q = search_arg()
        kind = filter_arg("kind")
        users = load_list(container.directory_service.list_all, "Erro ao carregar usuários")
        filtered = filter_records(users, search=q, fields=("name", "email", "cpf"), kind=kind)
        return render_template(
            "admin/usuarios.html",
            page=paginate(filtered, page_arg(), app.config["PAGE_SIZE"]),
            q=q,
            kind=kind,
            counts=count_by(users, "kind"),
            total=len(users),
            active_page="admin_users",
        )

    @app.route("/admin/usuarios/<kind>/<int:user_id>/excluir", methods=["POST"], endpoint="admin_user_delete")
    @admin_required
    def admin_user_delete(kind: str, user_id: int):
        try:
            container.directory_service.delete(kind, user_id)
            flash("Usuário excluído com sucesso!", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except ApiError:
            logger.exception("delete %s %s failed", kind, user_id)
            flash("Erro ao excluir usuário. Tente novamente.", "danger")

        return redirect(url_for("admin_users"))

    @app.route("/admin/administradores/novo", methods=["GET", "POST"], endpoint="admin_admin_new")
    @admin_required
    def admin_admin_new():
        if request.method == "POST":
            try:
                container.admin_service.create(**_form())
                flash("Administrador criado com sucesso!", "success")
                return redirect(url_for("admin_users", kind="admin"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError:
                logger.exception("create admin failed")
                flash("Erro ao salvar usuário. Tente novamente.", "danger")

        return render_template("admin/admin_form.html", form=request.form, first_admin=False, active_page="admin_users")

    @app.route("/primeiro-acesso", methods=["GET", "POST"], endpoint="first_admin")
    def first_admin():
        if request.method == "POST":
            try:
                container.admin_service.create_first(**_form())
                flash("Administrador inicial criado. Faça login.", "success")
                return redirect(url_for("login"))
            except ValidationError as e:
                flash(str(e), "danger")
            except ApiError as e:
                logger.warning("create first admin refused: %s", e)
                flash("Erro ao criar administrador inicial", "danger")

        return render_template("admin/admin_form.html", form=request.form, first_admin=True)
