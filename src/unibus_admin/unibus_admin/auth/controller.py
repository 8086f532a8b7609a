from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import admin_required, clear_auth_session, current_user, home_for_role, student_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import ApiError, AuthenticationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.auth_service
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    def _store_profile(data: dict) -> None:
        session["name"] = data["name"]
        session["email"] = data["email"]
        session["phone"] = data["phone"]

    def _update_profile():
        try:
            data = service.update_profile(
                name=request.form.get("name", ""),
                email=request.form.get("email", ""),
                phone=request.form.get("phone", ""),
            )
            _store_profile(data)
            flash("Perfil atualizado com sucesso!", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except ApiError:
            logger.exception("update profile failed")
            flash("Erro ao atualizar perfil. Tente novamente.", "danger")

    def _change_password():
        try:
            service.change_password(
                request.form.get("current_password", ""),
                request.form.get("new_password", ""),
                request.form.get("confirm_password", ""),
            )
            flash("Senha alterada com sucesso!", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except ApiError:
            logger.exception("change password failed")
            flash("Erro ao alterar senha. Verifique a senha atual.", "danger")

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if session.get("token"):
            return redirect(home_for_role(session.get("role")))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                s_user = service.authenticate(email, password)

                session.permanent = bool(remember)
                session["user_id"] = s_user.user_id
                session["name"] = s_user.name
                session["email"] = s_user.email
                session["phone"] = s_user.phone
                session["role"] = s_user.role.value
                session["token"] = s_user.token
                session["refresh_token"] = s_user.refresh_token

                logger.info("login ok user_id=%s role=%s", s_user.user_id, s_user.role.value)
                flash("Login realizado com sucesso!", "success")
                return redirect(home_for_role(s_user.role.value))
            except (ValidationError, AuthenticationError) as e:
                flash(str(e), "danger")
            except ApiError as e:
                logger.exception("login failed")
                if app.config.get("DEBUG"):
                    flash(f"Erro no servidor ao fazer login: {e}", "danger")
                else:
                    flash("Erro no servidor ao fazer login", "danger")

        return render_template("login.html", email=request.form.get("email", ""))

    @app.route("/logout", endpoint="logout")
    def logout():
        service.logout(session.get("token"))
        session.clear()
        flash("Você saiu do sistema.", "info")
        return redirect(url_for("login"))

    @app.route("/recuperar-senha", methods=["GET", "POST"], endpoint="password_reset")
    def password_reset():
        sent = False
        if request.method == "POST":
            try:
                service.request_password_reset(request.form.get("email", ""))
                sent = True
            except ValidationError as e:
                flash(str(e), "danger")
            except NotFoundError:
                # Same answer whether or not the email exists.
                sent = True
            except ApiError:
                logger.exception("password reset failed")
                flash("Erro ao enviar instruções. Tente novamente.", "danger")

        return render_template("recuperar_senha.html", sent=sent, email=request.form.get("email", ""))

    @app.route("/admin/configuracoes", methods=["GET", "POST"], endpoint="admin_settings")
    @admin_required
    def admin_settings():
        if request.method == "POST":
            if request.form.get("action") == "password":
                _change_password()
            else:
                _update_profile()
            return redirect(url_for("admin_settings"))

        return render_template("admin/configuracoes.html", user=current_user(), active_page="admin_settings")

    @app.route("/aluno/perfil", methods=["GET", "POST"], endpoint="student_profile")
    @student_required
    def student_profile():
        if request.method == "POST":
            if request.form.get("action") == "password":
                _change_password()
            else:
                _update_profile()
            return redirect(url_for("student_profile"))

        user_id = int(session.get("user_id") or 0)
        student = None
        summary = None
        try:
            student = container.student_service.get(user_id)
        except NotFoundError:
            flash("Não foi possível carregar os dados do perfil. Tente novamente mais tarde.", "warning")
        except ApiError:
            logger.exception("load student profile %s failed", user_id)
            flash("Não foi possível carregar os dados do perfil. Tente novamente mais tarde.", "danger")
        try:
            summary = container.attendance_service.student_summary(user_id)
        except ApiError:
            logger.exception("load attendance summary %s failed", user_id)

        return render_template(
            "aluno/perfil.html",
            user=current_user(),
            student=student,
            attendance=summary,
            active_page="student_profile",
        )
