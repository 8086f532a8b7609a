"""Helpers shared by the Flask controllers (auth guards, query-string parsing)."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, Optional

from flask import flash, redirect, render_template, request, session, url_for

from ..core.enums import Role
from ..core.exceptions import ApiError

logger = logging.getLogger(__name__)

SESSION_KEYS = ("user_id", "name", "email", "phone", "role", "token", "refresh_token")


def current_user() -> dict:
    return {
        "user_id": session.get("user_id"),
        "full_name": session.get("name"),
        "email": session.get("email"),
        "phone": session.get("phone"),
        "role": session.get("role"),
    }


def clear_auth_session() -> None:
    for key in SESSION_KEYS:
        session.pop(key, None)


def role_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not session.get("token"):
                flash("Faça login para continuar!", "warning")
                return redirect(url_for("login"))

            if session.get("role") not in allowed:
                return render_template("403.html", current_user=current_user()), 403

            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
driver_required = role_required(Role.DRIVER)
student_required = role_required(Role.STUDENT)


def search_arg() -> str:
    return (request.args.get("q") or "").strip()


def page_arg() -> int:
    try:
        return int(request.args.get("page", 1))
    except ValueError:
        return 1


def filter_arg(name: str) -> Optional[str]:
    value = (request.args.get(name) or "").strip()
    return value or None


def home_for_role(role: Optional[str]) -> str:
    if role == Role.DRIVER.value:
        return url_for("driver_dashboard")
    if role == Role.STUDENT.value:
        return url_for("student_profile")
    return url_for("admin_dashboard")


def load_list(loader: Callable[[], list], error_message: str) -> list:
    """Run a list query for a page; on backend failure flash and show an empty table."""
    try:
        return loader()
    except ApiError:
        logger.exception("failed to load list: %s", error_message)
        flash(error_message, "danger")
        return []


def display_label(value) -> str:
    """Jinja filter: enum members show their label, ``None`` shows nothing."""
    if value is None:
        return ""
    return str(getattr(value, "value", value))
