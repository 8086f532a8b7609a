from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from ..backend.http_base import field, to_int, to_text
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, MIN_PHONE_DIGITS
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthenticationError, ValidationError
from .model import SessionUser
from .repository import AuthRepository

logger = logging.getLogger(__name__)

# The backend is not consistent about role labels.
_ROLE_ALIASES = {
    "admin": Role.ADMIN,
    "administrador": Role.ADMIN,
    "motorista": Role.DRIVER,
    "driver": Role.DRIVER,
    "aluno": Role.STUDENT,
    "student": Role.STUDENT,
}


def parse_role(value: Any) -> Role:
    role = _ROLE_ALIASES.get(str(value or "").strip().lower())
    if role is None:
        raise AuthenticationError("Perfil de usuário não suportado")
    return role


class AuthService:
    """Use cases: login, logout, password reset and the logged user's profile."""

    def __init__(self, auth: AuthRepository):
        self._auth = auth

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_email(email)
        require_min_length(password, "Senha", MIN_PASSWORD_LENGTH)

        try:
            body = self._auth.login(email, password)
        except AuthenticationError as e:
            raise AuthenticationError("Email ou senha inválidos") from e
        except ApiError as e:
            if e.status_code in (400, 403):
                raise AuthenticationError("Email ou senha inválidos") from e
            raise

        token = to_text(field(body or {}, "token"))
        user = field(body or {}, "user")
        if not token or not isinstance(user, Mapping):
            raise AuthenticationError("Resposta de login inválida")

        user_id = to_int(field(user, "id"))
        if user_id is None:
            raise AuthenticationError("Resposta de login inválida")

        return SessionUser(
            user_id=user_id,
            name=to_text(field(user, "name")) or email,
            email=to_text(field(user, "email")) or email,
            role=parse_role(field(user, "role")),
            token=token,
            refresh_token=to_text(field(body, "refreshToken")),
            phone=to_text(field(user, "phone")),
        )

    def logout(self, token: Optional[str]) -> None:
        """Tell the backend to drop the token; local logout happens regardless."""
        if not token:
            return
        try:
            self._auth.logout()
        except ApiError:
            logger.warning("backend logout failed", exc_info=True)

    def request_password_reset(self, email: str) -> None:
        self._auth.reset_password(require_email(email))

    def change_password(self, current_password: str, new_password: str, confirm_password: str) -> None:
        require_non_empty(current_password, "Senha atual")
        require_min_length(new_password, "Nova senha", MIN_PASSWORD_LENGTH)
        if new_password != confirm_password:
            raise ValidationError("Senhas não coincidem")
        self._auth.change_password(current_password, new_password)

    def update_profile(self, *, name: str, email: str, phone: str) -> dict:
        name = (name or "").strip()
        if len(name) < 2:
            raise ValidationError("Nome deve ter pelo menos 2 caracteres")
        digits = re.sub(r"\D", "", phone or "")
        if len(digits) < MIN_PHONE_DIGITS:
            raise ValidationError(f"Telefone deve ter pelo menos {MIN_PHONE_DIGITS} dígitos")
        data = {"name": name, "email": require_email(email), "phone": (phone or "").strip()}
        self._auth.update_profile(data)
        return data
