from __future__ import annotations

import pytest

from src.unibus_admin.unibus_admin.auth.service import AuthService, parse_role
from src.unibus_admin.unibus_admin.core.enums import Role
from src.unibus_admin.unibus_admin.core.exceptions import ApiError, AuthenticationError, ValidationError

LOGIN_BODY = {
    "token": "jwt-123",
    "refreshToken": "r-1",
    "user": {"id": 7, "name": "Carla", "email": "carla@unibus.com", "role": "Administrador", "phone": "11999990000"},
}


class FakeAuthRepo:
    def __init__(self, body=None, error=None):
        self._body = body
        self._error = error
        self.calls = []

    def login(self, email, password):
        self.calls.append(("login", email))
        if self._error:
            raise self._error
        return self._body

    def logout(self):
        self.calls.append(("logout",))
        if self._error:
            raise self._error

    def reset_password(self, email):
        self.calls.append(("reset", email))

    def change_password(self, current_password, new_password):
        self.calls.append(("password", current_password, new_password))

    def update_profile(self, data):
        self.calls.append(("profile", data))
        return data


def test_authenticate_builds_session_user():
    user = AuthService(FakeAuthRepo(LOGIN_BODY)).authenticate("carla@unibus.com", "secret1")

    assert user.user_id == 7
    assert user.role == Role.ADMIN
    assert user.token == "jwt-123"
    assert user.refresh_token == "r-1"
    assert user.phone == "11999990000"


@pytest.mark.parametrize("status", [400, 403])
def test_rejected_credentials_become_authentication_error(status):
    service = AuthService(FakeAuthRepo(error=ApiError("Bad Request", status_code=status)))

    with pytest.raises(AuthenticationError, match="Email ou senha inválidos"):
        service.authenticate("carla@unibus.com", "secret1")


def test_server_errors_propagate():
    service = AuthService(FakeAuthRepo(error=ApiError("boom", status_code=500)))

    with pytest.raises(ApiError) as exc:
        service.authenticate("carla@unibus.com", "secret1")

    assert not isinstance(exc.value, AuthenticationError)


def test_short_password_never_reaches_backend():
    repo = FakeAuthRepo(LOGIN_BODY)

    with pytest.raises(ValidationError):
        AuthService(repo).authenticate("carla@unibus.com", "123")

    assert repo.calls == []


def test_login_response_without_token_is_rejected():
    with pytest.raises(AuthenticationError):
        AuthService(FakeAuthRepo({"user": {"id": 1, "role": "admin"}})).authenticate("carla@unibus.com", "secret1")


def test_unknown_role_is_rejected():
    with pytest.raises(AuthenticationError):
        parse_role("gerente")
    assert parse_role(" Student ") == Role.STUDENT
    assert parse_role("motorista") == Role.DRIVER


def test_logout_ignores_backend_failure():
    repo = FakeAuthRepo(error=ApiError("down", status_code=503))

    AuthService(repo).logout("jwt-123")
    AuthService(repo).logout(None)

    assert repo.calls == [("logout",)]


def test_change_password_rules():
    repo = FakeAuthRepo()
    service = AuthService(repo)

    with pytest.raises(ValidationError, match="não coincidem"):
        service.change_password("old-pass", "new-pass", "other")
    with pytest.raises(ValidationError):
        service.change_password("old-pass", "123", "123")

    service.change_password("old-pass", "new-pass", "new-pass")
    assert repo.calls == [("password", "old-pass", "new-pass")]


def test_update_profile_checks_phone_digits():
    service = AuthService(FakeAuthRepo())

    with pytest.raises(ValidationError, match="Telefone"):
        service.update_profile(name="Carla", email="carla@unibus.com", phone="(11) 9999")

    data = service.update_profile(name=" Carla ", email="carla@unibus.com", phone="(11) 99999-0000")
    assert data == {"name": "Carla", "email": "carla@unibus.com", "phone": "(11) 99999-0000"}


def test_password_reset_validates_email():
    repo = FakeAuthRepo()

    with pytest.raises(ValidationError):
        AuthService(repo).request_password_reset("nope")

    AuthService(repo).request_password_reset("ana@fatec.br")
    assert repo.calls == [("reset", "ana@fatec.br")]
