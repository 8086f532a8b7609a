from __future__ import annotations

from typing import List, Optional

from ..backend.cache import QueryCache, invalidates
from ..common.validators import optional_int, optional_text, require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..drivers.service import DriverService
from ..students.service import StudentService
from .model import Admin, DirectoryEntry
from .repository import AdminRepository


class AdminService:
    def __init__(self, admins: AdminRepository, cache: QueryCache):
        self._admins = admins
        self._cache = cache

    def list(self) -> List[Admin]:
        return self._cache.fetch(("admins",), lambda: list(self._admins.list()))

    @staticmethod
    def _payload(*, name: str, email: str, password: str, phone: str = "", access_level="1") -> dict:
        return {
            "name": require_non_empty(name, "Nome"),
            "email": require_email(email),
            "password": require_min_length(password, "Senha", MIN_PASSWORD_LENGTH),
            "phone": optional_text(phone),
            "access_level": optional_int(access_level, "Nível de acesso") or 1,
        }

    @invalidates("admins")
    def create(self, **form) -> Optional[Admin]:
        return self._admins.create(self._payload(**form))

    @invalidates("admins")
    def create_first(self, **form) -> Optional[Admin]:
        return self._admins.create_first(self._payload(**form))


class UserDirectoryService:
    """Unified view over students, drivers and admins (the "Usuários" page)."""

    def __init__(self, students: StudentService, drivers: DriverService, admins: AdminService):
        self._students = students
        self._drivers = drivers
        self._admins = admins

    def list_all(self) -> List[DirectoryEntry]:
        rows: List[DirectoryEntry] = []
        for s in self._students.list():
            rows.append(DirectoryEntry(kind=Role.STUDENT.value, id=s.id, name=s.name, email=s.email, cpf=s.cpf, phone=s.phone, status=s.status))
        for d in self._drivers.list():
            rows.append(DirectoryEntry(kind=Role.DRIVER.value, id=d.id, name=d.name, email=d.email, cpf=d.cpf, phone=d.phone, status=d.status))
        for a in self._admins.list():
            rows.append(DirectoryEntry(kind=Role.ADMIN.value, id=a.id, name=a.name, email=a.email, phone=a.phone, status=a.status))
        return rows

    def delete(self, kind: str, user_id: int) -> None:
        if kind == Role.STUDENT.value:
            self._students.delete(user_id)
        elif kind == Role.DRIVER.value:
            self._drivers.delete(user_id)
        else:
            raise AuthorizationError("Administradores não podem ser excluídos por esta tela")
