from __future__ import annotations

from typing import Iterable, List, Optional

from ..backend.cache import QueryCache, invalidates
from ..common.listing import count_by
from ..common.validators import optional_choice, optional_date, optional_int, optional_text, require_email, require_non_empty
from ..core.enums import StudentShift
from ..core.exceptions import NotFoundError
from .model import Student
from .repository import StudentRepository


class StudentService:
    def __init__(self, students: StudentRepository, cache: QueryCache):
        self._students = students
        self._cache = cache

    def list(self, status: Optional[str] = None, route: Optional[int] = None) -> List[Student]:
        status = optional_text(status)
        route = optional_int(route, "Rota")
        return self._cache.fetch(("students", status, route), lambda: list(self._students.list(status=status, route=route)))

    def list_by_route(self, route_id: int) -> List[Student]:
        """Students whose ``route`` field points at ``route_id`` (filtered client-side)."""
        if not route_id:
            return []
        key = str(int(route_id))
        return self._cache.fetch(
            ("students", "byRoute", int(route_id)),
            lambda: [s for s in self.list() if s.route is not None and str(s.route) == key],
        )

    def get(self, student_id: int) -> Student:
        student = self._cache.fetch(("students", int(student_id)), lambda: self._students.get_by_id(student_id))
        if not student:
            raise NotFoundError("Aluno não encontrado")
        return student

    @staticmethod
    def _common(*, name: str, email: str, phone: str = "", cpf: str = "", address: str = "", city: str = "", course: str = "", shift: str = "") -> dict:
        return {
            "name": require_non_empty(name, "Nome"),
            "email": require_email(email),
            "phone": optional_text(phone),
            "cpf": optional_text(cpf),
            "address": optional_text(address),
            "city": optional_text(city),
            "course": optional_text(course),
            "shift": optional_choice(shift, StudentShift, "Turno"),
        }

    @invalidates("students")
    def create(self, *, route: str = "", enrollment_date: str = "", **form) -> Optional[Student]:
        data = self._common(**form)
        data["route"] = optional_text(route)
        data["enrollment_date"] = optional_date(enrollment_date, "Data de matrícula")
        return self._students.create(data)

    @invalidates("students")
    def update(self, student_id: int, *, status: str = "", **form) -> Optional[Student]:
        data = self._common(**form)
        data["status"] = optional_text(status)
        return self._students.update(int(student_id), data)

    @invalidates("students")
    def delete(self, student_id: int) -> None:
        self._students.delete(int(student_id))

    @staticmethod
    def shift_counts(students: Iterable[Student]) -> dict:
        counts = count_by(students, "shift")
        return {s.value: counts.get(s.value, 0) for s in StudentShift}
