from __future__ import annotations

from typing import List, Optional

from ..backend.cache import QueryCache, invalidates
from ..common.validators import optional_int
from ..core.exceptions import NotFoundError, ValidationError
from .model import CONFIRMED, NOT_CONFIRMED, Enrollment
from .repository import EnrollmentRepository


class EnrollmentService:
    """Student/route links. Writes also drop student and route caches, which carry enrolment counts."""

    def __init__(self, enrollments: EnrollmentRepository, cache: QueryCache):
        self._enrollments = enrollments
        self._cache = cache

    def list(self) -> List[Enrollment]:
        return self._cache.fetch(("enrollments",), lambda: list(self._enrollments.list()))

    def get(self, enrollment_id: int) -> Enrollment:
        e = self._cache.fetch(("enrollments", int(enrollment_id)), lambda: self._enrollments.get_by_id(enrollment_id))
        if not e:
            raise NotFoundError("Vínculo aluno/rota não encontrado")
        return e

    def by_route(self, route_id: int) -> List[Enrollment]:
        return self._cache.fetch(
            ("enrollments", "route", int(route_id)), lambda: list(self._enrollments.by_route(int(route_id)))
        )

    def by_student(self, student_id: int) -> List[Enrollment]:
        return self._cache.fetch(
            ("enrollments", "student", int(student_id)), lambda: list(self._enrollments.by_student(int(student_id)))
        )

    @staticmethod
    def _payload(*, route_id, student_id, boarding_point_id="", confirmed=False) -> dict:
        route = optional_int(route_id, "Rota")
        if not route:
            raise ValidationError("Rota é obrigatória")
        student = optional_int(student_id, "Aluno")
        if not student:
            raise ValidationError("Aluno é obrigatório")
        return {
            "route_id": route,
            "student_id": student,
            "boarding_point_id": optional_int(boarding_point_id, "Ponto de embarque"),
            "confirmed": CONFIRMED if confirmed else NOT_CONFIRMED,
        }

    @invalidates("enrollments", "students", "routes")
    def create(self, **form) -> Optional[Enrollment]:
        return self._enrollments.create(self._payload(**form))

    @invalidates("enrollments", "students", "routes")
    def update(self, enrollment_id: int, **form) -> Optional[Enrollment]:
        return self._enrollments.update(int(enrollment_id), self._payload(**form))

    @invalidates("enrollments", "students", "routes")
    def confirm(self, enrollment_id: int) -> Optional[Enrollment]:
        return self._enrollments.confirm(int(enrollment_id))

    @invalidates("enrollments", "students", "routes")
    def cancel(self, enrollment_id: int) -> Optional[Enrollment]:
        return self._enrollments.cancel(int(enrollment_id))

    @invalidates("enrollments", "students", "routes")
    def delete(self, enrollment_id: int) -> None:
        self._enrollments.delete(int(enrollment_id))
