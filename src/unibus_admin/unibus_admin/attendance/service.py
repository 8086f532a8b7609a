from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from ..backend.cache import QueryCache, invalidates
from ..common.validators import optional_int, optional_text, require_choice
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import AttendanceRecord, AttendanceSummary
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, cache: QueryCache):
        self._attendance = attendance
        self._cache = cache

    def list(self, student_id: Optional[int] = None, route_id: Optional[int] = None) -> List[AttendanceRecord]:
        student_id = optional_int(student_id, "Aluno")
        route_id = optional_int(route_id, "Rota")
        return self._cache.fetch(
            ("attendance", student_id, route_id),
            lambda: list(self._attendance.list(studentId=student_id, routeId=route_id)),
        )

    def get(self, attendance_id: int) -> AttendanceRecord:
        rec = self._cache.fetch(("attendance", int(attendance_id)), lambda: self._attendance.get_by_id(attendance_id))
        if not rec:
            raise NotFoundError("Registro de presença não encontrado")
        return rec

    @staticmethod
    def _ids(student_id, route_id) -> tuple[int, int]:
        student = optional_int(student_id, "Aluno")
        route = optional_int(route_id, "Rota")
        if not route:
            raise ValidationError("Selecione uma rota primeiro")
        if not student:
            raise ValidationError("Aluno é obrigatório")
        return student, route

    @invalidates("attendance")
    def mark(self, *, student_id, route_id, status: str, observation: str = "") -> Optional[AttendanceRecord]:
        student, route = self._ids(student_id, route_id)
        return self._attendance.create(
            {
                "student_id": student,
                "route_id": route,
                "status": require_choice(status, AttendanceStatus, "Status"),
                "observation": optional_text(observation),
            }
        )

    def mark_route(self, route_id, statuses: Mapping[int, bool], observation: str = "") -> int:
        """Confirm attendance for every listed student of one route (``True`` = present).

        One backend call per student; the cache is dropped even when a call fails
        halfway, since earlier records were already stored.
        """
        route = optional_int(route_id, "Rota")
        if not route:
            raise ValidationError("Selecione uma rota primeiro")
        if not statuses:
            raise ValidationError("Nenhum aluno para confirmar")

        note = optional_text(observation)
        created = 0
        try:
            for student_id, present in statuses.items():
                self._attendance.create(
                    {
                        "student_id": int(student_id),
                        "route_id": route,
                        "status": AttendanceStatus.PRESENT if present else AttendanceStatus.ABSENT,
                        "observation": note,
                    }
                )
                created += 1
        finally:
            self._cache.invalidate("attendance")
        return created

    @invalidates("attendance")
    def update(self, attendance_id: int, *, status: str, observation: str = "") -> Optional[AttendanceRecord]:
        return self._attendance.update(
            int(attendance_id),
            {
                "status": require_choice(status, AttendanceStatus, "Status"),
                "observation": optional_text(observation),
            },
        )

    @invalidates("attendance")
    def delete(self, attendance_id: int) -> None:
        self._attendance.delete(int(attendance_id))

    def student_summary(self, student_id: int) -> AttendanceSummary:
        summary = self._cache.fetch(
            ("attendance", "summary", int(student_id)),
            lambda: self._attendance.student_summary(int(student_id)),
        )
        return summary or self.summarize(self.list(student_id=student_id))

    @staticmethod
    def summarize(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
        present = absent = 0
        for r in records:
            if r.status == AttendanceStatus.PRESENT:
                present += 1
            elif r.status == AttendanceStatus.ABSENT:
                absent += 1
        return AttendanceSummary(total=present + absent, present=present, absent=absent)
