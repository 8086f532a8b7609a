from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceSummary


class AttendanceRepository(Protocol):
    def list(self, *, studentId: Optional[int] = None, routeId: Optional[int] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError

    def student_summary(self, student_id: int) -> Optional[AttendanceSummary]:
        raise NotImplementedError
