from __future__ import annotations

from typing import Any, Mapping, Optional

from ..backend.http_base import HttpResourceRepository, field, to_enum, to_int, to_text
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from .model import AttendanceRecord, AttendanceSummary


class HttpAttendanceRepository(HttpResourceRepository[AttendanceRecord]):
    endpoint = "/attendance"
    field_map = {
        "route_id": "routeId",
        "student_id": "studentId",
        "status": "status",
        "observation": "observation",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> AttendanceRecord:
        date_s = to_text(field(raw, "date"))
        return AttendanceRecord(
            id=to_int(field(raw, "id")),
            student_id=to_int(field(raw, "studentId")),
            route_id=to_int(field(raw, "routeId")),
            status=to_enum(AttendanceStatus, field(raw, "status")) or "",
            date=date_s[:10] if date_s else None,
            student_name=to_text(field(raw, "studentName")),
            route_name=to_text(field(raw, "routeName")),
            observation=to_text(field(raw, "observation")),
            created_at=to_text(field(raw, "createdAt")),
        )

    def student_summary(self, student_id: int) -> Optional[AttendanceSummary]:
        try:
            body = self._client.get(f"{self.endpoint}/student/{int(student_id)}/summary")
        except NotFoundError:
            return None
        if not isinstance(body, Mapping):
            return None
        present = to_int(field(body, "present") or field(body, "presentCount")) or 0
        absent = to_int(field(body, "absent") or field(body, "absentCount")) or 0
        total = to_int(field(body, "total") or field(body, "totalRecords")) or present + absent
        return AttendanceSummary(total=total, present=present, absent=absent)
