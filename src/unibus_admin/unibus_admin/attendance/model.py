from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    id: Optional[int]
    student_id: Optional[int]
    route_id: Optional[int]
    status: str
    date: Optional[str] = None
    student_name: Optional[str] = None
    route_name: Optional[str] = None
    observation: Optional[str] = None
    created_at: Optional[str] = None


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    present: int
    absent: int

    @property
    def rate(self) -> float:
        """Percentual de presença (0-100)."""
        if not self.total:
            return 0.0
        return round(self.present * 100.0 / self.total, 1)
