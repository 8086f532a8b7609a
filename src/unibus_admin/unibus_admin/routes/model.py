from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Route:
    id: Optional[int]
    date: Optional[str]
    direction: Optional[str]
    departure_time: Optional[str]
    status: Optional[str]
    driver_id: Optional[int] = None
    driver_name: Optional[str] = None
    name: Optional[str] = None
    capacity: Optional[int] = None
    enrolled: int = 0
    created_at: Optional[str] = None

    @property
    def label(self) -> str:
        if self.name:
            return self.name
        parts = [p for p in (self.direction, self.date, self.departure_time) if p]
        return " - ".join(str(p) for p in parts) or f"Rota #{self.id}"
