from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BoardingPoint:
    id: Optional[int]
    name: str
    address: str
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    status: Optional[str] = None
    routes: int = 0
    created_at: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None
