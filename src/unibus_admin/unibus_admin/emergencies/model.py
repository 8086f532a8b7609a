from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Emergency:
    id: Optional[int]
    type: str
    description: str
    location: Optional[str] = None
    status: Optional[str] = None
    route_id: Optional[int] = None
    driver_id: Optional[int] = None
    reported_at: Optional[str] = None
    resolved_at: Optional[str] = None
