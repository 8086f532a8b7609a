from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Driver:
    id: Optional[int]
    name: str
    email: str
    phone: Optional[str] = None
    cpf: Optional[str] = None
    cnh: Optional[str] = None
    vehicle: Optional[str] = None
    license_expiry: Optional[date] = None
    birth_date: Optional[date] = None
    status: Optional[str] = None
    created_at: Optional[str] = None


@dataclass(frozen=True)
class LicenseAlert:
    """CNH vencida (``days_left`` < 0) ou perto de vencer."""

    driver: Driver
    days_left: int

    @property
    def expired(self) -> bool:
        return self.days_left < 0
