from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    id: Optional[int]
    name: str
    email: str
    phone: Optional[str] = None
    cpf: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    course: Optional[str] = None
    shift: Optional[str] = None
    route: Optional[str] = None
    enrollment_date: Optional[str] = None
    status: Optional[str] = None
    payment_status: Optional[str] = None
    institution: Optional[str] = None
