from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^\S+@\S+$")
_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} é obrigatório")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} deve ter pelo menos {min_len} caracteres")
    return value


def require_email(value: Optional[str], field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} inválido")
    return email


def optional_text(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    return v or None


def optional_int(value, field_name: str) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido")


def require_int_range(value, field_name: str, *, min_value: int, max_value: int) -> int:
    number = optional_int(value, field_name)
    if number is None or number < min_value or number > max_value:
        raise ValidationError(f"{field_name} deve estar entre {min_value} e {max_value}")
    return number


def require_positive_amount(value, field_name: str = "Valor") -> Decimal:
    """Parse a money amount typed in a form ("150", "150.5" or "150,50")."""
    raw = str(value if value is not None else "").strip().replace(",", ".")
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        raise ValidationError(f"{field_name} inválido")
    if amount <= 0:
        raise ValidationError(f"{field_name} deve ser maior que zero")
    return amount


def require_month(value: Optional[str], field_name: str = "Mês") -> str:
    v = (value or "").strip()
    if not _MONTH_RE.match(v):
        raise ValidationError(f"{field_name} inválido (AAAA-MM)")
    return v


def optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return datetime.strptime(v[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} inválida (AAAA-MM-DD)")


def require_choice(value, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{field_name} inválido")


def optional_choice(value, enum_cls: Type[E], field_name: str) -> Optional[E]:
    if value is None or value == "":
        return None
    return require_choice(value, enum_cls, field_name)
