from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Payment:
    id: Optional[int]
    student_id: Optional[int]
    amount: Decimal
    month: Optional[str]
    status: str
    student_name: Optional[str] = None
    year: Optional[int] = None
    payment_method: Optional[str] = None
    payment_date: Optional[str] = None
    due_date: Optional[str] = None


@dataclass(frozen=True)
class PaymentSummary:
    """Totais exibidos nos cards da tela de pagamentos."""

    total_amount: Decimal
    paid_amount: Decimal
    pending_amount: Decimal
    overdue_amount: Decimal
    pending_count: int
    overdue_count: int
