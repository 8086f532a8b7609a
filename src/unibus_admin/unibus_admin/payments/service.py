from __future__ import annotations

import csv
import io
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, List, Mapping, Optional, Sequence

from ..backend.cache import QueryCache, invalidates
from ..common.datetime_utils import month_label
from ..common.listing import sum_by
from ..common.validators import (
    optional_choice,
    optional_date,
    optional_int,
    optional_text,
    require_choice,
    require_month,
    require_positive_amount,
)
from ..core.enums import PaymentMethod, PaymentStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Payment, PaymentSummary
from .repository import PaymentRepository

CSV_FIELDS = ("id", "student_id", "student_name", "month", "amount", "status", "payment_method", "payment_date", "due_date")


class PaymentService:
    def __init__(self, payments: PaymentRepository, cache: QueryCache):
        self._payments = payments
        self._cache = cache

    def list(self, student_id: Optional[int] = None, status: Optional[str] = None, month: Optional[str] = None) -> List[Payment]:
        student_id = optional_int(student_id, "Aluno")
        status = optional_text(status)
        month = optional_text(month)
        return self._cache.fetch(
            ("payments", student_id, status, month),
            lambda: list(self._payments.list(studentId=student_id, status=status, month=month)),
        )

    def get(self, payment_id: int) -> Payment:
        payment = self._cache.fetch(("payments", int(payment_id)), lambda: self._payments.get_by_id(payment_id))
        if not payment:
            raise NotFoundError("Pagamento não encontrado")
        return payment

    @staticmethod
    def _update_payload(*, amount, status: str, payment_method: str = "", payment_date: str = "") -> dict:
        method = optional_choice(payment_method, PaymentMethod, "Forma de pagamento")
        st = require_choice(status or PaymentStatus.PENDING.value, PaymentStatus, "Status")
        if st == PaymentStatus.PAID and not method:
            raise ValidationError("Informe a forma de pagamento")
        return {
            "amount": require_positive_amount(amount),
            "status": st,
            "payment_method": method,
            "payment_date": optional_date(payment_date, "Data de pagamento"),
        }

    @invalidates("payments", "dashboard")
    def create(self, *, student_id, month: str, **form) -> Optional[Payment]:
        student = optional_int(student_id, "Aluno")
        if not student:
            raise ValidationError("Aluno é obrigatório")
        data = self._update_payload(**form)
        data["student_id"] = student
        data["month"] = require_month(month)
        return self._payments.create(data)

    @invalidates("payments", "dashboard")
    def update(self, payment_id: int, **form) -> Optional[Payment]:
        return self._payments.update(int(payment_id), self._update_payload(**form))

    @invalidates("payments", "dashboard")
    def delete(self, payment_id: int) -> None:
        self._payments.delete(int(payment_id))

    @invalidates("payments", "dashboard")
    def confirm(self, payment_id: int, payment_method: str) -> Optional[Payment]:
        """Mark a payment as paid with the given method."""
        method = require_choice(payment_method, PaymentMethod, "Forma de pagamento")
        return self._payments.confirm(int(payment_id), method)

    @staticmethod
    def with_student_names(payments: Iterable[Payment], names: Mapping[int, str]) -> List[Payment]:
        out = []
        for p in payments:
            if not p.student_name and p.student_id is not None:
                p = replace(p, student_name=names.get(p.student_id, f"Aluno #{p.student_id}"))
            out.append(p)
        return out

    @staticmethod
    def summary(payments: Sequence[Payment]) -> PaymentSummary:
        return PaymentSummary(
            total_amount=sum_by(payments, "amount"),
            paid_amount=sum_by(payments, "amount", status=PaymentStatus.PAID),
            pending_amount=sum_by(payments, "amount", status=PaymentStatus.PENDING),
            overdue_amount=sum_by(payments, "amount", status=PaymentStatus.OVERDUE),
            pending_count=sum(1 for p in payments if p.status == PaymentStatus.PENDING),
            overdue_count=sum(1 for p in payments if p.status == PaymentStatus.OVERDUE),
        )

    @staticmethod
    def months(payments: Iterable[Payment]) -> List[tuple]:
        """Distinct ``(month, label)`` pairs, newest first, for the month filter."""
        found = sorted({p.month for p in payments if p.month}, reverse=True)
        return [(m, month_label(m)) for m in found]

    @staticmethod
    def to_csv(payments: Iterable[Payment]) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=list(CSV_FIELDS))
        writer.writeheader()
        for p in payments:
            row = {}
            for name in CSV_FIELDS:
                value = getattr(p, name)
                if isinstance(value, Decimal):
                    value = f"{value:.2f}"
                row[name] = getattr(value, "value", value) if value is not None else ""
            writer.writerow(row)
        return out.getvalue().encode("utf-8-sig")
