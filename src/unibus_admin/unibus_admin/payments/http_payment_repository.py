from __future__ import annotations

from typing import Any, Mapping, Optional

from ..backend.http_base import HttpResourceRepository, encode, field, to_decimal, to_enum, to_int, to_text
from ..core.enums import PaymentMethod, PaymentStatus
from .model import Payment


def _status(value: Any) -> str:
    try:
        return PaymentStatus.from_api(value)
    except ValueError:
        return str(value) if value is not None else "Desconhecido"


class HttpPaymentRepository(HttpResourceRepository[Payment]):
    endpoint = "/payments"
    field_map = {
        "student_id": "studentId",
        "amount": "amount",
        "month": "month",
        "status": "status",
        "payment_method": "paymentMethod",
        "payment_date": "paymentDate",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> Payment:
        return Payment(
            id=to_int(field(raw, "id")),
            student_id=to_int(field(raw, "studentId")),
            amount=to_decimal(field(raw, "amount")),
            month=to_text(field(raw, "month")),
            status=_status(field(raw, "status")),
            student_name=to_text(field(raw, "studentName")),
            year=to_int(field(raw, "year")),
            payment_method=to_enum(PaymentMethod, field(raw, "paymentMethod")),
            payment_date=to_text(field(raw, "paymentDate")),
            due_date=to_text(field(raw, "dueDate")),
        )

    def confirm(self, item_id: int, payment_method: str) -> Optional[Payment]:
        body = self._client.post(f"{self.endpoint}/{int(item_id)}/confirm", json={"paymentMethod": encode(payment_method)})
        return self._one(body)
