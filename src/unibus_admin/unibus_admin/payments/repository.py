from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Payment


class PaymentRepository(Protocol):
    def list(
        self,
        *,
        studentId: Optional[int] = None,
        status: Optional[str] = None,
        month: Optional[str] = None,
    ) -> Sequence[Payment]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[Payment]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[Payment]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[Payment]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError

    def confirm(self, item_id: int, payment_method: str) -> Optional[Payment]:
        raise NotImplementedError
