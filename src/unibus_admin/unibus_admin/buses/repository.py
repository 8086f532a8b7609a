from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Bus


class BusRepository(Protocol):
    def list(self, *, placa: Optional[str] = None, status: Optional[str] = None) -> Sequence[Bus]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[Bus]:
        raise NotImplementedError

    def get_by_placa(self, placa: str) -> Optional[Bus]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[Bus]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[Bus]:
        raise NotImplementedError

    def update_status(self, item_id: int, status: str) -> Optional[Bus]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError
