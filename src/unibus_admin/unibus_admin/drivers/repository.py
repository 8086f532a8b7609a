from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Driver


class DriverRepository(Protocol):
    def list(self) -> Sequence[Driver]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[Driver]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[Driver]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[Driver]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError
