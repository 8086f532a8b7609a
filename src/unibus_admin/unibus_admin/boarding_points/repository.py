from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import BoardingPoint


class BoardingPointRepository(Protocol):
    def list(self) -> Sequence[BoardingPoint]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[BoardingPoint]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[BoardingPoint]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[BoardingPoint]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError
