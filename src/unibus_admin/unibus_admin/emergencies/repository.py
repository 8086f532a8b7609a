from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Emergency


class EmergencyRepository(Protocol):
    def list(self, *, status: Optional[str] = None) -> Sequence[Emergency]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[Emergency]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[Emergency]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[Emergency]:
        raise NotImplementedError

    def resolve(self, item_id: int) -> Optional[Emergency]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError
