from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Route


class RouteRepository(Protocol):
    def list(self, *, status: Optional[str] = None) -> Sequence[Route]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[Route]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[Route]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[Route]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError
