from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Institution


class InstitutionRepository(Protocol):
    def list(self, *, nome: Optional[str] = None) -> Sequence[Institution]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[Institution]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[Institution]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[Institution]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError
