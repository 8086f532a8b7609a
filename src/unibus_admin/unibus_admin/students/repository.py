from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list(self, *, status: Optional[str] = None, route: Optional[int] = None) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[Student]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[Student]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError
