from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def list(self, *, type: Optional[str] = None, targetId: Optional[int] = None) -> Sequence[Notification]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[Notification]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[Notification]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError

    def mark_as_read(self, item_id: int) -> Optional[Notification]:
        raise NotImplementedError
