from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Notification:
    id: Optional[int]
    title: str
    message: str
    type: Optional[str] = None
    priority: Optional[str] = None
    target_type: Optional[str] = None
    target_ids: Tuple[int, ...] = ()
    is_read: bool = False
    read_by: Tuple[int, ...] = ()
    created_at: Optional[str] = None

    @property
    def is_broadcast(self) -> bool:
        return not self.target_ids

    def read_by_user(self, user_id: Optional[int]) -> bool:
        if self.is_read:
            return True
        return user_id is not None and int(user_id) in self.read_by


@dataclass(frozen=True)
class NotificationCounts:
    total: int
    unread: int
    urgent: int
    info: int
