from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..backend.cache import QueryCache, invalidates
from ..common.validators import optional_choice, optional_int, require_choice, require_non_empty
from ..core.constants import DEFAULT_RECENT_NOTIFICATIONS
from ..core.enums import NotificationType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Notification, NotificationCounts
from .repository import NotificationRepository


def _target_ids(values: Iterable) -> List[int]:
    out = []
    for v in values or ():
        if isinstance(v, str):
            parts = [p for p in v.replace(";", ",").split(",") if p.strip()]
        else:
            parts = [v]
        for p in parts:
            try:
                out.append(int(str(p).strip()))
            except ValueError:
                raise ValidationError("Destinatário inválido")
    return sorted(set(out))


class NotificationService:
    def __init__(self, notifications: NotificationRepository, cache: QueryCache):
        self._notifications = notifications
        self._cache = cache

    def list(self, type: Optional[str] = None, target_id: Optional[int] = None) -> List[Notification]:
        kind = optional_choice(type, NotificationType, "Tipo")
        kind = kind.value if kind else None
        target_id = optional_int(target_id, "Destinatário")
        return self._cache.fetch(
            ("notifications", kind, target_id),
            lambda: list(self._notifications.list(type=kind, targetId=target_id)),
        )

    def get(self, notification_id: int) -> Notification:
        n = self._cache.fetch(("notifications", int(notification_id)), lambda: self._notifications.get_by_id(notification_id))
        if not n:
            raise NotFoundError("Notificação não encontrada")
        return n

    @staticmethod
    def _payload(*, title: str, message: str, type: str = "") -> dict:
        return {
            "title": require_non_empty(title, "Título"),
            "message": require_non_empty(message, "Mensagem"),
            "type": require_choice(type or NotificationType.INFO.value, NotificationType, "Tipo"),
        }

    @invalidates("notifications")
    def create(self, *, target_ids: Sequence = (), **form) -> Optional[Notification]:
        """Send a notification; no ``target_ids`` means every student receives it."""
        data = self._payload(**form)
        data["target_ids"] = _target_ids(target_ids)
        return self._notifications.create(data)

    @invalidates("notifications")
    def update(self, notification_id: int, **form) -> Optional[Notification]:
        return self._notifications.update(int(notification_id), self._payload(**form))

    @invalidates("notifications")
    def delete(self, notification_id: int) -> None:
        self._notifications.delete(int(notification_id))

    @invalidates("notifications")
    def mark_as_read(self, notification_id: int) -> Optional[Notification]:
        return self._notifications.mark_as_read(int(notification_id))

    def for_student(self, student_id: int) -> List[Notification]:
        sid = int(student_id)
        return [n for n in self.list() if n.is_broadcast or sid in n.target_ids]

    def recent(self, limit: int = DEFAULT_RECENT_NOTIFICATIONS) -> List[Notification]:
        ordered = sorted(self.list(), key=lambda n: n.created_at or "", reverse=True)
        return ordered[:limit]

    @staticmethod
    def counts(notifications: Sequence[Notification], user_id: Optional[int] = None) -> NotificationCounts:
        return NotificationCounts(
            total=len(notifications),
            unread=sum(1 for n in notifications if not n.read_by_user(user_id)),
            urgent=sum(1 for n in notifications if n.type == NotificationType.URGENT),
            info=sum(1 for n in notifications if n.type == NotificationType.INFO),
        )
