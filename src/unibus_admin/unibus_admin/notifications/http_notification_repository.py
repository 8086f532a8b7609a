from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from ..backend.http_base import HttpResourceRepository, as_list, field, to_bool, to_enum, to_int, to_text
from ..core.enums import NotificationType
from .model import Notification


def _ids(value: Any) -> Tuple[int, ...]:
    return tuple(i for i in (to_int(v) for v in as_list(value)) if i is not None)


class HttpNotificationRepository(HttpResourceRepository[Notification]):
    endpoint = "/notifications"
    field_map = {
        "title": "title",
        "message": "message",
        "type": "type",
        "target_ids": "targetIds",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> Notification:
        return Notification(
            id=to_int(field(raw, "id")),
            title=to_text(field(raw, "title")) or "",
            message=to_text(field(raw, "message")) or "",
            type=to_enum(NotificationType, field(raw, "type")),
            priority=to_text(field(raw, "priority")),
            target_type=to_text(field(raw, "targetType")),
            target_ids=_ids(field(raw, "targetIds")),
            is_read=to_bool(field(raw, "isRead", False)),
            read_by=_ids(field(raw, "readBy")),
            created_at=to_text(field(raw, "createdAt")),
        )

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[Notification]:
        # Targets are fixed once a notification is sent.
        data = {k: v for k, v in data.items() if k != "target_ids"}
        return super().update(item_id, data)

    def mark_as_read(self, item_id: int) -> Optional[Notification]:
        return self._one(self._client.post(f"{self.endpoint}/{int(item_id)}/mark-read"))
