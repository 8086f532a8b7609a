from __future__ import annotations

from typing import Any, Mapping, Optional

from ..backend.http_base import HttpResourceRepository, field, to_enum, to_int, to_text
from ..core.enums import EmergencyStatus, EmergencyType
from .model import Emergency


class HttpEmergencyRepository(HttpResourceRepository[Emergency]):
    endpoint = "/emergencies"
    field_map = {
        "type": "type",
        "description": "description",
        "location": "location",
        "status": "status",
        "route_id": "routeId",
        "driver_id": "driverId",
        "reported_at": "reportedAt",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> Emergency:
        return Emergency(
            id=to_int(field(raw, "id")),
            type=to_enum(EmergencyType, field(raw, "type")) or "",
            description=to_text(field(raw, "description")) or "",
            location=to_text(field(raw, "location")),
            status=to_enum(EmergencyStatus, field(raw, "status")),
            route_id=to_int(field(raw, "routeId")),
            driver_id=to_int(field(raw, "driverId")),
            reported_at=to_text(field(raw, "reportedAt")),
            resolved_at=to_text(field(raw, "resolvedAt")),
        )

    def resolve(self, item_id: int) -> Optional[Emergency]:
        return self._one(self._client.post(f"{self.endpoint}/{int(item_id)}/resolve"))
