from __future__ import annotations

from typing import Any, Mapping

from ..backend.http_base import HttpResourceRepository, field, to_enum, to_int, to_text
from ..core.enums import RouteDirection, RouteStatus
from .model import Route


class HttpRouteRepository(HttpResourceRepository[Route]):
    endpoint = "/routes"
    field_map = {
        "date": "Date",
        "direction": "Destination",
        "departure_time": "DepartureTime",
        "status": "Status",
        "driver_id": "DriverId",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> Route:
        date_s = to_text(field(raw, "date"))
        return Route(
            id=to_int(field(raw, "id")),
            date=date_s[:10] if date_s else None,
            direction=to_enum(RouteDirection, field(raw, "destination")),
            departure_time=to_text(field(raw, "departureTime")),
            status=to_enum(RouteStatus, field(raw, "status")),
            driver_id=to_int(field(raw, "driverId")),
            driver_name=to_text(field(raw, "driverName") or field(raw, "driver")),
            name=to_text(field(raw, "name")),
            capacity=to_int(field(raw, "capacity")),
            enrolled=to_int(field(raw, "enrolled")) or 0,
            created_at=to_text(field(raw, "createdAt")),
        )
