from __future__ import annotations

from typing import Any, Mapping, Optional

from ..backend.http_base import HttpResourceRepository, field, to_int, to_text
from .model import BoardingPoint


def _coord(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class HttpBoardingPointRepository(HttpResourceRepository[BoardingPoint]):
    endpoint = "/boarding-points"
    field_map = {
        "name": "name",
        "address": "address",
        "neighborhood": "neighborhood",
        "city": "city",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> BoardingPoint:
        coords = field(raw, "coordinates") or {}
        if not isinstance(coords, Mapping):
            coords = {}
        return BoardingPoint(
            id=to_int(field(raw, "id")),
            name=to_text(field(raw, "name")) or "",
            address=to_text(field(raw, "address")) or "",
            neighborhood=to_text(field(raw, "neighborhood")),
            city=to_text(field(raw, "city")),
            lat=_coord(field(coords, "lat")),
            lng=_coord(field(coords, "lng")),
            status=to_text(field(raw, "status")),
            routes=to_int(field(raw, "routes")) or 0,
            created_at=to_text(field(raw, "createdAt")),
        )

    def _to_api(self, data: Mapping[str, Any]) -> dict:
        payload = super()._to_api(data)
        if data.get("lat") is not None and data.get("lng") is not None:
            payload["coordinates"] = {"lat": float(data["lat"]), "lng": float(data["lng"])}
        return payload
