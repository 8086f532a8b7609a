from __future__ import annotations

from typing import Iterable, List, Optional

from ..backend.cache import QueryCache, invalidates
from ..common.validators import optional_text, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import BoardingPoint
from .repository import BoardingPointRepository


def _coordinate(value, field_name: str, limit: float) -> Optional[float]:
    v = str(value if value is not None else "").strip().replace(",", ".")
    if not v:
        return None
    try:
        number = float(v)
    except ValueError:
        raise ValidationError(f"{field_name} inválida")
    if not -limit <= number <= limit:
        raise ValidationError(f"{field_name} deve estar entre {-limit:g} e {limit:g}")
    return number


class BoardingPointService:
    def __init__(self, points: BoardingPointRepository, cache: QueryCache):
        self._points = points
        self._cache = cache

    def list(self) -> List[BoardingPoint]:
        return self._cache.fetch(("boardingPoints",), lambda: list(self._points.list()))

    def get(self, point_id: int) -> BoardingPoint:
        point = self._cache.fetch(("boardingPoints", int(point_id)), lambda: self._points.get_by_id(point_id))
        if not point:
            raise NotFoundError("Ponto de embarque não encontrado")
        return point

    @staticmethod
    def _payload(*, name: str, address: str, neighborhood: str = "", city: str = "", lat="", lng="") -> dict:
        latitude = _coordinate(lat, "Latitude", 90)
        longitude = _coordinate(lng, "Longitude", 180)
        if (latitude is None) != (longitude is None):
            raise ValidationError("Informe latitude e longitude juntas")
        return {
            "name": require_non_empty(name, "Nome"),
            "address": require_non_empty(address, "Endereço"),
            "neighborhood": optional_text(neighborhood),
            "city": optional_text(city),
            "lat": latitude,
            "lng": longitude,
        }

    @invalidates("boardingPoints")
    def create(self, **form) -> Optional[BoardingPoint]:
        return self._points.create(self._payload(**form))

    @invalidates("boardingPoints")
    def update(self, point_id: int, **form) -> Optional[BoardingPoint]:
        return self._points.update(int(point_id), self._payload(**form))

    @invalidates("boardingPoints")
    def delete(self, point_id: int) -> None:
        self._points.delete(int(point_id))

    @staticmethod
    def status_counts(points: Iterable[BoardingPoint]) -> dict:
        """Active/inactive totals; the backend uses both Portuguese and English labels."""
        counts = {"active": 0, "inactive": 0}
        for p in points:
            label = (p.status or "").lower()
            if label in ("ativo", "active"):
                counts["active"] += 1
            elif label in ("inativo", "inactive"):
                counts["inactive"] += 1
        return counts
