from __future__ import annotations

import re
from dataclasses import replace
from typing import Iterable, List, Mapping, Optional

from ..backend.cache import QueryCache, invalidates
from ..common.listing import count_by
from ..common.validators import optional_date, optional_int, optional_text, require_choice, require_non_empty
from ..core.enums import RouteDirection, RouteStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Route
from .repository import RouteRepository

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")

# Older backend builds label running routes "Ativo"/"Agendada".
ACTIVE_STATUSES = {RouteStatus.PLANNED.value, RouteStatus.IN_PROGRESS.value, "Ativo", "Agendada"}


class RouteService:
    def __init__(self, routes: RouteRepository, cache: QueryCache):
        self._routes = routes
        self._cache = cache

    def list(self, status: Optional[str] = None) -> List[Route]:
        status = optional_text(status)
        return self._cache.fetch(("routes", status), lambda: list(self._routes.list(status=status)))

    def get(self, route_id: int) -> Route:
        route = self._cache.fetch(("routes", int(route_id)), lambda: self._routes.get_by_id(route_id))
        if not route:
            raise NotFoundError("Rota não encontrada")
        return route

    @staticmethod
    def _payload(*, date: str, direction: str, departure_time: str, driver_id, status: str = "") -> dict:
        route_date = optional_date(date, "Data")
        if not route_date:
            raise ValidationError("Data é obrigatória")
        departure = require_non_empty(departure_time, "Horário de saída")
        if not _TIME_RE.match(departure):
            raise ValidationError("Horário de saída inválido (HH:MM)")
        driver = optional_int(driver_id, "Motorista")
        if not driver:
            raise ValidationError("Motorista é obrigatório")
        return {
            "date": route_date,
            "direction": require_choice(direction, RouteDirection, "Sentido"),
            "departure_time": departure,
            "status": require_choice(status or RouteStatus.PLANNED.value, RouteStatus, "Status"),
            "driver_id": driver,
        }

    @invalidates("routes")
    def create(self, **form) -> Optional[Route]:
        return self._routes.create(self._payload(**form))

    @invalidates("routes")
    def update(self, route_id: int, **form) -> Optional[Route]:
        return self._routes.update(int(route_id), self._payload(**form))

    @invalidates("routes")
    def delete(self, route_id: int) -> None:
        self._routes.delete(int(route_id))

    @staticmethod
    def with_driver_names(routes: Iterable[Route], names: Mapping[int, str]) -> List[Route]:
        """Fill ``driver_name`` from the driver list when the backend left it out."""
        out = []
        for r in routes:
            if not r.driver_name and r.driver_id is not None:
                r = replace(r, driver_name=names.get(r.driver_id, f"Motorista #{r.driver_id}"))
            out.append(r)
        return out

    def active_for_driver(self, driver_id: int) -> List[Route]:
        return [r for r in self.list() if r.driver_id == int(driver_id) and r.status in ACTIVE_STATUSES]

    def for_driver(self, driver_id: int) -> List[Route]:
        return [r for r in self.list() if r.driver_id == int(driver_id)]

    @staticmethod
    def status_counts(routes: Iterable[Route]) -> dict:
        counts = count_by(routes, "status")
        return {s.value: counts.get(s.value, 0) for s in RouteStatus}
