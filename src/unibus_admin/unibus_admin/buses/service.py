from __future__ import annotations

from typing import Iterable, List, Optional

from ..backend.cache import QueryCache, invalidates
from ..common.datetime_utils import today
from ..common.listing import count_by
from ..common.validators import optional_text, require_choice, require_int_range, require_non_empty
from ..core.constants import MAX_BUS_CAPACITY, MIN_BUS_YEAR
from ..core.enums import BusStatus
from ..core.exceptions import NotFoundError
from .model import Bus
from .repository import BusRepository


class BusService:
    def __init__(self, buses: BusRepository, cache: QueryCache):
        self._buses = buses
        self._cache = cache

    def list(self, placa: Optional[str] = None, status: Optional[str] = None) -> List[Bus]:
        placa = optional_text(placa)
        status = optional_text(status)
        return self._cache.fetch(("buses", placa, status), lambda: list(self._buses.list(placa=placa, status=status)))

    def get(self, bus_id: int) -> Bus:
        bus = self._cache.fetch(("buses", int(bus_id)), lambda: self._buses.get_by_id(bus_id))
        if not bus:
            raise NotFoundError("Ônibus não encontrado")
        return bus

    def get_by_placa(self, placa: str) -> Bus:
        placa = require_non_empty(placa, "Placa").upper()
        bus = self._cache.fetch(("buses", "placa", placa), lambda: self._buses.get_by_placa(placa))
        if not bus:
            raise NotFoundError("Ônibus não encontrado")
        return bus

    @staticmethod
    def _payload(*, placa: str, modelo: str, ano, capacidade, status: str = BusStatus.ACTIVE.value) -> dict:
        return {
            "placa": require_non_empty(placa, "Placa").upper(),
            "modelo": require_non_empty(modelo, "Modelo"),
            "ano": require_int_range(ano, "Ano", min_value=MIN_BUS_YEAR, max_value=today().year + 1),
            "capacidade": require_int_range(capacidade, "Capacidade", min_value=1, max_value=MAX_BUS_CAPACITY),
            "status": require_choice(status or BusStatus.ACTIVE.value, BusStatus, "Status"),
        }

    @invalidates("buses")
    def create(self, **form) -> Optional[Bus]:
        return self._buses.create(self._payload(**form))

    @invalidates("buses")
    def update(self, bus_id: int, **form) -> Optional[Bus]:
        return self._buses.update(int(bus_id), self._payload(**form))

    @invalidates("buses")
    def update_status(self, bus_id: int, status: str) -> Optional[Bus]:
        return self._buses.update_status(int(bus_id), require_choice(status, BusStatus, "Status"))

    @invalidates("buses")
    def delete(self, bus_id: int) -> None:
        self._buses.delete(int(bus_id))

    @staticmethod
    def status_counts(buses: Iterable[Bus]) -> dict:
        counts = count_by(buses, "status")
        return {s.value: counts.get(s.value, 0) for s in BusStatus}
