from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from ..backend.cache import QueryCache, invalidates
from ..common.listing import count_by
from ..common.validators import optional_int, optional_text, require_choice, require_non_empty
from ..core.enums import EmergencyStatus, EmergencyType
from ..core.exceptions import NotFoundError
from .model import Emergency
from .repository import EmergencyRepository


class EmergencyService:
    def __init__(self, emergencies: EmergencyRepository, cache: QueryCache):
        self._emergencies = emergencies
        self._cache = cache

    def list(self, status: Optional[str] = None) -> List[Emergency]:
        status = optional_text(status)
        return self._cache.fetch(("emergencies", status), lambda: list(self._emergencies.list(status=status)))

    def get(self, emergency_id: int) -> Emergency:
        e = self._cache.fetch(("emergencies", int(emergency_id)), lambda: self._emergencies.get_by_id(emergency_id))
        if not e:
            raise NotFoundError("Emergência não encontrada")
        return e

    @staticmethod
    def _payload(*, type: str, description: str, location: str = "", route_id="", driver_id="") -> dict:
        return {
            "type": require_choice(type, EmergencyType, "Tipo"),
            "description": require_non_empty(description, "Descrição"),
            "location": optional_text(location),
            "route_id": optional_int(route_id, "Rota"),
            "driver_id": optional_int(driver_id, "Motorista"),
        }

    @invalidates("emergencies")
    def create(self, **form) -> Optional[Emergency]:
        """Register a new emergency; it always starts open, reported now."""
        data = self._payload(**form)
        data["status"] = EmergencyStatus.OPEN
        data["reported_at"] = datetime.now().replace(microsecond=0)
        return self._emergencies.create(data)

    @invalidates("emergencies")
    def update(self, emergency_id: int, *, status: str = "", **form) -> Optional[Emergency]:
        data = self._payload(**form)
        data["status"] = require_choice(status or EmergencyStatus.OPEN.value, EmergencyStatus, "Status")
        return self._emergencies.update(int(emergency_id), data)

    @invalidates("emergencies")
    def resolve(self, emergency_id: int) -> Optional[Emergency]:
        return self._emergencies.resolve(int(emergency_id))

    @invalidates("emergencies")
    def delete(self, emergency_id: int) -> None:
        self._emergencies.delete(int(emergency_id))

    @staticmethod
    def status_counts(emergencies: Iterable[Emergency]) -> dict:
        counts = count_by(emergencies, "status")
        return {s.value: counts.get(s.value, 0) for s in EmergencyStatus}
