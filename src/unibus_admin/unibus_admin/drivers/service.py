from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from ..backend.cache import QueryCache, invalidates
from ..common.datetime_utils import today
from ..common.validators import optional_date, optional_text, require_email, require_min_length, require_non_empty
from ..core.constants import DEFAULT_LICENSE_ALERT_DAYS, MIN_PASSWORD_LENGTH
from ..core.exceptions import NotFoundError
from .model import Driver, LicenseAlert
from .repository import DriverRepository


class DriverService:
    def __init__(self, drivers: DriverRepository, cache: QueryCache):
        self._drivers = drivers
        self._cache = cache

    def list(self) -> List[Driver]:
        return self._cache.fetch(("drivers",), lambda: list(self._drivers.list()))

    def get(self, driver_id: int) -> Driver:
        driver = self._cache.fetch(("drivers", int(driver_id)), lambda: self._drivers.get_by_id(driver_id))
        if not driver:
            raise NotFoundError("Motorista não encontrado")
        return driver

    @staticmethod
    def _payload(
        *,
        name: str,
        email: str,
        phone: str = "",
        cpf: str = "",
        cnh: str = "",
        vehicle: str = "",
        license_expiry: str = "",
        birth_date: str = "",
    ) -> dict:
        return {
            "name": require_non_empty(name, "Nome"),
            "email": require_email(email),
            "phone": optional_text(phone),
            "cpf": optional_text(cpf),
            "cnh": optional_text(cnh),
            "vehicle": optional_text(vehicle),
            "license_expiry": optional_date(license_expiry, "Validade da CNH"),
            "birth_date": optional_date(birth_date, "Data de nascimento"),
        }

    @invalidates("drivers")
    def create(self, *, password: str = "", **form) -> Optional[Driver]:
        data = self._payload(**form)
        data["password"] = require_min_length(password, "Senha", MIN_PASSWORD_LENGTH)
        return self._drivers.create(data)

    @invalidates("drivers")
    def update(self, driver_id: int, **form) -> Optional[Driver]:
        return self._drivers.update(int(driver_id), self._payload(**form))

    @invalidates("drivers")
    def delete(self, driver_id: int) -> None:
        self._drivers.delete(int(driver_id))

    @staticmethod
    def license_alerts(
        drivers: Iterable[Driver],
        *,
        within_days: int = DEFAULT_LICENSE_ALERT_DAYS,
        on: Optional[date] = None,
    ) -> List[LicenseAlert]:
        ref = on or today()
        alerts = []
        for d in drivers:
            if not d.license_expiry:
                continue
            days_left = (d.license_expiry - ref).days
            if days_left <= within_days:
                alerts.append(LicenseAlert(driver=d, days_left=days_left))
        alerts.sort(key=lambda a: a.days_left)
        return alerts
