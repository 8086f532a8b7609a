from __future__ import annotations

from typing import Any, Mapping

from ..backend.http_base import HttpResourceRepository, field, to_int, to_text
from ..common.datetime_utils import parse_api_date
from .model import Driver


class HttpDriverRepository(HttpResourceRepository[Driver]):
    endpoint = "/drivers"
    field_map = {
        "name": "Name",
        "email": "Email",
        "password": "Password",
        "phone": "Phone",
        "cpf": "Cpf",
        "cnh": "Cnh",
        "vehicle": "Vehicle",
        "license_expiry": "LicenseExpiry",
        "birth_date": "BirthDate",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> Driver:
        return Driver(
            id=to_int(field(raw, "id")),
            name=str(field(raw, "name", "")),
            email=str(field(raw, "email", "")),
            phone=to_text(field(raw, "phone")),
            cpf=to_text(field(raw, "cpf")),
            cnh=to_text(field(raw, "cnh")),
            vehicle=to_text(field(raw, "vehicle")),
            license_expiry=parse_api_date(field(raw, "licenseExpiry")),
            birth_date=parse_api_date(field(raw, "birthDate")),
            status=to_text(field(raw, "status")),
            created_at=to_text(field(raw, "createdAt")),
        )
