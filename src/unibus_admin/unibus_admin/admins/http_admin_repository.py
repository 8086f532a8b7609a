from __future__ import annotations

from typing import Any, Mapping, Optional

from ..backend.http_base import HttpResourceRepository, field, to_int, to_text
from .model import Admin


class HttpAdminRepository(HttpResourceRepository[Admin]):
    """Admins only support listing and creation on the backend."""

    endpoint = "/admin/admins"
    field_map = {
        "name": "Name",
        "email": "Email",
        "password": "Password",
        "phone": "Phone",
        "access_level": "AccessLevel",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> Admin:
        return Admin(
            id=to_int(field(raw, "id")),
            name=str(field(raw, "name", "")),
            email=str(field(raw, "email", "")),
            phone=to_text(field(raw, "phone")),
            access_level=to_int(field(raw, "accessLevel")),
            role=to_text(field(raw, "role")),
            status=to_text(field(raw, "status")),
            created_at=to_text(field(raw, "createdAt")),
        )

    def create(self, data: Mapping[str, Any]) -> Optional[Admin]:
        return self._one(self._client.post("/admin/create-admin", json=self._to_api(data)))

    def create_first(self, data: Mapping[str, Any]) -> Optional[Admin]:
        return self._one(self._client.post("/admin/create-first-admin", json=self._to_api(data)))
