from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import quote

from ..backend.http_base import HttpResourceRepository, encode, field, to_enum, to_int
from ..core.enums import BusStatus
from ..core.exceptions import NotFoundError
from .model import Bus


class HttpBusRepository(HttpResourceRepository[Bus]):
    endpoint = "/onibus"
    field_map = {
        "placa": "Placa",
        "modelo": "Modelo",
        "capacidade": "Capacidade",
        "ano": "Ano",
        "status": "Status",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> Bus:
        return Bus(
            id=to_int(field(raw, "id")),
            placa=str(field(raw, "placa", "")),
            modelo=str(field(raw, "modelo", "")),
            capacidade=to_int(field(raw, "capacidade")) or 0,
            ano=to_int(field(raw, "ano")) or 0,
            status=to_enum(BusStatus, field(raw, "status")) or BusStatus.ACTIVE,
        )

    def get_by_placa(self, placa: str) -> Optional[Bus]:
        try:
            return self._one(self._client.get(f"{self.endpoint}/placa/{quote(placa, safe='')}"))
        except NotFoundError:
            return None

    def update_status(self, item_id: int, status: str) -> Optional[Bus]:
        return self._one(self._client.patch(f"{self.endpoint}/{int(item_id)}/status", json={"Status": encode(status)}))
