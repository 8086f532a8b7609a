from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from ..core.exceptions import NotFoundError
from .client import ApiClient

T = TypeVar("T")


def field(raw: Mapping[str, Any], name: str, default: Any = None) -> Any:
    """Read ``name`` tolerating the backend's mixed casing (``nome``/``Nome``)."""
    for key in (name, name[:1].upper() + name[1:], name[:1].lower() + name[1:]):
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def as_list(payload: Any) -> List[Any]:
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    return [payload]


def to_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "sim", "yes"}
    return bool(value)


def to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def to_enum(enum_cls: Type[Enum], value: Any) -> Optional[str]:
    """Known labels become enum members; unknown ones are kept as plain strings."""
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


def encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (list, tuple)):
        return [encode(v) for v in value]
    if isinstance(value, dict):
        return {k: encode(v) for k, v in value.items()}
    return value


class HttpResourceRepository(Generic[T]):
    """CRUD over one REST collection.

    Subclasses set ``endpoint``, ``field_map`` (model field -> backend key) and
    implement ``_from_api``. Only the fields present in the data dict are sent;
    ``None`` values are omitted like undefined fields in a JSON body.
    """

    endpoint: str = ""
    field_map: Dict[str, str] = {}

    def __init__(self, client: ApiClient):
        self._client = client

    def _from_api(self, raw: Mapping[str, Any]) -> T:
        raise NotImplementedError

    def _to_api(self, data: Mapping[str, Any]) -> dict:
        payload = {}
        for name, api_key in self.field_map.items():
            if name in data and data[name] is not None:
                payload[api_key] = encode(data[name])
        return payload

    def _many(self, body: Any) -> List[T]:
        return [self._from_api(r) for r in as_list(body) if isinstance(r, Mapping)]

    def _one(self, body: Any) -> Optional[T]:
        if isinstance(body, Mapping):
            return self._from_api(body)
        return None

    def list(self, **params: Any) -> List[T]:
        return self._many(self._client.get(self.endpoint, params=params))

    def get_by_id(self, item_id: int) -> Optional[T]:
        try:
            return self._one(self._client.get(f"{self.endpoint}/{int(item_id)}"))
        except NotFoundError:
            return None

    def create(self, data: Mapping[str, Any]) -> Optional[T]:
        return self._one(self._client.post(self.endpoint, json=self._to_api(data)))

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[T]:
        return self._one(self._client.put(f"{self.endpoint}/{int(item_id)}", json=self._to_api(data)))

    def delete(self, item_id: int) -> None:
        self._client.delete(f"{self.endpoint}/{int(item_id)}")
