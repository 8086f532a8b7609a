from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Admin


class AdminRepository(Protocol):
    def list(self) -> Sequence[Admin]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[Admin]:
        raise NotImplementedError

    def create_first(self, data: Mapping[str, Any]) -> Optional[Admin]:
        raise NotImplementedError
