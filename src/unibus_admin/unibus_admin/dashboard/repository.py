from __future__ import annotations

from typing import Optional, Protocol

from .model import DashboardStats


class DashboardRepository(Protocol):
    def stats(self) -> Optional[DashboardStats]:
        raise NotImplementedError
