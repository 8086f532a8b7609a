from __future__ import annotations

from typing import Any, Mapping, Optional

from ..backend.client import ApiClient
from ..backend.http_base import field, to_decimal, to_int, to_text
from .model import DashboardStats


class HttpDashboardRepository:
    endpoint = "/dashboard/stats"

    def __init__(self, client: ApiClient):
        self._client = client

    @staticmethod
    def _from_api(raw: Mapping[str, Any]) -> DashboardStats:
        return DashboardStats(
            total_students=to_int(field(raw, "totalStudents")) or 0,
            total_drivers=to_int(field(raw, "totalDrivers")) or 0,
            total_routes=to_int(field(raw, "totalRoutes")) or 0,
            active_routes=to_int(field(raw, "activeRoutes")) or 0,
            pending_payments=to_int(field(raw, "pendingPayments")) or 0,
            monthly_revenue=to_decimal(field(raw, "monthlyRevenue") or field(raw, "totalRevenue")),
            last_updated=to_text(field(raw, "lastUpdated")),
        )

    def stats(self) -> Optional[DashboardStats]:
        body = self._client.get(self.endpoint)
        if isinstance(body, Mapping):
            return self._from_api(body)
        return None
