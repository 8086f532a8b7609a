from __future__ import annotations

import logging
from typing import Optional

from ..backend.cache import QueryCache
from ..core.constants import DEFAULT_RECENT_NOTIFICATIONS
from ..core.enums import PaymentStatus
from ..core.exceptions import ApiError
from ..notifications.service import NotificationService
from ..payments.service import PaymentService
from ..routes.service import ACTIVE_STATUSES, RouteService
from .model import DashboardOverview, DashboardStats
from .repository import DashboardRepository

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(
        self,
        dashboard: DashboardRepository,
        cache: QueryCache,
        *,
        payments: PaymentService,
        routes: RouteService,
        notifications: NotificationService,
    ):
        self._dashboard = dashboard
        self._cache = cache
        self._payments = payments
        self._routes = routes
        self._notifications = notifications

    def stats(self) -> Optional[DashboardStats]:
        return self._cache.fetch(("dashboard", "stats"), self._dashboard.stats)

    def overview(self, *, recent: int = DEFAULT_RECENT_NOTIFICATIONS) -> DashboardOverview:
        """Everything the admin home page shows.

        When ``/dashboard/stats`` fails the page still renders; the student total
        then falls back to the sum of route enrolments.
        """
        try:
            stats = self.stats()
        except ApiError:
            logger.warning("dashboard stats unavailable, using route totals", exc_info=True)
            stats = None

        routes = self._routes.list()
        payments = self._payments.list()
        summary = self._payments.summary(payments)

        total_students = stats.total_students if stats and stats.total_students else sum(r.enrolled for r in routes)
        default_rate = round(summary.overdue_count * 100 / (len(payments) or 1))

        return DashboardOverview(
            stats=stats,
            total_students=total_students,
            active_routes=[r for r in routes if r.status in ACTIVE_STATUSES],
            payments=summary,
            default_rate=default_rate,
            pending_payments=[p for p in payments if p.status == PaymentStatus.PENDING],
            recent_notifications=self._notifications.recent(recent),
        )
