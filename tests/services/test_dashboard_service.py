from __future__ import annotations

from decimal import Decimal

from src.unibus_admin.unibus_admin.core.enums import PaymentStatus
from src.unibus_admin.unibus_admin.core.exceptions import ApiError
from src.unibus_admin.unibus_admin.dashboard.model import DashboardStats
from src.unibus_admin.unibus_admin.dashboard.service import DashboardService
from src.unibus_admin.unibus_admin.notifications.service import NotificationService
from src.unibus_admin.unibus_admin.payments.model import Payment
from src.unibus_admin.unibus_admin.payments.service import PaymentService
from src.unibus_admin.unibus_admin.routes.model import Route
from src.unibus_admin.unibus_admin.routes.service import RouteService


class StaticRepo:
    def __init__(self, items=()):
        self.items = list(items)

    def list(self, **params):
        return self.items


class FakeDashboardRepo:
    def __init__(self, stats=None, error=None):
        self._stats = stats
        self._error = error
        self.calls = 0

    def stats(self):
        self.calls += 1
        if self._error:
            raise self._error
        return self._stats


ROUTES = [
    Route(id=1, date="2025-03-10", direction="Ida", departure_time="06:30", status="Planejada", enrolled=20),
    Route(id=2, date="2025-03-09", direction="Volta", departure_time="18:00", status="Concluida", enrolled=15),
]
PAYMENTS = [
    Payment(id=1, student_id=1, amount=Decimal("100"), month="2025-03", status=PaymentStatus.PAID),
    Payment(id=2, student_id=2, amount=Decimal("100"), month="2025-03", status=PaymentStatus.OVERDUE),
    Payment(id=3, student_id=3, amount=Decimal("100"), month="2025-03", status=PaymentStatus.PENDING),
    Payment(id=4, student_id=4, amount=Decimal("100"), month="2025-03", status=PaymentStatus.PENDING),
]


def _service(cache, dashboard):
    return DashboardService(
        dashboard,
        cache,
        payments=PaymentService(StaticRepo(PAYMENTS), cache),
        routes=RouteService(StaticRepo(ROUTES), cache),
        notifications=NotificationService(StaticRepo(), cache),
    )


def test_overview_uses_backend_stats(cache):
    overview = _service(cache, FakeDashboardRepo(DashboardStats(total_students=120))).overview()

    assert overview.total_students == 120
    assert [r.id for r in overview.active_routes] == [1]
    assert overview.default_rate == 25
    assert [p.id for p in overview.pending_payments] == [3, 4]
    assert overview.payments.paid_amount == Decimal("100")


def test_overview_survives_stats_failure(cache):
    overview = _service(cache, FakeDashboardRepo(error=ApiError("down", status_code=500))).overview()

    assert overview.stats is None
    assert overview.total_students == 35


def test_stats_are_cached_until_invalidated(cache):
    repo = FakeDashboardRepo(DashboardStats(total_students=1))
    service = _service(cache, repo)

    service.stats()
    service.stats()
    cache.invalidate("dashboard")
    service.stats()

    assert repo.calls == 2
