from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from ..notifications.model import Notification
from ..payments.model import Payment, PaymentSummary
from ..routes.model import Route


@dataclass(frozen=True)
class DashboardStats:
    total_students: int = 0
    total_drivers: int = 0
    total_routes: int = 0
    active_routes: int = 0
    pending_payments: int = 0
    monthly_revenue: Decimal = Decimal("0")
    last_updated: Optional[str] = None


@dataclass(frozen=True)
class DashboardOverview:
    stats: Optional[DashboardStats]
    total_students: int
    active_routes: List[Route]
    payments: PaymentSummary
    default_rate: int
    pending_payments: List[Payment] = field(default_factory=list)
    recent_notifications: List[Notification] = field(default_factory=list)
