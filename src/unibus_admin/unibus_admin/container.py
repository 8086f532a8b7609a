from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import requests

from .admins.http_admin_repository import HttpAdminRepository
from .admins.service import AdminService, UserDirectoryService
from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.service import AttendanceService
from .auth.http_auth_repository import HttpAuthRepository
from .auth.service import AuthService
from .backend.cache import QueryCache
from .backend.client import ApiClient, ApiConfig
from .boarding_points.http_boarding_point_repository import HttpBoardingPointRepository
from .boarding_points.service import BoardingPointService
from .buses.http_bus_repository import HttpBusRepository
from .buses.service import BusService
from .dashboard.http_dashboard_repository import HttpDashboardRepository
from .dashboard.service import DashboardService
from .drivers.http_driver_repository import HttpDriverRepository
from .drivers.service import DriverService
from .emergencies.http_emergency_repository import HttpEmergencyRepository
from .emergencies.service import EmergencyService
from .enrollments.http_enrollment_repository import HttpEnrollmentRepository
from .enrollments.service import EnrollmentService
from .institutions.http_institution_repository import HttpInstitutionRepository
from .institutions.service import InstitutionService
from .notifications.http_notification_repository import HttpNotificationRepository
from .notifications.service import NotificationService
from .payments.http_payment_repository import HttpPaymentRepository
from .payments.service import PaymentService
from .routes.http_route_repository import HttpRouteRepository
from .routes.service import RouteService
from .students.http_student_repository import HttpStudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    client: ApiClient
    cache: QueryCache

    auth_service: AuthService
    institution_service: InstitutionService
    bus_service: BusService
    student_service: StudentService
    driver_service: DriverService
    admin_service: AdminService
    directory_service: UserDirectoryService
    route_service: RouteService
    payment_service: PaymentService
    attendance_service: AttendanceService
    boarding_point_service: BoardingPointService
    notification_service: NotificationService
    emergency_service: EmergencyService
    enrollment_service: EnrollmentService
    dashboard_service: DashboardService


def build_container(
    *,
    api_config: ApiConfig,
    cache_ttl: float,
    token_provider: Optional[Callable[[], Optional[str]]] = None,
    on_unauthorized: Optional[Callable[[], None]] = None,
    session: Optional[requests.Session] = None,
) -> Container:
    client = ApiClient(api_config, token_provider=token_provider, on_unauthorized=on_unauthorized, session=session)
    # cached reads are scoped per session token
    cache = QueryCache(cache_ttl, scope=token_provider)

    student_service = StudentService(HttpStudentRepository(client), cache)
    driver_service = DriverService(HttpDriverRepository(client), cache)
    admin_service = AdminService(HttpAdminRepository(client), cache)
    route_service = RouteService(HttpRouteRepository(client), cache)
    payment_service = PaymentService(HttpPaymentRepository(client), cache)
    notification_service = NotificationService(HttpNotificationRepository(client), cache)

    return Container(
        client=client,
        cache=cache,
        auth_service=AuthService(HttpAuthRepository(client)),
        institution_service=InstitutionService(HttpInstitutionRepository(client), cache),
        bus_service=BusService(HttpBusRepository(client), cache),
        student_service=student_service,
        driver_service=driver_service,
        admin_service=admin_service,
        directory_service=UserDirectoryService(student_service, driver_service, admin_service),
        route_service=route_service,
        payment_service=payment_service,
        attendance_service=AttendanceService(HttpAttendanceRepository(client), cache),
        boarding_point_service=BoardingPointService(HttpBoardingPointRepository(client), cache),
        notification_service=notification_service,
        emergency_service=EmergencyService(HttpEmergencyRepository(client), cache),
        enrollment_service=EnrollmentService(HttpEnrollmentRepository(client), cache),
        dashboard_service=DashboardService(
            HttpDashboardRepository(client),
            cache,
            payments=payment_service,
            routes=route_service,
            notifications=notification_service,
        ),
    )
