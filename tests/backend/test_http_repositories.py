from __future__ import annotations

from datetime import date
from decimal import Decimal

from src.unibus_admin.unibus_admin.backend.http_base import encode, field, to_bool, to_enum, to_int
from src.unibus_admin.unibus_admin.boarding_points.http_boarding_point_repository import HttpBoardingPointRepository
from src.unibus_admin.unibus_admin.core.enums import PaymentMethod, PaymentStatus, StudentShift
from src.unibus_admin.unibus_admin.enrollments.http_enrollment_repository import HttpEnrollmentRepository
from src.unibus_admin.unibus_admin.payments.http_payment_repository import HttpPaymentRepository
from src.unibus_admin.unibus_admin.students.http_student_repository import HttpStudentRepository


def test_field_tolerates_mixed_casing():
    assert field({"Nome": "Fatec"}, "nome") == "Fatec"
    assert field({"studentId": 4}, "StudentId") == 4
    assert field({"nome": None}, "nome", "-") == "-"


def test_converters():
    assert to_int("7") == 7
    assert to_int("x") is None
    assert to_bool("Sim") is True
    assert to_enum(StudentShift, "Noite") == StudentShift.NIGHT
    assert to_enum(StudentShift, "Madrugada") == "Madrugada"


def test_encode_serializes_rich_values():
    assert encode(PaymentStatus.PAID) == "Pago"
    assert encode(date(2025, 3, 1)) == "2025-03-01"
    assert encode(Decimal("150.50")) == 150.5
    assert encode({"ids": (1, 2)}) == {"ids": [1, 2]}


def test_payment_list_maps_camel_case_fields(client, fake_session):
    fake_session.add(
        "GET",
        "/payments",
        body={
            "data": [
                {
                    "id": 1,
                    "studentId": 9,
                    "studentName": "Ana",
                    "amount": "150.00",
                    "month": "2025-03",
                    "status": 2,
                    "paymentMethod": "PIX",
                    "dueDate": "2025-03-10",
                }
            ]
        },
    )

    [payment] = HttpPaymentRepository(client).list(status=None)

    assert payment.student_id == 9
    assert payment.amount == Decimal("150.00")
    assert payment.status == PaymentStatus.PAID
    assert payment.payment_method == PaymentMethod.PIX
    assert payment.due_date == "2025-03-10"


def test_payment_create_sends_only_given_fields(client, fake_session):
    fake_session.add("POST", "/payments", status=201, body={"id": 5, "studentId": 9, "amount": 80, "status": "Pendente"})

    created = HttpPaymentRepository(client).create(
        {"student_id": 9, "amount": Decimal("80"), "month": "2025-04", "status": PaymentStatus.PENDING, "payment_method": None}
    )

    assert fake_session.last("POST")["json"] == {"studentId": 9, "amount": 80.0, "month": "2025-04", "status": "Pendente"}
    assert created.id == 5


def test_payment_confirm_posts_method(client, fake_session):
    fake_session.add("POST", "/payments/5/confirm", body={"id": 5, "amount": 80, "status": "Pago"})

    HttpPaymentRepository(client).confirm(5, PaymentMethod.CASH)

    assert fake_session.last()["json"] == {"paymentMethod": "Dinheiro"}


def test_get_by_id_returns_none_when_missing(client):
    assert HttpStudentRepository(client).get_by_id(42) is None


def test_student_update_uses_pascal_case_keys(client, fake_session):
    fake_session.add("PUT", "/students/3", body={"id": 3, "name": "Ana", "email": "ana@x.com"})

    HttpStudentRepository(client).update(3, {"name": "Ana", "email": "ana@x.com", "shift": StudentShift.MORNING})

    assert fake_session.last()["json"] == {"Name": "Ana", "Email": "ana@x.com", "Shift": "Manha"}


def test_enrollment_payload_and_endpoints(client, fake_session):
    fake_session.add("POST", "/rotaaluno", body={"id": 1, "fkIdRota": 2, "fkIdAluno": 3, "confirmado": "Sim"})
    fake_session.add("GET", "/rotaaluno/rota/2", body=[{"id": 1, "fkIdRota": 2, "fkIdAluno": 3, "nomeAluno": "Ana"}])
    repo = HttpEnrollmentRepository(client)

    created = repo.create({"route_id": 2, "student_id": 3, "boarding_point_id": None, "confirmed": "Sim"})
    [listed] = repo.by_route(2)

    assert fake_session.calls[0]["json"] == {"FkIdRota": 2, "FkIdAluno": 3, "Confirmado": "Sim"}
    assert created.is_confirmed
    assert listed.student_name == "Ana"


def test_boarding_point_coordinates_are_nested(client, fake_session):
    fake_session.add(
        "POST",
        "/boarding-points",
        body={"id": 1, "name": "Praça", "address": "Rua A", "coordinates": {"lat": -23.5, "lng": -46.6}},
    )

    point = HttpBoardingPointRepository(client).create({"name": "Praça", "address": "Rua A", "lat": -23.5, "lng": -46.6})

    assert fake_session.last()["json"]["coordinates"] == {"lat": -23.5, "lng": -46.6}
    assert point.has_coordinates
