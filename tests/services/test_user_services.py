from __future__ import annotations

from datetime import date

import pytest

from src.unibus_admin.unibus_admin.admins.model import Admin
from src.unibus_admin.unibus_admin.admins.service import AdminService, UserDirectoryService
from src.unibus_admin.unibus_admin.core.enums import StudentShift
from src.unibus_admin.unibus_admin.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.unibus_admin.unibus_admin.drivers.model import Driver
from src.unibus_admin.unibus_admin.drivers.service import DriverService
from src.unibus_admin.unibus_admin.students.model import Student
from src.unibus_admin.unibus_admin.students.service import StudentService


class ListRepo:
    def __init__(self, items=()):
        self.items = list(items)
        self.sent = []

    def list(self, **params):
        return self.items

    def get_by_id(self, item_id):
        return None

    def create(self, data):
        self.sent.append(("create", data))
        return None

    def create_first(self, data):
        self.sent.append(("create_first", data))
        return None

    def update(self, item_id, data):
        self.sent.append(("update", item_id, data))
        return None

    def delete(self, item_id):
        self.sent.append(("delete", item_id))


STUDENTS = [
    Student(id=1, name="Ana", email="ana@x.com", shift=StudentShift.NIGHT, route="2"),
    Student(id=2, name="Bruno", email="bruno@x.com", shift=StudentShift.NIGHT, route="3"),
    Student(id=3, name="Caio", email="caio@x.com", shift=StudentShift.MORNING),
]


def test_student_create_sends_route_and_enrollment_date(cache):
    repo = ListRepo()

    StudentService(repo, cache).create(name="Ana", email="ana@x.com", shift="Noite", route="2", enrollment_date="2025-02-01")

    data = repo.sent[0][1]
    assert data["shift"] == StudentShift.NIGHT
    assert data["route"] == "2"
    assert data["enrollment_date"] == date(2025, 2, 1)


def test_student_update_keeps_route_out_of_payload(cache):
    repo = ListRepo()

    StudentService(repo, cache).update(1, name="Ana", email="ana@x.com", status="Ativo")

    _, _, data = repo.sent[0]
    assert "route" not in data and "enrollment_date" not in data
    assert data["status"] == "Ativo"


class LateRepo(ListRepo):
    def __init__(self):
        super().__init__()
        self.lookups = 0

    def get_by_id(self, item_id):
        self.lookups += 1
        return STUDENTS[0] if self.lookups > 1 else None


def test_student_lookup_after_not_found_asks_backend_again(cache):
    repo = LateRepo()
    service = StudentService(repo, cache)

    with pytest.raises(NotFoundError):
        service.get(1)

    assert service.get(1).name == "Ana"
    assert service.get(1).name == "Ana"
    assert repo.lookups == 2


def test_student_invalid_shift(cache):
    with pytest.raises(ValidationError, match="Turno"):
        StudentService(ListRepo(), cache).create(name="Ana", email="ana@x.com", shift="Madrugada")


def test_students_by_route_and_shift_counts(cache):
    service = StudentService(ListRepo(STUDENTS), cache)

    assert [s.id for s in service.list_by_route(2)] == [1]
    assert service.list_by_route(0) == []
    assert StudentService.shift_counts(STUDENTS) == {"Manha": 1, "Tarde": 0, "Noite": 2, "Integral": 0}


def test_driver_create_requires_password(cache):
    repo = ListRepo()
    service = DriverService(repo, cache)

    with pytest.raises(ValidationError, match="Senha"):
        service.create(name="João", email="joao@x.com", password="123")

    service.create(name="João", email="joao@x.com", password="123456", license_expiry="2026-01-31")
    assert repo.sent[0][1]["license_expiry"] == date(2026, 1, 31)


def test_license_alerts_sorted_by_days_left():
    drivers = [
        Driver(id=1, name="A", email="a@x.com", license_expiry=date(2025, 4, 20)),
        Driver(id=2, name="B", email="b@x.com", license_expiry=date(2025, 3, 1)),
        Driver(id=3, name="C", email="c@x.com", license_expiry=date(2026, 1, 1)),
        Driver(id=4, name="D", email="d@x.com"),
    ]

    alerts = DriverService.license_alerts(drivers, within_days=30, on=date(2025, 3, 25))

    assert [(a.driver.id, a.days_left) for a in alerts] == [(2, -24), (1, 26)]


def test_admin_payload_defaults_access_level(cache):
    repo = ListRepo()

    AdminService(repo, cache).create_first(name="Root", email="root@x.com", password="123456")

    assert repo.sent == [
        ("create_first", {"name": "Root", "email": "root@x.com", "password": "123456", "phone": None, "access_level": 1})
    ]


def test_directory_merges_all_user_kinds(cache):
    directory = UserDirectoryService(
        StudentService(ListRepo(STUDENTS[:1]), cache),
        DriverService(ListRepo([Driver(id=9, name="João", email="joao@x.com")]), cache),
        AdminService(ListRepo([Admin(id=1, name="Root", email="root@x.com")]), cache),
    )

    rows = directory.list_all()

    assert [(r.kind, r.id) for r in rows] == [("aluno", 1), ("motorista", 9), ("admin", 1)]
    assert rows[2].kind_label == "Administrador"


def test_directory_delete_dispatches_by_kind(cache):
    students, drivers = ListRepo(), ListRepo()
    directory = UserDirectoryService(StudentService(students, cache), DriverService(drivers, cache), AdminService(ListRepo(), cache))

    directory.delete("motorista", 9)

    assert drivers.sent == [("delete", 9)]
    assert students.sent == []
    with pytest.raises(AuthorizationError):
        directory.delete("admin", 1)
