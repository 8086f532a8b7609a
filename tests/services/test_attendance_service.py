from __future__ import annotations

import pytest

from src.unibus_admin.unibus_admin.attendance.model import AttendanceRecord, AttendanceSummary
from src.unibus_admin.unibus_admin.attendance.service import AttendanceService
from src.unibus_admin.unibus_admin.core.enums import AttendanceStatus
from src.unibus_admin.unibus_admin.core.exceptions import ApiError, ValidationError


class FakeAttendanceRepo:
    def __init__(self, records=(), fail_on_call=None, summary=None):
        self.records = list(records)
        self.created = []
        self._fail_on_call = fail_on_call
        self._summary = summary

    def list(self, **params):
        sid = params.get("studentId")
        return [r for r in self.records if sid is None or r.student_id == sid]

    def get_by_id(self, item_id):
        return next((r for r in self.records if r.id == item_id), None)

    def create(self, data):
        if self._fail_on_call is not None and len(self.created) + 1 == self._fail_on_call:
            raise ApiError("Erro 500", status_code=500)
        self.created.append(data)
        return AttendanceRecord(id=len(self.created), **data)

    def update(self, item_id, data):
        return None

    def delete(self, item_id):
        self.records = [r for r in self.records if r.id != item_id]

    def student_summary(self, student_id):
        return self._summary


def test_mark_route_creates_one_record_per_student(cache):
    repo = FakeAttendanceRepo()

    count = AttendanceService(repo, cache).mark_route("3", {10: True, 11: False}, "  chuva  ")

    assert count == 2
    assert [(d["student_id"], d["status"]) for d in repo.created] == [
        (10, AttendanceStatus.PRESENT),
        (11, AttendanceStatus.ABSENT),
    ]
    assert all(d["route_id"] == 3 and d["observation"] == "chuva" for d in repo.created)


def test_mark_route_drops_cache_even_when_a_call_fails(cache):
    repo = FakeAttendanceRepo(fail_on_call=2)
    service = AttendanceService(repo, cache)
    service.list()

    with pytest.raises(ApiError):
        service.mark_route(3, {10: True, 11: True, 12: True})

    assert len(repo.created) == 1
    assert ("attendance", None, None) not in cache


@pytest.mark.parametrize("route_id,statuses", [("", {1: True}), (3, {})])
def test_mark_route_requires_route_and_students(cache, route_id, statuses):
    with pytest.raises(ValidationError):
        AttendanceService(FakeAttendanceRepo(), cache).mark_route(route_id, statuses)


def test_mark_single_student_validates_status(cache):
    service = AttendanceService(FakeAttendanceRepo(), cache)

    with pytest.raises(ValidationError):
        service.mark(student_id=1, route_id=2, status="Atrasado")

    record = service.mark(student_id="1", route_id="2", status="Presente")
    assert record.status == AttendanceStatus.PRESENT


def test_summary_falls_back_to_records(cache):
    repo = FakeAttendanceRepo(
        [
            AttendanceRecord(id=1, student_id=5, route_id=1, status=AttendanceStatus.PRESENT),
            AttendanceRecord(id=2, student_id=5, route_id=1, status=AttendanceStatus.ABSENT),
            AttendanceRecord(id=3, student_id=5, route_id=2, status=AttendanceStatus.PRESENT),
            AttendanceRecord(id=4, student_id=6, route_id=2, status=AttendanceStatus.PRESENT),
        ]
    )

    summary = AttendanceService(repo, cache).student_summary(5)

    assert (summary.total, summary.present, summary.absent) == (3, 2, 1)
    assert summary.rate == 66.7


def test_summary_prefers_backend_totals(cache):
    backend = AttendanceSummary(total=10, present=9, absent=1)

    assert AttendanceService(FakeAttendanceRepo(summary=backend), cache).student_summary(5) is backend


def test_empty_summary_rate_is_zero():
    assert AttendanceService.summarize([]).rate == 0.0
