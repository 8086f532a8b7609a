from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import pytest

from src.unibus_admin.unibus_admin.core.enums import PaymentMethod, PaymentStatus
from src.unibus_admin.unibus_admin.core.exceptions import NotFoundError, ValidationError
from src.unibus_admin.unibus_admin.payments.model import Payment
from src.unibus_admin.unibus_admin.payments.service import PaymentService


class FakePaymentsRepo:
    def __init__(self, payments=()):
        self._items = {p.id: p for p in payments}
        self.list_calls = []
        self.created = []

    def list(self, **params):
        self.list_calls.append(params)
        return list(self._items.values())

    def get_by_id(self, item_id):
        return self._items.get(int(item_id))

    def create(self, data):
        self.created.append(data)
        return Payment(id=99, student_id=data["student_id"], amount=data["amount"], month=data["month"], status=data["status"])

    def update(self, item_id, data):
        return replace(self._items[item_id], amount=data["amount"], status=data["status"])

    def delete(self, item_id):
        self._items.pop(item_id)

    def confirm(self, item_id, payment_method):
        return replace(self._items[item_id], status=PaymentStatus.PAID, payment_method=payment_method)


def _payment(pid, amount, status, **kw):
    return Payment(id=pid, student_id=kw.pop("student_id", 1), amount=Decimal(amount), month="2025-03", status=status, **kw)


PAYMENTS = [
    _payment(1, "150", PaymentStatus.PAID),
    _payment(2, "150", PaymentStatus.PENDING),
    _payment(3, "120.50", PaymentStatus.OVERDUE, student_id=2),
]


def test_list_passes_filters_and_caches(cache):
    repo = FakePaymentsRepo(PAYMENTS)
    service = PaymentService(repo, cache)

    service.list(student_id="1", status="Pago", month="")
    service.list(student_id="1", status="Pago", month="")

    assert repo.list_calls == [{"studentId": 1, "status": "Pago", "month": None}]


def test_get_missing_payment_raises(cache):
    with pytest.raises(NotFoundError):
        PaymentService(FakePaymentsRepo(), cache).get(7)


def test_create_normalizes_form_values(cache):
    repo = FakePaymentsRepo()

    PaymentService(repo, cache).create(student_id="4", month="2025-05", amount="150,50", status="Pendente")

    data = repo.created[0]
    assert data["student_id"] == 4
    assert data["amount"] == Decimal("150.50")
    assert data["status"] == PaymentStatus.PENDING
    assert data["payment_method"] is None


def test_paid_payment_requires_method(cache):
    with pytest.raises(ValidationError, match="forma de pagamento"):
        PaymentService(FakePaymentsRepo(), cache).create(student_id=4, month="2025-05", amount="150", status="Pago")


def test_create_requires_student(cache):
    with pytest.raises(ValidationError, match="Aluno"):
        PaymentService(FakePaymentsRepo(), cache).create(student_id="", month="2025-05", amount="150", status="Pendente")


def test_write_invalidates_payments_and_dashboard(cache):
    service = PaymentService(FakePaymentsRepo(PAYMENTS), cache)
    service.list()
    cache.fetch(("dashboard", "stats"), lambda: "stats")
    cache.fetch(("routes",), list)

    service.confirm(2, "PIX")

    assert ("dashboard", "stats") not in cache
    assert ("payments", None, None, None) not in cache
    assert ("routes",) in cache


def test_confirm_rejects_unknown_method(cache):
    with pytest.raises(ValidationError):
        PaymentService(FakePaymentsRepo(PAYMENTS), cache).confirm(2, "Cheque")


def test_summary_totals_by_status():
    summary = PaymentService.summary(PAYMENTS)

    assert summary.total_amount == Decimal("420.50")
    assert summary.paid_amount == Decimal("150")
    assert summary.pending_amount == Decimal("150")
    assert summary.overdue_amount == Decimal("120.50")
    assert (summary.pending_count, summary.overdue_count) == (1, 1)


def test_student_names_fill_missing_only():
    named = _payment(4, "10", PaymentStatus.PAID, student_name="Bia")

    out = PaymentService.with_student_names([PAYMENTS[0], named, PAYMENTS[2]], {1: "Ana"})

    assert [p.student_name for p in out] == ["Ana", "Bia", "Aluno #2"]


def test_csv_export():
    payload = PaymentService.to_csv([replace(PAYMENTS[0], payment_method=PaymentMethod.PIX)]).decode("utf-8-sig")
    header, row = payload.strip().splitlines()

    assert header.startswith("id,student_id,student_name,month,amount")
    assert row == "1,1,,2025-03,150.00,Pago,PIX,,"


def test_months_newest_first():
    payments = [replace(PAYMENTS[0], month="2025-01"), PAYMENTS[1], replace(PAYMENTS[2], month=None)]

    assert [m for m, _ in PaymentService.months(payments)] == ["2025-03", "2025-01"]
