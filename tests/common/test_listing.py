from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from src.unibus_admin.unibus_admin.common.listing import count_by, filter_records, matches_search, paginate, sum_by
from src.unibus_admin.unibus_admin.core.enums import PaymentStatus


@dataclass
class Row:
    name: str
    city: Optional[str]
    status: object
    amount: Decimal = Decimal("0")


ROWS = [
    Row("Fatec Jundiaí", "Jundiaí", PaymentStatus.PAID, Decimal("100")),
    Row("Unip", "Campinas", PaymentStatus.PENDING, Decimal("80")),
    Row("Anhanguera", None, PaymentStatus.PAID, Decimal("50.50")),
]


def test_search_is_case_insensitive_over_fields():
    assert [r.name for r in filter_records(ROWS, search="JUND", fields=("name", "city"))] == ["Fatec Jundiaí"]
    assert [r.name for r in filter_records(ROWS, search="campinas", fields=("name", "city"))] == ["Unip"]


def test_blank_search_and_filters_keep_everything():
    assert filter_records(ROWS, search="  ", fields=("name",), status=None, city="") == ROWS


def test_equality_filter_compares_enum_labels():
    assert len(filter_records(ROWS, status="Pago")) == 2
    assert len(filter_records(ROWS, status=PaymentStatus.PENDING)) == 1


def test_records_missing_the_filtered_field_are_dropped():
    assert [r.name for r in filter_records(ROWS, city="Jundiaí")] == ["Fatec Jundiaí"]


def test_matches_search_works_on_dicts():
    assert matches_search({"nome": "Rota Centro"}, "centro", ("nome",))
    assert not matches_search({"nome": None}, "centro", ("nome",))


def test_paginate_slices_and_reports_bounds():
    page = paginate(list(range(25)), 2, 10)

    assert page.items == list(range(10, 20))
    assert page.total_pages == 3
    assert page.has_prev and page.has_next
    assert (page.start_index, page.end_index) == (11, 20)


def test_paginate_clamps_out_of_range_pages():
    assert paginate(list(range(25)), 9, 10).page == 3
    assert paginate(list(range(25)), -1, 10).page == 1
    assert paginate(list(range(25)), "abc", 10).page == 1


def test_paginate_empty_list():
    page = paginate([], 3, 10)

    assert page.items == []
    assert page.page == 1
    assert page.total_pages == 0
    assert not page.has_next
    assert not page.has_prev
    assert page.start_index == 0


def test_count_and_sum_by_field():
    assert count_by(ROWS, "status") == {"Pago": 2, "Pendente": 1}
    assert sum_by(ROWS, "amount") == Decimal("230.50")
    assert sum_by(ROWS, "amount", status=PaymentStatus.PAID) == Decimal("150.50")
