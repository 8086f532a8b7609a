from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.unibus_admin.unibus_admin.common.validators import (
    optional_date,
    optional_int,
    require_choice,
    require_email,
    require_int_range,
    require_month,
    require_positive_amount,
)
from src.unibus_admin.unibus_admin.core.enums import BusStatus
from src.unibus_admin.unibus_admin.core.exceptions import ValidationError


def test_email():
    assert require_email(" ana@fatec.br ") == "ana@fatec.br"
    with pytest.raises(ValidationError):
        require_email("ana")
    with pytest.raises(ValidationError, match="obrigatório"):
        require_email("")


@pytest.mark.parametrize("raw,expected", [("150", Decimal("150")), ("150,50", Decimal("150.50")), (99.9, Decimal("99.9"))])
def test_positive_amount_parses_form_input(raw, expected):
    assert require_positive_amount(raw) == expected


@pytest.mark.parametrize("raw", ["0", "-3", "abc", None])
def test_positive_amount_rejects(raw):
    with pytest.raises(ValidationError):
        require_positive_amount(raw)


def test_month_format():
    assert require_month("2025-03") == "2025-03"
    with pytest.raises(ValidationError):
        require_month("2025-13")


def test_optional_values():
    assert optional_int("", "Rota") is None
    assert optional_int("4", "Rota") == 4
    assert optional_date("2025-02-01T10:00:00", "Data") == date(2025, 2, 1)
    with pytest.raises(ValidationError):
        optional_date("01/02/2025", "Data")


def test_int_range_and_choice():
    assert require_int_range("40", "Capacidade", min_value=1, max_value=100) == 40
    with pytest.raises(ValidationError):
        require_int_range("101", "Capacidade", min_value=1, max_value=100)
    assert require_choice("Manutenção", BusStatus, "Status") == BusStatus.MAINTENANCE
    with pytest.raises(ValidationError):
        require_choice("Quebrado", BusStatus, "Status")
