from __future__ import annotations

from datetime import date, datetime
from typing import Optional

MONTH_NAMES = (
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_api_date(value) -> Optional[date]:
    """Backend dates come as ``2024-03-01`` or ``2024-03-01T00:00:00(.fff)(Z)``."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value)[:10])
    except ValueError:
        return None


def format_br_date(value) -> str:
    d = parse_api_date(value)
    return d.strftime("%d/%m/%Y") if d else "-"


def month_label(month: Optional[str]) -> str:
    """``2024-03`` -> ``Março/2024``; anything else is returned unchanged."""
    if not month:
        return "-"
    try:
        year_s, month_s = str(month).split("-")[:2]
        return f"{MONTH_NAMES[int(month_s) - 1]}/{int(year_s)}"
    except (ValueError, IndexError):
        return str(month)


def today() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()
