"""In-memory search, filter and pagination for list pages.

The backend returns whole collections; list pages narrow them down here with
a single linear pass and slice the result into pages.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Sequence

from ..core.constants import DEFAULT_PAGE_SIZE


def _get(record: Any, field: str) -> Any:
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def _as_text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def matches_search(record: Any, term: str, fields: Sequence[str]) -> bool:
    needle = (term or "").strip().lower()
    if not needle:
        return True
    for field in fields:
        value = _get(record, field)
        if value is None:
            continue
        if needle in _as_text(value).lower():
            return True
    return False


def filter_records(records: Iterable[Any], *, search: str = "", fields: Sequence[str] = (), **equals: Any) -> list:
    """Keep records matching ``search`` on any of ``fields`` and every ``equals`` pair.

    Empty search terms and ``None``/``""`` filter values are ignored.
    """
    active = {k: _as_text(v) for k, v in equals.items() if v is not None and v != ""}
    out = []
    for record in records:
        if not matches_search(record, search, fields):
            continue
        ok = True
        for field, expected in active.items():
            value = _get(record, field)
            if value is None or _as_text(value) != expected:
                ok = False
                break
        if ok:
            out.append(record)
    return out


@dataclass(frozen=True)
class Page:
    items: list
    page: int
    per_page: int
    total: int
    total_pages: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def start_index(self) -> int:
        if not self.items:
            return 0
        return (self.page - 1) * self.per_page + 1

    @property
    def end_index(self) -> int:
        if not self.items:
            return 0
        return self.start_index + len(self.items) - 1


def paginate(items: Sequence[Any], page: Any = 1, per_page: int = DEFAULT_PAGE_SIZE) -> Page:
    try:
        page_n = int(page)
    except (TypeError, ValueError):
        page_n = 1
    per_page = max(1, int(per_page))
    total = len(items)
    total_pages = math.ceil(total / per_page)

    # an empty list still renders page 1
    page_n = min(max(1, page_n), max(total_pages, 1))

    start = (page_n - 1) * per_page
    return Page(
        items=list(items[start:start + per_page]),
        page=page_n,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
    )


def count_by(records: Iterable[Any], field: str) -> dict[str, int]:
    counts: dict[str, int] = {}
    for record in records:
        value = _get(record, field)
        key = _as_text(value) if value is not None else ""
        counts[key] = counts.get(key, 0) + 1
    return counts


def sum_by(records: Iterable[Any], field: str, **equals: Any) -> Decimal:
    total = Decimal("0")
    for record in filter_records(records, **equals):
        value = _get(record, field)
        if value is None:
            continue
        total += Decimal(str(value))
    return total
