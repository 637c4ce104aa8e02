"""Resolve statement ``MM/DD`` dates to ISO calendar dates."""
from __future__ import annotations
from datetime import date
from typing import Callable, Optional

from core.errors import MalformedDate

Clock = Callable[[], date]


def system_clock() -> date:
    return date.today()


def resolve_year(
    record_year: Optional[int] = None,
    batch_year: Optional[int] = None,
    clock: Clock = system_clock,
) -> int:
    """
    Pick the statement year for a record.

    The year sent with the record wins, then the per-batch override, then the
    current calendar year according to ``clock``.
    """
    if record_year is not None:
        return int(record_year)
    if batch_year is not None:
        return int(batch_year)
    return clock().year


def normalize(raw: str, statement_year: int) -> str:
    """
    Turn ``MM/DD`` plus a statement year into a zero-padded ``YYYY-MM-DD``.

    Raises:
        MalformedDate: if ``raw`` is not two numeric ``/``-separated parts or
            does not name a real day of ``statement_year``.

    Examples:
        >>> normalize("1/5", 2024)
        '2024-01-05'
    """
    if not isinstance(raw, str):
        raise MalformedDate(raw, "not a string")

    parts = raw.strip().split("/")
    if len(parts) != 2:
        raise MalformedDate(raw, "expected MM/DD")

    month_s, day_s = (p.strip() for p in parts)
    if not (month_s.isdigit() and day_s.isdigit()):
        raise MalformedDate(raw, "month and day must be numeric")

    try:
        resolved = date(int(statement_year), int(month_s), int(day_s))
    except ValueError as e:
        raise MalformedDate(raw, str(e)) from e

    return resolved.isoformat()
