import calendar
import operator
import re
from datetime import date
from typing import FrozenSet, Iterable, Tuple

import pandas as pd

# The Gregorian calendar repeats exactly every 400 years (146097 days, a
# whole number of weeks), so any year maps onto one the stdlib can handle.
GREGORIAN_CYCLE = 400
_ANCHOR_YEAR = 2000

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def _cycle_year(year: int) -> int:
    return _ANCHOR_YEAR + operator.index(year) % GREGORIAN_CYCLE


def is_leap_year(year: int) -> bool:
    return calendar.isleap(operator.index(year))


def month_info(year: int, month: int) -> Tuple[int, int]:
    """(first_weekday_offset, days_in_month), offset 0=Mon ... 6=Sun."""
    return calendar.monthrange(_cycle_year(year), month)


def days_in_month(year: int, month: int) -> int:
    return month_info(year, month)[1]


def first_weekday_offset(year: int, month: int) -> int:
    return month_info(year, month)[0]


def week_count(year: int, month: int) -> int:
    offset, days = month_info(year, month)
    return -(-(offset + days) // 7)


def iso_key(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def parse_iso(value: str) -> date:
    """YYYY-MM-DD -> date, ValueError on anything else."""
    text = (value or "").strip()
    # fromisoformat also takes week dates (2026-W01-1) on newer Pythons
    if not _ISO_DATE.fullmatch(text):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    return date.fromisoformat(text)


def expand_date_ranges(ranges: Iterable[Tuple[str, str]]) -> FrozenSet[str]:
    """
    Inclusive (start, end) ISO ranges -> set of ISO dates.
    Overlapping ranges collapse into one set.
    """
    out = set()
    for start, end in ranges:
        d0, d1 = parse_iso(start), parse_iso(end)
        if d1 < d0:
            raise ValueError(f"Range ends before it starts: {start} .. {end}")
        out.update(d.strftime("%Y-%m-%d") for d in pd.date_range(d0, d1, freq="D"))
    return frozenset(out)
