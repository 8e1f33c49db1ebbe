# src/calendar_service.py
"""
Glue between the web form and the calendar core: year validation,
engine construction from the holiday tables, workbook generation.
"""
from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional

from src import config
from src.calendar_engine import CalendarLayoutEngine, MonthGrid
from src.db import init_db
from src.errors import YearOutOfRangeError
from src.exporter import XLSX_MIME, export_calendar_xlsx
from src.holidays_repo import load_holiday_set
from src.school_holidays_repo import load_school_holiday_set

logger = logging.getLogger(__name__)

__all__ = [
    "GeneratedWorkbook",
    "XLSX_MIME",
    "build_engine",
    "calendar_filename",
    "generate_workbook",
    "validate_year",
]


class GeneratedWorkbook(NamedTuple):
    file_name: str
    data: bytes
    grids: List[MonthGrid]      # the grids written to the file, reused for the preview


def validate_year(value, year_min: Optional[int] = None, year_max: Optional[int] = None) -> int:
    """Parse a form value into a year inside [year_min, year_max] (config bounds by default)."""
    lo = config.YEAR_MIN if year_min is None else year_min
    hi = config.YEAR_MAX if year_max is None else year_max

    if isinstance(value, bool):
        raise YearOutOfRangeError("Invalid year selected")
    try:
        year = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise YearOutOfRangeError("Invalid year selected") from exc

    if not lo <= year <= hi:
        logger.warning("Rejected year %s (allowed %s-%s)", year, lo, hi)
        raise YearOutOfRangeError(f"Invalid year selected: {year} (allowed {lo}-{hi})")
    return year


def calendar_filename(year: int) -> str:
    return f"Calendar_{year}.xlsx"


def build_engine() -> CalendarLayoutEngine:
    init_db()
    holidays = load_holiday_set()
    school_holidays = load_school_holiday_set()
    logger.info("Loaded %d public holidays, %d school holiday dates", len(holidays), len(school_holidays))
    return CalendarLayoutEngine(holidays, school_holidays)


def generate_workbook(year, engine: Optional[CalendarLayoutEngine] = None) -> GeneratedWorkbook:
    """Validated year -> download filename, xlsx bytes and the month grids behind them."""
    year = validate_year(year)
    if engine is None:
        engine = build_engine()
    grids = engine.generate(year)
    return GeneratedWorkbook(calendar_filename(year), export_calendar_xlsx(grids, year), grids)
