# src/calendar_engine.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import AbstractSet, Dict, List, Mapping, Optional, Tuple

from src.calendar_utils import iso_key, month_info
from src.errors import ConfigurationError, InvalidYearError

logger = logging.getLogger(__name__)

MONTH_NAMES: Dict[int, str] = {
    1: "JANUARY",
    2: "FEBRUARY",
    3: "MARCH",
    4: "APRIL",
    5: "MAY",
    6: "JUNE",
    7: "JULY",
    8: "AUGUST",
    9: "SEPTEMBER",
    10: "OCTOBER",
    11: "NOVEMBER",
    12: "DECEMBER",
}

DAY_NAMES: Tuple[str, ...] = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")

WEEKEND_COLUMNS = (5, 6)


class VisualCategory(str, Enum):
    HOLIDAY_AND_SCHOOL_HOLIDAY = "HolidayAndSchoolHoliday"
    PUBLIC_HOLIDAY = "PublicHoliday"
    SCHOOL_HOLIDAY_WEEKEND = "SchoolHolidayWeekend"
    SCHOOL_HOLIDAY = "SchoolHoliday"
    WEEKEND = "Weekend"
    PLAIN = "Plain"


class HeaderTone(str, Enum):
    ACCENT_DARK = "AccentDark"
    ACCENT_LIGHT = "AccentLight"
    WEEKEND = "Weekend"


# (is_public_holiday, is_school_holiday, is_weekend) -> category
_CATEGORY_TABLE: Dict[Tuple[bool, bool, bool], VisualCategory] = {
    (True, True, True): VisualCategory.HOLIDAY_AND_SCHOOL_HOLIDAY,
    (True, True, False): VisualCategory.HOLIDAY_AND_SCHOOL_HOLIDAY,
    (True, False, True): VisualCategory.PUBLIC_HOLIDAY,
    (True, False, False): VisualCategory.PUBLIC_HOLIDAY,
    (False, True, True): VisualCategory.SCHOOL_HOLIDAY_WEEKEND,
    (False, True, False): VisualCategory.SCHOOL_HOLIDAY,
    (False, False, True): VisualCategory.WEEKEND,
    (False, False, False): VisualCategory.PLAIN,
}


def resolve_visual_category(is_public_holiday: bool, is_school_holiday: bool, is_weekend: bool) -> VisualCategory:
    """
    Single styling bucket for a cell. Highest priority first:
    public+school holiday, public holiday, school holiday on a weekend,
    school holiday, weekend, plain.
    """
    return _CATEGORY_TABLE[(bool(is_public_holiday), bool(is_school_holiday), bool(is_weekend))]


def header_tone(column: int) -> HeaderTone:
    """Day-header tone for a weekday column (0=MON ... 6=SUN)."""
    if not 0 <= column <= 6:
        raise ValueError(f"Weekday column must be 0..6, got {column}")
    if column in WEEKEND_COLUMNS:
        return HeaderTone.WEEKEND
    return HeaderTone.ACCENT_DARK if column % 2 == 0 else HeaderTone.ACCENT_LIGHT


@dataclass(frozen=True)
class DayCell:
    week: int
    column: int                       # 0=Mon ... 6=Sun
    date_number: Optional[int]        # None -> padding cell
    is_weekend: bool
    is_public_holiday: bool = False
    holiday_label: Optional[str] = None
    is_school_holiday: bool = False

    @property
    def is_padding(self) -> bool:
        return self.date_number is None

    @property
    def visual_category(self) -> VisualCategory:
        return resolve_visual_category(self.is_public_holiday, self.is_school_holiday, self.is_weekend)

    @property
    def label(self) -> str:
        # school holidays never carry text
        if self.is_public_holiday and self.holiday_label:
            return self.holiday_label
        return ""


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    first_weekday_offset: int
    days_in_month: int
    week_count: int
    cells: Tuple[DayCell, ...]

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month]

    def cell(self, week: int, column: int) -> DayCell:
        if not (0 <= week < self.week_count and 0 <= column <= 6):
            raise IndexError(f"No cell at week={week}, column={column}")
        return self.cells[week * 7 + column]

    def weeks(self) -> List[Tuple[DayCell, ...]]:
        return [self.cells[w * 7:(w + 1) * 7] for w in range(self.week_count)]

    def dated_cells(self) -> List[DayCell]:
        return [c for c in self.cells if c.date_number is not None]


class CalendarLayoutEngine:
    """
    Lays out the 12 months of a year as 7-column week grids and marks
    public/school holidays on each day.

    Both lookup tables are copied into read-only containers at construction;
    generate() only reads them, so one instance can serve concurrent callers.
    """

    def __init__(self, holidays: Optional[Mapping[str, str]], school_holidays: Optional[AbstractSet[str]]):
        if holidays is None:
            raise ConfigurationError("Public holiday table is required")
        if school_holidays is None:
            raise ConfigurationError("School holiday set is required (pass an empty set if unused)")
        self._holidays: Mapping[str, str] = MappingProxyType(dict(holidays))
        self._school_holidays: AbstractSet[str] = frozenset(school_holidays)

    @classmethod
    def without_school_holidays(cls, holidays: Optional[Mapping[str, str]]) -> "CalendarLayoutEngine":
        return cls(holidays, frozenset())

    @property
    def holidays(self) -> Mapping[str, str]:
        return self._holidays

    @property
    def school_holidays(self) -> AbstractSet[str]:
        return self._school_holidays

    def generate(self, year: int) -> List[MonthGrid]:
        grids = [self.build_month(year, month) for month in range(1, 13)]
        logger.debug("Laid out %d months for %s", len(grids), year)
        return grids

    def build_month(self, year: int, month: int) -> MonthGrid:
        try:
            offset, n_days = month_info(year, month)
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidYearError(f"Cannot build calendar for year={year!r}, month={month!r}") from exc

        n_weeks = -(-(offset + n_days) // 7)
        cells: List[DayCell] = []
        day = 1

        for week in range(n_weeks):
            for col in range(7):
                is_weekend = col in WEEKEND_COLUMNS
                if (week == 0 and col < offset) or day > n_days:
                    cells.append(DayCell(week=week, column=col, date_number=None, is_weekend=is_weekend))
                    continue

                key = iso_key(year, month, day)
                label = self._holidays.get(key)
                cells.append(
                    DayCell(
                        week=week,
                        column=col,
                        date_number=day,
                        is_weekend=is_weekend,
                        is_public_holiday=label is not None,
                        holiday_label=label,
                        is_school_holiday=key in self._school_holidays,
                    )
                )
                day += 1

        return MonthGrid(
            year=year,
            month=month,
            first_weekday_offset=offset,
            days_in_month=n_days,
            week_count=n_weeks,
            cells=tuple(cells),
        )
