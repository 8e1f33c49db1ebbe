import pytest

from src import db
from src.calendar_engine import CalendarLayoutEngine
from src.holiday_data import PUBLIC_HOLIDAYS, SCHOOL_HOLIDAY_RANGES
from src.calendar_utils import expand_date_ranges


@pytest.fixture
def school_dates():
    return expand_date_ranges((start, end) for start, end, _ in SCHOOL_HOLIDAY_RANGES)


@pytest.fixture
def engine(school_dates):
    """Engine over the default Malaysian tables."""
    return CalendarLayoutEngine(PUBLIC_HOLIDAYS, school_dates)


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    path = tmp_path / "calendar_test.sqlite3"
    monkeypatch.setattr(db, "DB_PATH", path)
    db.init_db()
    return path
