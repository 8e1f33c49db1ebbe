import pytest

from src import db
from src.holiday_data import PUBLIC_HOLIDAYS, SCHOOL_HOLIDAY_RANGES
from src.holidays_repo import add_holiday, add_holidays, delete_holiday, list_holidays, load_holiday_set
from src.school_holidays_repo import (
    add_school_holiday_range,
    delete_school_holiday_range,
    list_school_holiday_ranges,
    load_school_holiday_set,
)


def test_init_db_seeds_defaults(temp_db):
    assert load_holiday_set() == PUBLIC_HOLIDAYS
    assert len(list_school_holiday_ranges()) == len(SCHOOL_HOLIDAY_RANGES)


def test_seed_runs_once(temp_db):
    delete_holiday("2026-12-25")
    db.init_db()
    assert "2026-12-25" not in load_holiday_set()


def test_init_without_seed(tmp_path, monkeypatch):
    monkeypatch.setattr(db, "DB_PATH", tmp_path / "empty.sqlite3")
    db.init_db(seed=False)
    assert load_holiday_set() == {}
    assert load_school_holiday_set() == frozenset()


def test_list_holidays_by_year(temp_db):
    rows = list_holidays(year=2025)
    assert len(rows) == sum(1 for d in PUBLIC_HOLIDAYS if d.startswith("2025-"))
    assert [r["date"] for r in rows] == sorted(r["date"] for r in rows)
    assert rows[0] == {"date": "2025-01-01", "label": "New Year's Day"}


def test_add_and_replace_holiday(temp_db):
    add_holiday("2026-11-08", " Deepavali ")
    assert load_holiday_set()["2026-11-08"] == "Deepavali"
    add_holiday("2026-11-08", "Deepavali (observed)")
    assert load_holiday_set()["2026-11-08"] == "Deepavali (observed)"

    assert add_holidays({"2027-01-01": "New Year's Day", "2027-08-31": "National Day"}) == 2
    assert add_holidays({}) == 0
    assert len(list_holidays(year=2027)) == 2


@pytest.mark.parametrize(
    "day,label",
    [("2026-11-8", "Deepavali"), ("2026-02-30", "x"), ("2026-11-08", "  "), ("2026-W01-1", "Week date")],
)
def test_add_holiday_rejects_bad_input(temp_db, day, label):
    with pytest.raises(ValueError):
        add_holiday(day, label)


def test_school_holiday_set_expands_ranges(temp_db):
    dates = load_school_holiday_set()
    assert "2026-05-23" in dates
    assert "2026-05-31" in dates
    assert "2026-06-07" in dates
    assert "2026-06-08" not in dates
    assert "2026-01-11" in dates
    assert "2026-12-25" not in dates


def test_add_and_delete_school_range(temp_db):
    rid = add_school_holiday_range("2027-03-20", "2027-03-28", "Cuti Penggal 1")
    assert "2027-03-24" in load_school_holiday_set()
    assert any(r["id"] == rid and r["note"] == "Cuti Penggal 1" for r in list_school_holiday_ranges())

    delete_school_holiday_range(rid)
    assert "2027-03-24" not in load_school_holiday_set()


def test_school_range_validation(temp_db):
    with pytest.raises(ValueError):
        add_school_holiday_range("2027-03-28", "2027-03-20")
    with pytest.raises(ValueError):
        add_school_holiday_range("2026-05-23", "2026-06-07")  # already seeded


def test_week_date_is_not_stored(temp_db):
    with pytest.raises(ValueError):
        add_holiday("2026-W01-1", "Week date")
    with pytest.raises(ValueError):
        add_school_holiday_range("2026-W01-1", "2026-01-04")
    assert "2025-12-29" not in load_holiday_set()
