import sqlite3
from typing import Dict, FrozenSet, List
from src.db import get_conn
from src.calendar_utils import expand_date_ranges, parse_iso

def add_school_holiday_range(start: str, end: str, note: str = "") -> int:
    d0, d1 = parse_iso(start), parse_iso(end)
    if d1 < d0:
        raise ValueError(f"School holiday ends before it starts: {start} .. {end}")
    with get_conn() as conn:
        try:
            cur = conn.execute(
                "INSERT INTO school_holidays (start_date, end_date, note) VALUES (?, ?, ?)",
                (d0.isoformat(), d1.isoformat(), (note or "").strip()),
            )
        except sqlite3.IntegrityError as exc:
            raise ValueError(f"School holiday {d0} .. {d1} already exists") from exc
        conn.commit()
        return int(cur.lastrowid)

def list_school_holiday_ranges() -> List[Dict]:
    with get_conn() as conn:
        rows = conn.execute(
            "SELECT id, start_date, end_date, note FROM school_holidays ORDER BY start_date ASC"
        ).fetchall()
    return [dict(r) for r in rows]

def delete_school_holiday_range(range_id: int) -> None:
    with get_conn() as conn:
        conn.execute("DELETE FROM school_holidays WHERE id = ?", (int(range_id),))
        conn.commit()

def load_school_holiday_set() -> FrozenSet[str]:
    """Every ISO date covered by a stored range."""
    ranges = [(r["start_date"], r["end_date"]) for r in list_school_holiday_ranges()]
    return expand_date_ranges(ranges)
