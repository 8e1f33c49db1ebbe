from typing import Dict, List, Mapping, Optional
from src.db import get_conn
from src.calendar_utils import parse_iso

def _clean(day: str, label: str):
    iso = parse_iso(day).isoformat()
    text = (label or "").strip()
    if not text:
        raise ValueError(f"Holiday on {iso} needs a label")
    return iso, text

def add_holiday(day: str, label: str) -> None:
    row = _clean(day, label)
    with get_conn() as conn:
        conn.execute("INSERT OR REPLACE INTO holidays (date, label) VALUES (?, ?)", row)
        conn.commit()

def add_holidays(days: Mapping[str, str]) -> int:
    if not days:
        return 0
    rows = [_clean(d, lbl) for d, lbl in days.items()]
    with get_conn() as conn:
        conn.executemany("INSERT OR REPLACE INTO holidays (date, label) VALUES (?, ?)", rows)
        conn.commit()
    return len(rows)

def list_holidays(year: Optional[int] = None) -> List[Dict[str, str]]:
    q = "SELECT date, label FROM holidays"
    params = []
    if year is not None:
        q += " WHERE date LIKE ?"
        params.append(f"{int(year):04d}-%")
    q += " ORDER BY date ASC"
    with get_conn() as conn:
        rows = conn.execute(q, params).fetchall()
    return [dict(r) for r in rows]

def delete_holiday(day: str) -> None:
    with get_conn() as conn:
        conn.execute("DELETE FROM holidays WHERE date = ?", (day,))
        conn.commit()

def load_holiday_set() -> Dict[str, str]:
    """ISO date -> label, for CalendarLayoutEngine."""
    return {r["date"]: r["label"] for r in list_holidays()}
