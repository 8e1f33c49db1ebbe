import logging
import sqlite3

from src import config
from src.holiday_data import PUBLIC_HOLIDAYS, SCHOOL_HOLIDAY_RANGES

logger = logging.getLogger(__name__)

DB_PATH = config.DB_PATH

def get_conn() -> sqlite3.Connection:
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn

def init_db(seed: bool = True) -> None:
    with get_conn() as conn:
        cur = conn.cursor()

        cur.execute("""
        CREATE TABLE IF NOT EXISTS holidays (
            date TEXT PRIMARY KEY,
            label TEXT NOT NULL
        );
        """)

        cur.execute("""
        CREATE TABLE IF NOT EXISTS school_holidays (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            start_date TEXT NOT NULL,
            end_date TEXT NOT NULL,
            note TEXT NOT NULL DEFAULT '',
            UNIQUE(start_date, end_date)
        );
        """)

        cur.execute("""
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );
        """)

        if seed:
            _seed_defaults(cur)

        conn.commit()

def _seed_defaults(cur: sqlite3.Cursor) -> None:
    # seed only once; later deletions by the user must stick
    row = cur.execute("SELECT value FROM settings WHERE key = 'seeded'").fetchone()
    if row is not None:
        return

    cur.executemany(
        "INSERT OR IGNORE INTO holidays (date, label) VALUES (?, ?)",
        sorted(PUBLIC_HOLIDAYS.items()),
    )
    cur.executemany(
        "INSERT OR IGNORE INTO school_holidays (start_date, end_date, note) VALUES (?, ?, ?)",
        SCHOOL_HOLIDAY_RANGES,
    )
    cur.execute("INSERT INTO settings (key, value) VALUES ('seeded', '1')")
    logger.info(
        "Seeded %d public holidays and %d school holiday ranges into %s",
        len(PUBLIC_HOLIDAYS), len(SCHOOL_HOLIDAY_RANGES), DB_PATH,
    )
