# src/config.py
import os
from pathlib import Path

from dotenv import load_dotenv

from src.errors import ConfigurationError

load_dotenv()

ROOT_DIR = Path(__file__).resolve().parent.parent


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


DB_PATH = Path(os.environ.get("CALENDAR_DB_PATH") or ROOT_DIR / "calendar.sqlite3")

# inclusive
YEAR_MIN = _env_int("CALENDAR_YEAR_MIN", 2020)
YEAR_MAX = _env_int("CALENDAR_YEAR_MAX", 2100)
DEFAULT_YEAR = _env_int("CALENDAR_DEFAULT_YEAR", 2026)

LOG_LEVEL = os.environ.get("CALENDAR_LOG_LEVEL", "INFO").upper()

if YEAR_MIN > YEAR_MAX:
    raise ConfigurationError(f"CALENDAR_YEAR_MIN ({YEAR_MIN}) > CALENDAR_YEAR_MAX ({YEAR_MAX})")
