from dataclasses import dataclass
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    db_path: Path
    timezone: str
    log_level: int


def load_settings() -> Settings:
    db_raw = os.getenv("DB_PATH", "data/tasks.db").strip()
    tz = os.getenv("TZ", "UTC").strip() or "UTC"
    level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise RuntimeError(f"LOG_LEVEL invalid in .env: {level_name}")

    return Settings(
        db_path=Path(db_raw),
        timezone=tz,
        log_level=level,
    )
