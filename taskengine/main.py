from __future__ import annotations

import asyncio
import json
import logging
import os

from taskengine.config import load_settings
from taskengine.domain.common.time import to_iso
from taskengine.domain.tasks.service import TaskService
from taskengine.infra.clock.system_clock import SystemClock
from taskengine.infra.db.connection import Database
from taskengine.infra.db.repo.tasks_sqlite import TasksSqliteRepo
from taskengine.infra.db.schema_version import apply_migrations


async def build_service(db_path: str, tz_name: str = "UTC") -> TaskService:
    """Open the database, apply pending migrations and wire the service."""
    clock = SystemClock(tz_name)
    db = Database(db_path)
    await apply_migrations(db, now_iso=to_iso(clock.now()))
    return TaskService(TasksSqliteRepo(db), clock)


async def main() -> None:
    settings = load_settings()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s'
    )
    logger = logging.getLogger(__name__)

    try:
        os.makedirs(os.path.dirname(settings.db_path) or ".", exist_ok=True)
        service = await build_service(str(settings.db_path), settings.timezone)
        logger.info("Task store ready: %s", settings.db_path)

        summary = await service.summary()
        logger.info("Dashboard: %s", json.dumps(summary.to_dict(), ensure_ascii=False))
    except Exception:
        logger.error("Startup failed", exc_info=True)
        raise


if __name__ == "__main__":
    asyncio.run(main())
