from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from taskengine.domain.common.errors import DomainError, NotFoundError
from taskengine.domain.tasks.models import Summary, Task
from taskengine.domain.tasks.normalizer import normalize
from taskengine.domain.tasks.ports import Clock, TaskRepository
from taskengine.domain.tasks.query import build_query
from taskengine.domain.tasks.rules import check_create, check_update
from taskengine.domain.tasks.stats import summarize

logger = logging.getLogger(__name__)


class TaskService:
    """
    Task business logic: normalize -> rules -> persist. No HTTP. No sqlite.

    Writes are serialized so the duplicate/quota checks and the write that
    follows see the same snapshot within this process.
    """

    def __init__(self, repo: TaskRepository, clock: Clock) -> None:
        self._repo = repo
        self._clock = clock
        self._write_lock = asyncio.Lock()

    async def create_task(self, raw: Mapping[str, Any]) -> Task:
        now = self._clock.now()
        draft = self._unwrap(normalize(raw, now), "create")
        async with self._write_lock:
            tasks = await self._repo.list_all()
            self._unwrap(check_create(tasks, draft), "create")
            task = await self._repo.insert(draft, created_at=now)
        logger.info("Task created: id=%s priority=%s", task.id, task.priority)
        return task

    async def update_task(self, task_id: int, raw: Mapping[str, Any]) -> Task:
        now = self._clock.now()
        draft = self._unwrap(normalize(raw, now), "update")
        completed = bool(raw.get("completed"))
        async with self._write_lock:
            tasks = await self._repo.list_all()
            self._unwrap(check_update(tasks, task_id, draft, completed), "update")
            task = await self._repo.update(task_id, draft, completed)
        if task is None:
            raise NotFoundError("task not found")
        logger.info("Task updated: id=%s completed=%s", task.id, task.completed)
        return task

    async def get_task(self, task_id: int) -> Task:
        task = await self._repo.get(task_id)
        if task is None:
            raise NotFoundError("task not found")
        return task

    async def delete_task(self, task_id: int) -> None:
        async with self._write_lock:
            deleted = await self._repo.delete(task_id)
        if not deleted:
            raise NotFoundError("task not found")
        logger.info("Task deleted: id=%s", task_id)

    async def list_tasks(self, filters: Mapping[str, Any]) -> list[Task]:
        query = build_query(filters, self._clock.now()).unwrap()
        return query.apply(await self._repo.list_all())

    async def summary(self) -> Summary:
        return summarize(await self._repo.list_all(), self._clock.now())

    async def health(self) -> dict[str, Any]:
        tasks = await self._repo.list_all()
        return {"status": "ok", "tasks": len(tasks)}

    @staticmethod
    def _unwrap(outcome, action: str):
        if not outcome.ok:
            err: DomainError = outcome.error
            logger.info("Task %s rejected (%s): %s", action, err.status, err.message)
        return outcome.unwrap()
