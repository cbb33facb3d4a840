from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from taskengine.domain.common.time import from_iso, to_iso
from taskengine.domain.tasks.models import CanonicalTask, Task
from taskengine.domain.tasks.ports import TaskRepository
from taskengine.infra.db.connection import Database

_COLUMNS = "id, title, description, completed, created_at, priority, due_at, category, favorite"


class TasksSqliteRepo(TaskRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    async def list_all(self) -> Sequence[Task]:
        rows = await self._db.fetchall(f"SELECT {_COLUMNS} FROM tasks ORDER BY id;")
        return [self._row_to_task(r) for r in rows]

    async def get(self, task_id: int) -> Optional[Task]:
        row = await self._db.fetchone(f"SELECT {_COLUMNS} FROM tasks WHERE id = ?;", (task_id,))
        return self._row_to_task(row) if row else None

    async def insert(self, draft: CanonicalTask, created_at: datetime) -> Task:
        task_id = await self._db.insert(
            """
            INSERT INTO tasks(
              title, description, completed, created_at,
              priority, due_at, category, favorite
            ) VALUES (?, ?, 0, ?, ?, ?, ?, ?);
            """,
            (
                draft.title,
                draft.description,
                to_iso(created_at),
                draft.priority,
                to_iso(draft.due_at) if draft.due_at else None,
                draft.category,
                int(draft.favorite),
            ),
        )
        return Task(
            id=task_id,
            title=draft.title,
            description=draft.description,
            completed=False,
            created_at=created_at.astimezone(timezone.utc),
            priority=draft.priority,
            due_at=draft.due_at,
            category=draft.category,
            favorite=draft.favorite,
        )

    async def update(self, task_id: int, draft: CanonicalTask, completed: bool) -> Optional[Task]:
        changed = await self._db.execute(
            """
            UPDATE tasks
            SET title = ?,
                description = ?,
                completed = ?,
                priority = ?,
                due_at = ?,
                category = ?,
                favorite = ?
            WHERE id = ?;
            """,
            (
                draft.title,
                draft.description,
                int(completed),
                draft.priority,
                to_iso(draft.due_at) if draft.due_at else None,
                draft.category,
                int(draft.favorite),
                task_id,
            ),
        )
        if changed == 0:
            return None
        return await self.get(task_id)

    async def delete(self, task_id: int) -> bool:
        changed = await self._db.execute("DELETE FROM tasks WHERE id = ?;", (task_id,))
        return changed > 0

    def _row_to_task(self, row) -> Task:
        return Task(
            id=int(row["id"]),
            title=row["title"],
            description=row["description"] or "",
            completed=bool(row["completed"]),
            created_at=from_iso(row["created_at"]),
            priority=row["priority"],
            due_at=from_iso(row["due_at"]) if row["due_at"] else None,
            category=row["category"],
            favorite=bool(row["favorite"]),
        )
