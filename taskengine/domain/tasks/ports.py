from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from taskengine.domain.tasks.models import CanonicalTask, Task


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class TaskRepository(ABC):
    """
    Persistence collaborator. Implementations raise StoreError on storage
    failures and return None/False for missing ids.
    """

    @abstractmethod
    async def list_all(self) -> Sequence[Task]: ...

    @abstractmethod
    async def get(self, task_id: int) -> Optional[Task]: ...

    @abstractmethod
    async def insert(self, draft: CanonicalTask, created_at: datetime) -> Task: ...

    @abstractmethod
    async def update(self, task_id: int, draft: CanonicalTask, completed: bool) -> Optional[Task]: ...

    @abstractmethod
    async def delete(self, task_id: int) -> bool: ...
