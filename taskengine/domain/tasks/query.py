"""
Query builder for task listings.

Translates optional request filters into a TaskQuery: a predicate (all
given filters ANDed) plus an ordering. Filter values arrive in query-string
form, so boolean flags accept True or "true".
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from taskengine.constants import (
    ORDER_DUE_ASC,
    ORDER_DUE_DESC,
    STATUS_COMPLETED,
    STATUS_PENDING,
    VALID_PRIORITIES,
    VALID_STATUSES,
)
from taskengine.domain.common.errors import ValidationError
from taskengine.domain.common.result import Outcome
from taskengine.domain.common.time import ensure_aware
from taskengine.domain.tasks.models import Task
from taskengine.domain.tasks.normalizer import normalize_priority

SORT_CREATED_DESC = "created_desc"


def _flag(value: Any) -> bool:
    if value is True:
        return True
    return isinstance(value, str) and value.strip().lower() == "true"


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class TaskQuery:
    now: datetime
    priority: Optional[str] = None
    completed: Optional[bool] = None
    overdue: bool = False
    category: Optional[str] = None
    favorite: bool = False
    search: Optional[str] = None
    sort: str = SORT_CREATED_DESC

    def matches(self, task: Task) -> bool:
        if self.priority is not None and task.priority != self.priority:
            return False
        if self.completed is not None and task.completed != self.completed:
            return False
        if self.overdue and (task.completed or task.due_at is None or task.due_at >= self.now):
            return False
        if self.category is not None:
            if task.category is None or task.category.casefold() != self.category.casefold():
                return False
        if self.favorite and not task.favorite:
            return False
        if self.search is not None:
            needle = self.search.casefold()
            if needle not in task.title.casefold() and needle not in (task.description or "").casefold():
                return False
        return True

    def order(self, tasks: Iterable[Task]) -> list[Task]:
        tasks = list(tasks)
        if self.sort == SORT_CREATED_DESC:
            return sorted(tasks, key=lambda t: t.created_at, reverse=True)
        # tasks without a due date go last in both directions
        dated = [t for t in tasks if t.due_at is not None]
        undated = [t for t in tasks if t.due_at is None]
        dated.sort(key=lambda t: t.due_at, reverse=self.sort == ORDER_DUE_DESC)
        return dated + undated

    def apply(self, tasks: Iterable[Task]) -> list[Task]:
        return self.order(t for t in tasks if self.matches(t))


def build_query(filters: Mapping[str, Any], now: datetime) -> Outcome[TaskQuery]:
    ensure_aware(now)
    params: dict[str, Any] = {"now": now}

    raw_priority = _text(filters.get("priority"))
    if raw_priority is not None:
        priority = normalize_priority(raw_priority)
        if priority is None:
            return Outcome.failure(
                ValidationError(f"invalid priority; allowed values: {', '.join(VALID_PRIORITIES)}")
            )
        params["priority"] = priority

    status = _text(filters.get("status"))
    if status is not None:
        if status not in VALID_STATUSES:
            return Outcome.failure(
                ValidationError(f"invalid status; use '{STATUS_PENDING}' or '{STATUS_COMPLETED}'")
            )
        params["completed"] = status == STATUS_COMPLETED

    params["overdue"] = _flag(filters.get("overdue"))
    params["category"] = _text(filters.get("category"))
    params["favorite"] = _flag(filters.get("favorite"))
    params["search"] = _text(filters.get("q"))

    order = _text(filters.get("order"))
    if order in (ORDER_DUE_ASC, ORDER_DUE_DESC):
        params["sort"] = order

    return Outcome.success(TaskQuery(**params))
