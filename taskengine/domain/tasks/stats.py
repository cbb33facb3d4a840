# -*- coding: utf-8 -*-
"""Dashboard statistics over a task snapshot."""
from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Sequence

from taskengine.constants import MAX_UPCOMING
from taskengine.domain.common.time import ensure_aware
from taskengine.domain.tasks.models import CategoryCount, Summary, Task, UpcomingTask


def is_overdue(task: Task, now: datetime) -> bool:
    return not task.completed and task.due_at is not None and task.due_at < now


def upcoming_tasks(tasks: Sequence[Task], now: datetime, limit: int = MAX_UPCOMING) -> list[UpcomingTask]:
    """Pending tasks due at or after `now`, nearest first, at most `limit`."""
    due = [t for t in tasks if not t.completed and t.due_at is not None and t.due_at >= now]
    due.sort(key=lambda t: t.due_at)
    return [
        UpcomingTask(id=t.id, title=t.title, due_at=t.due_at, priority=t.priority, category=t.category)
        for t in due[:limit]
    ]


def category_histogram(tasks: Sequence[Task]) -> list[CategoryCount]:
    counts = Counter(t.category for t in tasks if t.category)
    # most_common keeps first-seen order for equal counts
    return [CategoryCount(category=c, count=n) for c, n in counts.most_common()]


def summarize(tasks: Sequence[Task], now: datetime, upcoming_limit: int = MAX_UPCOMING) -> Summary:
    ensure_aware(now)
    completed = sum(1 for t in tasks if t.completed)
    return Summary(
        total=len(tasks),
        pending_count=len(tasks) - completed,
        completed_count=completed,
        favorite_count=sum(1 for t in tasks if t.favorite),
        overdue_count=sum(1 for t in tasks if is_overdue(t, now)),
        upcoming=upcoming_tasks(tasks, now, upcoming_limit),
        category_histogram=category_histogram(tasks),
    )
