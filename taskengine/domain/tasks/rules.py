from __future__ import annotations

from typing import Optional, Sequence

from taskengine.constants import MAX_PENDING_HIGH, PRIORITY_HIGH
from taskengine.domain.common.errors import ConflictError, QuotaError
from taskengine.domain.common.result import Outcome
from taskengine.domain.tasks.models import CanonicalTask, Task

DUPLICATE_TITLE_ERROR = "a task with this title already exists"
QUOTA_ERROR = f"cannot have more than {MAX_PENDING_HIGH} pending high-priority tasks"


def title_key(title: str) -> str:
    # casefold is locale-independent, unlike platform collation
    return title.strip().casefold()


def has_duplicate_title(tasks: Sequence[Task], title: str, exclude_id: Optional[int] = None) -> bool:
    key = title_key(title)
    return any(t.id != exclude_id and title_key(t.title) == key for t in tasks)


def count_pending_high(tasks: Sequence[Task], exclude_id: Optional[int] = None) -> int:
    return sum(1 for t in tasks if t.id != exclude_id and t.is_pending_high)


def check_create(tasks: Sequence[Task], draft: CanonicalTask) -> Outcome[CanonicalTask]:
    if has_duplicate_title(tasks, draft.title):
        return Outcome.failure(ConflictError(DUPLICATE_TITLE_ERROR))
    if draft.priority == PRIORITY_HIGH and count_pending_high(tasks) >= MAX_PENDING_HIGH:
        return Outcome.failure(QuotaError(QUOTA_ERROR))
    return Outcome.success(draft)


def check_update(
    tasks: Sequence[Task],
    task_id: int,
    draft: CanonicalTask,
    completed: bool,
) -> Outcome[CanonicalTask]:
    """
    Update-path policy.

    The quota is re-checked whenever the resulting record is high and
    pending, even if this edit touched neither priority nor completed.
    """
    if has_duplicate_title(tasks, draft.title, exclude_id=task_id):
        return Outcome.failure(ConflictError(DUPLICATE_TITLE_ERROR))
    if (
        draft.priority == PRIORITY_HIGH
        and not completed
        and count_pending_high(tasks, exclude_id=task_id) >= MAX_PENDING_HIGH
    ):
        return Outcome.failure(QuotaError(QUOTA_ERROR))
    return Outcome.success(draft)
