from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Optional

from taskengine.domain.common.time import to_iso

Priority = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class CanonicalTask:
    """Normalized payload: every field validated and defaulted, no id yet."""

    title: str
    description: str
    priority: Priority
    due_at: Optional[datetime]
    category: Optional[str]
    favorite: bool


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    description: str
    completed: bool
    created_at: datetime
    priority: Priority
    due_at: Optional[datetime]
    category: Optional[str]
    favorite: bool

    @property
    def is_pending_high(self) -> bool:
        return self.priority == "high" and not self.completed

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "created_at": to_iso(self.created_at),
            "priority": self.priority,
            "due_at": to_iso(self.due_at) if self.due_at else None,
            "category": self.category,
            "favorite": self.favorite,
        }


@dataclass(frozen=True)
class UpcomingTask:
    id: int
    title: str
    due_at: datetime
    priority: Priority
    category: Optional[str]


@dataclass(frozen=True)
class CategoryCount:
    category: str
    count: int


@dataclass(frozen=True)
class Summary:
    total: int
    pending_count: int
    completed_count: int
    favorite_count: int
    overdue_count: int
    upcoming: list[UpcomingTask] = field(default_factory=list)
    category_histogram: list[CategoryCount] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "pending_count": self.pending_count,
            "completed_count": self.completed_count,
            "favorite_count": self.favorite_count,
            "overdue_count": self.overdue_count,
            "upcoming": [
                {
                    "id": u.id,
                    "title": u.title,
                    "due_at": to_iso(u.due_at),
                    "priority": u.priority,
                    "category": u.category,
                }
                for u in self.upcoming
            ],
            "category_histogram": [
                {"category": c.category, "count": c.count} for c in self.category_histogram
            ],
        }
