"""
Normalizer for raw task payloads.

Turns an untrusted field mapping into a CanonicalTask. Checks run in a
fixed order and stop at the first failure:

1. title        - required, trimmed
2. description  - trimmed, at most MAX_DESCRIPTION chars
3. category     - trimmed, at most MAX_CATEGORY chars, blank -> None
4. priority     - case-insensitive high/medium/low, blank -> medium
5. due_at       - ISO timestamp, not older than DUE_AT_GRACE_SECONDS
6. favorite     - truthiness
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Mapping, Optional

from taskengine.constants import (
    DEFAULT_PRIORITY,
    DUE_AT_GRACE_SECONDS,
    MAX_CATEGORY,
    MAX_DESCRIPTION,
    VALID_PRIORITIES,
)
from taskengine.domain.common.errors import ValidationError
from taskengine.domain.common.result import Outcome
from taskengine.domain.common.time import ensure_aware, parse_timestamp
from taskengine.domain.tasks.models import CanonicalTask

PRIORITY_ERROR = f"priority must be one of: {', '.join(VALID_PRIORITIES)}"


def normalize_priority(value: Any) -> Optional[str]:
    """
    Map a raw priority to its canonical form.

    Returns DEFAULT_PRIORITY for None/empty input and None when the value
    is not one of VALID_PRIORITIES.

    Examples:
        >>> normalize_priority("HIGH")
        'high'
        >>> normalize_priority("")
        'medium'
        >>> normalize_priority("urgent") is None
        True
    """
    if value is None or value == "":
        return DEFAULT_PRIORITY
    if not isinstance(value, str):
        return None
    priority = value.lower()
    return priority if priority in VALID_PRIORITIES else None


def parse_due_at(value: Any, now: datetime) -> Optional[datetime]:
    """
    Parse and validate a due date against `now`.

    Returns None when no due date was given, a UTC datetime otherwise.
    Raises ValidationError for unparsable or past values.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    due_at = parse_timestamp(value)
    if due_at is None:
        raise ValidationError("invalid due date")
    if due_at < ensure_aware(now) - timedelta(seconds=DUE_AT_GRACE_SECONDS):
        raise ValidationError("due date cannot be in the past")
    return due_at


def _optional_text(raw: Mapping[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be text")
    return value.strip()


def _check_title(raw: Mapping[str, Any], out: dict[str, Any], now: datetime) -> None:
    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("title required")
    out["title"] = title.strip()


def _check_description(raw: Mapping[str, Any], out: dict[str, Any], now: datetime) -> None:
    description = _optional_text(raw, "description") or ""
    if len(description) > MAX_DESCRIPTION:
        raise ValidationError(f"description cannot exceed {MAX_DESCRIPTION} characters")
    out["description"] = description


def _check_category(raw: Mapping[str, Any], out: dict[str, Any], now: datetime) -> None:
    category = _optional_text(raw, "category")
    if category and len(category) > MAX_CATEGORY:
        raise ValidationError(f"category cannot exceed {MAX_CATEGORY} characters")
    out["category"] = category or None


def _check_priority(raw: Mapping[str, Any], out: dict[str, Any], now: datetime) -> None:
    priority = normalize_priority(raw.get("priority"))
    if priority is None:
        raise ValidationError(PRIORITY_ERROR)
    out["priority"] = priority


def _check_due_at(raw: Mapping[str, Any], out: dict[str, Any], now: datetime) -> None:
    out["due_at"] = parse_due_at(raw.get("due_at"), now)


def _check_favorite(raw: Mapping[str, Any], out: dict[str, Any], now: datetime) -> None:
    out["favorite"] = bool(raw.get("favorite"))


FieldCheck = Callable[[Mapping[str, Any], dict, datetime], None]

# Order matters: the first failing check decides the error message.
FIELD_CHECKS: tuple[FieldCheck, ...] = (
    _check_title,
    _check_description,
    _check_category,
    _check_priority,
    _check_due_at,
    _check_favorite,
)


def normalize(raw: Mapping[str, Any], now: datetime) -> Outcome[CanonicalTask]:
    out: dict[str, Any] = {}
    for check in FIELD_CHECKS:
        try:
            check(raw, out, now)
        except ValidationError as e:
            return Outcome.failure(e)
    return Outcome.success(CanonicalTask(**out))
