"""
Unit tests for the task payload normalizer: field order, limits, defaults.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from taskengine.domain.common.errors import ValidationError
from taskengine.domain.tasks.normalizer import normalize, normalize_priority, parse_due_at

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def _error(raw: dict) -> str:
    outcome = normalize(raw, NOW)
    assert not outcome.ok
    assert isinstance(outcome.error, ValidationError)
    assert outcome.error.status == 400
    return outcome.error.message


def test_empty_and_blank_title_rejected():
    assert _error({"title": ""}) == "title required"
    assert _error({"title": "  "}) == "title required"
    assert _error({}) == "title required"


def test_title_is_trimmed():
    task = normalize({"title": "   New task   "}, NOW).unwrap()
    assert task.title == "New task"


def test_defaults_applied():
    """Only a title given: everything else gets its default."""
    task = normalize({"title": "Plain"}, NOW).unwrap()
    assert task.description == ""
    assert task.category is None
    assert task.priority == "medium"
    assert task.due_at is None
    assert task.favorite is False


def test_description_limit_is_200_after_trim():
    assert normalize({"title": "t", "description": "a" * 200}, NOW).ok
    assert normalize({"title": "t", "description": "  " + "a" * 200 + "  "}, NOW).ok
    message = _error({"title": "t", "description": "a" * 201})
    assert "200" in message


def test_category_limit_and_blank_category():
    assert "30" in _error({"title": "t", "category": "x" * 31})
    assert normalize({"title": "t", "category": "   "}, NOW).unwrap().category is None
    assert normalize({"title": "t", "category": " Work "}, NOW).unwrap().category == "Work"


def test_priority_case_insensitive():
    assert normalize({"title": "t", "priority": "HIGH"}, NOW).unwrap().priority == "high"
    assert normalize({"title": "t", "priority": "high"}, NOW).unwrap().priority == "high"
    assert normalize({"title": "t", "priority": ""}, NOW).unwrap().priority == "medium"


def test_invalid_priority_lists_allowed_values():
    assert _error({"title": "t", "priority": "urgent"}) == "priority must be one of: high, medium, low"


def test_normalize_priority_helper():
    assert normalize_priority("Medium") == "medium"
    assert normalize_priority(None) == "medium"
    assert normalize_priority("urgent") is None


def test_due_at_grace_window():
    """30 seconds in the past passes, 61 seconds in the past fails."""
    recent = (NOW - timedelta(seconds=30)).isoformat()
    assert normalize({"title": "t", "due_at": recent}, NOW).ok

    too_old = (NOW - timedelta(seconds=61)).isoformat()
    assert _error({"title": "t", "due_at": too_old}) == "due date cannot be in the past"


def test_due_at_invalid_format():
    assert _error({"title": "t", "due_at": "tomorrow"}) == "invalid due date"


def test_due_at_normalized_to_utc():
    task = normalize({"title": "t", "due_at": "2026-01-16T14:00:00+02:00"}, NOW).unwrap()
    assert task.due_at == datetime(2026, 1, 16, 12, 0, tzinfo=timezone.utc)
    assert task.due_at.utcoffset() == timedelta(0)


def test_due_at_accepts_z_suffix_and_null():
    assert parse_due_at("2026-01-16T12:00:00Z", NOW) == datetime(2026, 1, 16, 12, 0, tzinfo=timezone.utc)
    assert parse_due_at(None, NOW) is None


def test_favorite_truthiness():
    assert normalize({"title": "t", "favorite": 1}, NOW).unwrap().favorite is True
    assert normalize({"title": "t", "favorite": "yes"}, NOW).unwrap().favorite is True
    assert normalize({"title": "t", "favorite": 0}, NOW).unwrap().favorite is False


def test_first_failure_wins():
    """Title is checked before description, description before priority."""
    assert _error({"title": "", "description": "a" * 500, "priority": "bad"}) == "title required"
    assert "200" in _error({"title": "t", "description": "a" * 500, "priority": "bad"})


def test_due_at_outside_datetime_range_is_invalid():
    """Offsets that push the instant past year 1 or year 9999 are rejected, not raised."""
    assert _error({"title": "t", "due_at": "0001-01-01T00:00:00+01:00"}) == "invalid due date"
    assert _error({"title": "t", "due_at": "9999-12-31T23:59:59-01:00"}) == "invalid due date"


def test_priority_with_surrounding_spaces_rejected():
    assert normalize_priority(" high ") is None
    assert _error({"title": "t", "priority": " high "}) == "priority must be one of: high, medium, low"


def test_numeric_epoch_due_at_is_invalid():
    assert _error({"title": "t", "due_at": 1_800_000_000_000}) == "invalid due date"
