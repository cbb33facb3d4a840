"""
Unit tests for the query builder: filter validation, predicates and ordering.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from taskengine.domain.common.errors import ValidationError
from taskengine.domain.tasks.query import build_query

from .fakes import make_task

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def _ids(tasks) -> list[int]:
    return [t.id for t in tasks]


def _sample():
    return [
        make_task(1, "Pending high", priority="high", due_at=NOW + timedelta(hours=3), category="Work"),
        make_task(2, "Done low", priority="low", completed=True, due_at=NOW + timedelta(hours=1)),
        make_task(3, "No due", priority="high", favorite=True, description="call the bank"),
        make_task(4, "Late one", due_at=NOW - timedelta(hours=2), category="work"),
        make_task(5, "Late but done", completed=True, due_at=NOW - timedelta(hours=2)),
    ]


def test_default_order_is_created_desc():
    query = build_query({}, NOW).unwrap()
    assert _ids(query.apply(_sample())) == [5, 4, 3, 2, 1]


def test_invalid_priority_filter():
    outcome = build_query({"priority": "urgent"}, NOW)
    assert isinstance(outcome.error, ValidationError)
    assert outcome.error.message == "invalid priority; allowed values: high, medium, low"


def test_invalid_status_filter():
    outcome = build_query({"status": "in-progress"}, NOW)
    assert isinstance(outcome.error, ValidationError)
    assert "pending" in outcome.error.message and "completed" in outcome.error.message


def test_status_and_priority_combined():
    query = build_query({"status": "pending", "priority": "HIGH"}, NOW).unwrap()
    result = query.apply(_sample())
    assert sorted(_ids(result)) == [1, 3]
    assert all(t.priority == "high" and not t.completed for t in result)


def test_completed_status():
    query = build_query({"status": "completed"}, NOW).unwrap()
    assert sorted(_ids(query.apply(_sample()))) == [2, 5]


def test_overdue_flag():
    query = build_query({"overdue": "true"}, NOW).unwrap()
    assert _ids(query.apply(_sample())) == [4]
    assert len(build_query({"overdue": "false"}, NOW).unwrap().apply(_sample())) == 5


def test_category_case_insensitive():
    query = build_query({"category": "WORK"}, NOW).unwrap()
    assert sorted(_ids(query.apply(_sample()))) == [1, 4]


def test_favorite_and_search():
    assert _ids(build_query({"favorite": True}, NOW).unwrap().apply(_sample())) == [3]
    assert _ids(build_query({"q": "BANK"}, NOW).unwrap().apply(_sample())) == [3]
    assert sorted(_ids(build_query({"q": "late"}, NOW).unwrap().apply(_sample()))) == [4, 5]


def test_due_desc_puts_undated_last():
    query = build_query({"order": "due_desc"}, NOW).unwrap()
    assert _ids(query.apply(_sample())) == [1, 2, 4, 5, 3]


def test_due_asc_puts_undated_last():
    query = build_query({"order": "due_asc"}, NOW).unwrap()
    result = query.apply(_sample())
    assert result[-1].id == 3
    assert _ids(result[:2]) == [4, 5]


def test_unknown_order_falls_back_to_default():
    query = build_query({"order": "sideways"}, NOW).unwrap()
    assert _ids(query.apply(_sample())) == [5, 4, 3, 2, 1]
