"""
Limits and enumerations for task records, filters and the dashboard.
"""
from __future__ import annotations

# Priorities, in the order they are listed in error messages
PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"
VALID_PRIORITIES = (PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW)
DEFAULT_PRIORITY = PRIORITY_MEDIUM

# Field limits (characters, after trimming)
MAX_DESCRIPTION = 200
MAX_CATEGORY = 30

# Pending high-priority tasks allowed at the same time
MAX_PENDING_HIGH = 5

# Dashboard "upcoming" list size
MAX_UPCOMING = 5

# How far in the past a due date may be at validation time
DUE_AT_GRACE_SECONDS = 60

# Query filter values (query-string form)
STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
VALID_STATUSES = (STATUS_PENDING, STATUS_COMPLETED)

ORDER_DUE_ASC = "due_asc"
ORDER_DUE_DESC = "due_desc"
