"""Unit tests for permission log SQL filter building."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from orgperms.application.dto.permission_log_dto import LogFilters
from orgperms.domain.exceptions import ValidationError
from orgperms.domain.value_objects import LogCursor, PermissionScope
from orgperms.infrastructure.persistence.postgres.permission_log_repository import (
    _build_log_filter_conditions,
)


def test_no_filters() -> None:
    conditions, params = _build_log_filter_conditions(LogFilters())
    assert conditions == []
    assert params == []


def test_equality_filters() -> None:
    filters = LogFilters(org_id="acme", user_id="alice", scope=PermissionScope.USER)
    conditions, params = _build_log_filter_conditions(filters)
    assert conditions == ["org_id = %s", "user_id = %s", "scope = %s"]
    assert params == ["acme", "alice", "user"]


def test_key_filter_uses_array_containment() -> None:
    conditions, params = _build_log_filter_conditions(LogFilters(key="manageUsers"))
    assert conditions == ["keys @> ARRAY[%s]::text[]"]
    assert params == ["manageUsers"]


def test_date_range_is_inclusive() -> None:
    start = datetime(2025, 1, 1, tzinfo=UTC)
    end = datetime(2025, 1, 31, tzinfo=UTC)
    conditions, params = _build_log_filter_conditions(LogFilters(created_from=start, created_to=end))
    assert conditions == ["created_at >= %s", "created_at <= %s"]
    assert params == [start, end]


def test_cursor_adds_keyset_condition() -> None:
    cursor = LogCursor(created_at=datetime(2025, 2, 1, tzinfo=UTC), id=uuid4())
    conditions, params = _build_log_filter_conditions(
        LogFilters(actor_email="admin@acme"), cursor.encode()
    )
    assert conditions == ["actor_email = %s", "(created_at, id) < (%s, %s)"]
    assert params == ["admin@acme", cursor.created_at, cursor.id]


def test_bad_cursor_raises() -> None:
    with pytest.raises(ValidationError):
        _build_log_filter_conditions(LogFilters(), "garbage")
