"""Tests for shared column types."""

from datetime import UTC, datetime, timedelta, timezone

from sqlalchemy.dialects import sqlite

from src.infrastructure.database.models import UTCDateTime


def test_naive_values_are_read_as_utc():
    value = UTCDateTime().process_result_value(datetime(2024, 5, 1, 12, 30), sqlite.dialect())

    assert value == datetime(2024, 5, 1, 12, 30, tzinfo=UTC)


def test_aware_values_are_stored_in_utc():
    local = datetime(2024, 5, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))

    value = UTCDateTime().process_bind_param(local, sqlite.dialect())

    assert value.tzinfo == UTC
    assert value.hour == 12


def test_none_passes_through():
    assert UTCDateTime().process_bind_param(None, sqlite.dialect()) is None
    assert UTCDateTime().process_result_value(None, sqlite.dialect()) is None
