"""Tests for the SQLite and in-memory notification centers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from taskapp_cli.adapters.memory import InMemoryNotificationCenter
from taskapp_cli.adapters.sqlite import SqliteNotificationCenter
from taskapp_cli.adapters.sqlite.connection import MEMORY_DB, open_connection
from taskapp_cli.models import PendingNotification
from taskapp_cli.repositories import NotificationError

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _notification(identifier: str, minutes: int, title: str = "") -> PendingNotification:
    return PendingNotification(
        identifier=identifier,
        title=title or f"Task {identifier}",
        fire_at=NOW + timedelta(minutes=minutes),
    )


@pytest.fixture(params=["sqlite", "memory"])
def center(request):
    if request.param == "sqlite":
        connection = open_connection(MEMORY_DB)
        yield SqliteNotificationCenter(connection=connection)
        connection.close()
    else:
        yield InMemoryNotificationCenter()


class TestSchedule:
    def test_list_pending_ordered_by_fire_time(self, center):
        center.schedule(_notification("2", 30))
        center.schedule(_notification("1", 60))
        center.schedule(_notification("3", -5))
        assert [n.identifier for n in center.list_pending()] == ["3", "2", "1"]

    def test_same_identifier_replaces(self, center):
        center.schedule(_notification("1", 30, "first"))
        center.schedule(_notification("1", 90, "second"))
        (pending,) = center.list_pending()
        assert pending.title == "second"
        assert pending.fire_at == NOW + timedelta(minutes=90)

    def test_fields_round_trip(self, center):
        notification = PendingNotification(
            identifier="7", title="Dentist", body="health", fire_at=NOW
        )
        center.schedule(notification)
        (pending,) = center.list_pending()
        assert pending.body == "health"
        assert pending.fire_at == NOW
        assert pending.payload == {
            "title": "Dentist",
            "body": "health",
            "fire_at": NOW.isoformat(),
        }


class TestCancel:
    def test_cancel_removes_only_given_identifiers(self, center):
        for identifier in ("1", "2", "3"):
            center.schedule(_notification(identifier, 10))
        center.cancel_pending(["1", "3"])
        assert [n.identifier for n in center.list_pending()] == ["2"]

    def test_cancel_unknown_is_noop(self, center):
        center.schedule(_notification("1", 10))
        center.cancel_pending(["99"])
        center.cancel_pending([])
        assert len(center.list_pending()) == 1


class TestDeliverDue:
    def test_returns_and_removes_due(self, center):
        center.schedule(_notification("past", -10))
        center.schedule(_notification("now", 0))
        center.schedule(_notification("future", 10))

        due = center.deliver_due(NOW)

        assert [n.identifier for n in due] == ["past", "now"]
        assert [n.identifier for n in center.list_pending()] == ["future"]

    def test_nothing_due(self, center):
        center.schedule(_notification("future", 10))
        assert center.deliver_due(NOW) == []
        assert len(center.list_pending()) == 1


class TestSqliteFailures:
    def test_errors_wrapped(self):
        connection = open_connection(MEMORY_DB)
        center = SqliteNotificationCenter(connection=connection)
        connection.execute("DROP TABLE pending_notifications")

        with pytest.raises(NotificationError):
            center.list_pending()
        with pytest.raises(NotificationError):
            center.schedule(_notification("1", 0))
        with pytest.raises(NotificationError):
            center.cancel_pending(["1"])
        with pytest.raises(NotificationError):
            center.deliver_due(NOW)
        assert not connection.in_transaction

    def test_unopenable_database_raises_notification_error(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        center = SqliteNotificationCenter(db_path=blocker / "tasks.db")

        with pytest.raises(NotificationError, match="unavailable"):
            center.list_pending()
        with pytest.raises(NotificationError):
            center.cancel_pending(["1"])
        with pytest.raises(NotificationError):
            center.deliver_due(NOW)
