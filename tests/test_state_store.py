from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from pyconnecttool.state.events import NotificationEvent, NotificationKind, SectionSnapshot, StateSection
from pyconnecttool.state.notifications import NotificationCenter
from pyconnecttool.state.store import SnapshotStore


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def test_publish_replaces_wholesale_and_counts_revisions() -> None:
    store = SnapshotStore()

    store.publish(StateSection.FIREWALL, {"a": 1, "b": 2})
    snapshot = store.publish(StateSection.FIREWALL, {"a": 3})

    assert snapshot.revision == 2
    assert store.value(StateSection.FIREWALL) == {"a": 3}
    assert store.value(StateSection.LOBBY) is None


def test_subscribers_see_every_publish_until_unsubscribed() -> None:
    store = SnapshotStore()
    seen: list[SectionSnapshot] = []
    unsubscribe = store.subscribe(seen.append)

    store.publish(StateSection.VPN, "first")
    unsubscribe()
    store.publish(StateSection.VPN, "second")

    assert [s.value for s in seen] == ["first"]


def test_failing_listener_does_not_block_others() -> None:
    store = SnapshotStore()
    seen: list[str] = []

    def _broken(_snapshot: SectionSnapshot) -> None:
        raise RuntimeError("view crashed")

    store.subscribe(_broken)
    store.subscribe(lambda s: seen.append(s.value))

    store.publish(StateSection.STEAM, "value")

    assert seen == ["value"]
    assert set(store.snapshot()) == {StateSection.STEAM}


def test_notifications_expire_after_ttl() -> None:
    clock = _Clock()
    center = NotificationCenter(ttl=5.0, clock=clock)

    center.error("Failed to start core service: refused")
    clock.advance(3)
    center.success("Core service stopped")

    assert [e.message for e in center.pending()] == [
        "Failed to start core service: refused",
        "Core service stopped",
    ]
    clock.advance(2)
    assert [e.kind for e in center.pending()] == [NotificationKind.SUCCESS]
    assert len(center.history()) == 2


def test_notification_subscribers_receive_events() -> None:
    center = NotificationCenter()
    received: list[NotificationEvent] = []
    center.subscribe(received.append)

    event = center.success("  Left lobby  ")

    assert received == [event]
    assert event.message == "Left lobby"


def test_history_is_bounded() -> None:
    center = NotificationCenter(history=2)

    for index in range(3):
        center.success(f"message {index}")

    assert [e.message for e in center.history()] == ["message 1", "message 2"]


def test_empty_notification_is_rejected() -> None:
    with pytest.raises(ValidationError):
        NotificationCenter().error("   ")
