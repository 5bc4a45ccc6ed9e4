"""Tests for the poll loop."""

import asyncio

import pytest

from bid_monitor.errors import FetchError, NotifyError
from bid_monitor.models import PollerState
from bid_monitor.monitor import BidMonitor, FailFast, LogAndContinue
from conftest import make_snapshot


class FakeClient:
    """Returns queued snapshots (or raises queued errors) one per fetch."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.fetched: list[str] = []
        self.on_drained = None

    async def fetch(self, url_key):
        self.fetched.append(url_key)
        response = self.responses.pop(0)
        if not self.responses and self.on_drained:
            self.on_drained()
        if isinstance(response, Exception):
            raise response
        return response


class FakeNotifier:
    def __init__(self, fail_on=()):
        self.sent: list[int] = []
        self.fail_on = set(fail_on)

    async def notify(self, bid):
        if bid in self.fail_on:
            raise NotifyError(f"webhook down for {bid}")
        self.sent.append(bid)


def make_monitor(client, notifier, **kwargs) -> BidMonitor:
    return BidMonitor(client=client, notifier=notifier, url_key="air-jordan-1", size="6", **kwargs)


class TestScenarios:
    """Poll cycles against a sequence of snapshots, sharing one state."""

    def test_bid_sequence(self):
        client = FakeClient(
            make_snapshot(("6", 120)),
            make_snapshot(("6", 120)),
            make_snapshot(("6", 95)),
            make_snapshot(("7", 500)),
            make_snapshot(("6", 301)),
        )
        notifier = FakeNotifier()
        monitor = make_monitor(client, notifier)

        # initial state 0, first bid fires
        assert asyncio.run(monitor.run_once()) == [120]
        assert monitor.state.last_notified_bid == 120

        # same bid again
        assert asyncio.run(monitor.run_once()) == []
        # bid dropped
        assert asyncio.run(monitor.run_once()) == []
        # other size only
        assert asyncio.run(monitor.run_once()) == []
        assert monitor.state.last_notified_bid == 120

        # new high
        assert asyncio.run(monitor.run_once()) == [301]
        assert monitor.state.last_notified_bid == 301
        assert notifier.sent == [120, 301]

    def test_fetch_error_terminates_without_notification(self):
        client = FakeClient(FetchError("connection reset"))
        notifier = FakeNotifier()
        monitor = make_monitor(client, notifier, interval=0)

        with pytest.raises(FetchError):
            asyncio.run(monitor.run())
        assert notifier.sent == []
        assert monitor.state.last_notified_bid == 0


class TestEvaluation:
    """Tests for a single evaluation pass."""

    def test_no_matching_size_leaves_state(self):
        monitor = make_monitor(FakeClient(make_snapshot(("7", 500), ("8", 90))), FakeNotifier())
        assert asyncio.run(monitor.run_once()) == []
        assert monitor.state.last_notified_bid == 0

    def test_same_snapshot_twice_is_idempotent(self):
        snapshot = make_snapshot(("6", 200), ("9", 50))
        notifier = FakeNotifier()
        monitor = make_monitor(FakeClient(snapshot, snapshot), notifier)
        asyncio.run(monitor.run_once())
        asyncio.run(monitor.run_once())
        assert notifier.sent == [200]

    def test_multiple_matching_entries(self):
        """Each strictly increasing match notifies, state ends at the max."""
        notifier = FakeNotifier()
        monitor = make_monitor(
            FakeClient(make_snapshot(("6", 130), ("6", 150))),
            notifier,
            state=PollerState(last_notified_bid=120),
        )
        asyncio.run(monitor.run_once())
        assert 150 in notifier.sent
        assert all(bid > 120 for bid in notifier.sent)
        assert monitor.state.last_notified_bid == 150


class TestErrorPolicy:
    """Tests for the fail-fast and log-and-continue strategies."""

    def test_notify_error_fails_fast_by_default(self):
        monitor = make_monitor(FakeClient(make_snapshot(("6", 120))), FakeNotifier(fail_on={120}))
        assert isinstance(monitor.error_policy, FailFast)
        with pytest.raises(NotifyError):
            asyncio.run(monitor.run_once())
        assert monitor.state.last_notified_bid == 0

    def test_log_and_continue_on_fetch_error(self):
        client = FakeClient(FetchError("timeout"), make_snapshot(("6", 120)))
        notifier = FakeNotifier()
        monitor = make_monitor(client, notifier, error_policy=LogAndContinue())

        assert asyncio.run(monitor.run_once()) == []
        assert asyncio.run(monitor.run_once()) == [120]

    def test_failed_notification_not_recorded(self):
        """A bid whose alert failed should fire again next cycle."""
        snapshot = make_snapshot(("6", 120))
        notifier = FakeNotifier(fail_on={120})
        monitor = make_monitor(FakeClient(snapshot, snapshot), notifier, error_policy=LogAndContinue())

        assert asyncio.run(monitor.run_once()) == []
        assert monitor.state.last_notified_bid == 0

        notifier.fail_on.clear()
        assert asyncio.run(monitor.run_once()) == [120]
        assert monitor.state.last_notified_bid == 120


class TestLoop:

    def test_runs_until_stopped(self):
        client = FakeClient(
            make_snapshot(("6", 100)),
            make_snapshot(("6", 110)),
            make_snapshot(("6", 105)),
        )
        notifier = FakeNotifier()
        monitor = make_monitor(client, notifier, interval=0)
        client.on_drained = monitor.stop

        asyncio.run(monitor.run())

        assert len(client.fetched) == 3
        assert notifier.sent == [100, 110]
        assert monitor.state.last_notified_bid == 110
