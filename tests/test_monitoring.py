"""Tests for the hotspot monitor daemon."""

import time

import pytest

from netconfig.config import Settings
from netconfig.exceptions import ConfigurationError, HotspotQueryError
from netconfig.models import HotspotStatusRecord
from netconfig.monitoring import HotspotMonitorDaemon

UP = HotspotStatusRecord(success=True, enabled=True, ssid="MyHotspot", client_count=2)
DOWN = HotspotStatusRecord(success=True, enabled=False, ssid="MyHotspot")


class FakeController:
    """Controller stand-in with a fixed status and recorded set_enabled calls."""

    def __init__(self, status=DOWN, status_error=None, fail_on=None):
        self.status = status
        self.status_error = status_error
        self.fail_on = fail_on
        self.enabled_calls = []
        self.status_reads = 0

    def get_status(self):
        self.status_reads += 1
        if self.status_error is not None:
            raise self.status_error
        return self.status

    def set_enabled(self, enabled):
        self.enabled_calls.append(enabled)
        if enabled is self.fail_on:
            raise ConfigurationError("enable", "radio off", backend="legacy")


def _daemon(controller, **settings) -> HotspotMonitorDaemon:
    settings.setdefault("settle_delay", 0)
    return HotspotMonitorDaemon(controller, Settings(**settings))


def test_daemon_reads_settings() -> None:
    """Test the daemon takes its knobs from Settings."""
    daemon = HotspotMonitorDaemon(
        FakeController(),
        Settings(monitor_interval=5, auto_recovery=False, settle_delay=1.5),
    )

    assert daemon.enabled is True
    assert daemon.interval_seconds == 5
    assert daemon.auto_recovery is False
    assert daemon.settle_delay == 1.5
    assert daemon.get_latest_status() is None
    assert not daemon.is_running


def test_healthy_hotspot_is_left_alone(log_output) -> None:
    """Test an enabled hotspot triggers no recovery."""
    controller = FakeController(status=UP)
    daemon = _daemon(controller)

    daemon.check_once()

    assert controller.enabled_calls == []
    assert daemon.get_latest_status() == UP
    assert "Hotspot healthy: MyHotspot (2 clients)" in log_output.getvalue()


def test_down_hotspot_is_restarted_once(log_output) -> None:
    """Test one disable then one enable when the hotspot is down."""
    controller = FakeController(status=DOWN)
    daemon = _daemon(controller)

    daemon.check_once()

    assert controller.enabled_calls == [False, True]
    assert "restarting" in log_output.getvalue()
    assert "Hotspot recovered" in log_output.getvalue()


def test_failed_status_record_counts_as_down() -> None:
    """Test a status with success=False is recovered like a disabled one."""
    controller = FakeController(
        status=HotspotStatusRecord(success=False, error="adapter missing")
    )

    _daemon(controller).check_once()

    assert controller.enabled_calls == [False, True]


def test_auto_recovery_off_only_warns(log_output) -> None:
    """Test no control calls are made when auto-recovery is disabled."""
    controller = FakeController(status=DOWN)
    daemon = _daemon(controller, auto_recovery=False)

    daemon.check_once()

    assert controller.enabled_calls == []
    assert "auto-recovery is off" in log_output.getvalue()


def test_status_error_ends_tick(log_output) -> None:
    """Test a status query failure is logged and nothing else happens."""
    controller = FakeController(
        status_error=HotspotQueryError("netsh failed", ["legacy"])
    )
    daemon = _daemon(controller)

    daemon.check_once()

    assert controller.enabled_calls == []
    assert daemon.get_latest_status() is None
    assert "Hotspot status check failed" in log_output.getvalue()


def test_disable_failure_aborts_recovery(log_output) -> None:
    """Test enable is not attempted when disable failed."""
    controller = FakeController(status=DOWN, fail_on=False)

    _daemon(controller).check_once()

    assert controller.enabled_calls == [False]
    assert "recovery aborted" in log_output.getvalue()


def test_enable_failure_is_logged(log_output) -> None:
    """Test a failed re-enable is logged, not raised."""
    controller = FakeController(status=DOWN, fail_on=True)

    _daemon(controller).check_once()

    assert controller.enabled_calls == [False, True]
    assert "enable failed" in log_output.getvalue()


def test_status_listener_receives_each_read() -> None:
    """Test the listener sees every status read."""
    seen = []
    daemon = HotspotMonitorDaemon(
        FakeController(status=UP), Settings(), status_listener=seen.append
    )

    daemon.check_once()
    daemon.check_once()

    assert seen == [UP, UP]


def test_disabled_monitor_does_not_start(log_output) -> None:
    """Test start() is a no-op when the monitor is disabled."""
    daemon = _daemon(FakeController(), monitor_enabled=False)

    daemon.start()

    assert not daemon.is_running
    assert "Hotspot monitor disabled" in log_output.getvalue()
    daemon.stop()


def test_background_thread_checks_and_stops() -> None:
    """Test the thread polls on its interval and stop() joins it."""
    statuses = []
    controller = FakeController(status=UP)
    daemon = HotspotMonitorDaemon(
        controller,
        Settings(monitor_interval=0.01, settle_delay=0),
        status_listener=statuses.append,
    )

    daemon.start()
    try:
        assert daemon.is_running
        time.sleep(0.2)
    finally:
        daemon.stop()

    assert not daemon.is_running
    assert len(statuses) >= 2
    assert daemon.get_latest_status() == UP


def test_background_recoveries_come_in_pairs() -> None:
    """Test every recovery run by the thread is a disable followed by an enable."""
    controller = FakeController(status=DOWN)
    daemon = _daemon(controller, monitor_interval=0.01)

    daemon.start()
    try:
        time.sleep(0.1)
    finally:
        daemon.stop()

    calls = list(controller.enabled_calls)
    assert calls
    assert len(calls) % 2 == 0
    assert calls[0::2] == [False] * (len(calls) // 2)
    assert calls[1::2] == [True] * (len(calls) // 2)

    time.sleep(0.05)
    assert controller.enabled_calls == calls


def test_start_twice_keeps_one_thread() -> None:
    """Test a second start() while running does not spawn another thread."""
    daemon = _daemon(FakeController(status=UP), monitor_interval=0.05)

    daemon.start()
    try:
        first = daemon._thread
        daemon.start()
        assert daemon._thread is first
    finally:
        daemon.stop()


def test_no_status_reads_after_stop() -> None:
    """Test the status is not read again once stop() has returned."""
    controller = FakeController(status=UP)
    daemon = _daemon(controller, monitor_interval=0.01)

    daemon.start()
    try:
        time.sleep(0.1)
    finally:
        daemon.stop()

    count = controller.status_reads
    assert count > 0
    time.sleep(0.1)
    assert controller.status_reads == count


@pytest.mark.parametrize("interval", [0, -1])
def test_interval_must_be_positive(interval) -> None:
    """Test a non-positive interval is rejected by Settings."""
    with pytest.raises(ValueError):
        Settings(monitor_interval=interval)
