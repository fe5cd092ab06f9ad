"""Hotspot health monitor daemon with automatic recovery."""

from __future__ import annotations

import threading
from collections.abc import Callable

from netconfig.backends.hotspot import HotspotController
from netconfig.config import Settings
from netconfig.exceptions import NetConfigError
from netconfig.models import HotspotStatusRecord
from netconfig.utils.logger import Logger

StatusListener = Callable[[HotspotStatusRecord], None]


class HotspotMonitorDaemon:
    """Daemon that polls the hotspot state and restarts it when it is down.

    Each tick waits one interval on the stop event, reads the status and,
    when the hotspot is reported down and auto-recovery is on, runs a single
    disable / settle / enable sequence. Errors end the tick at the logger;
    nothing propagates out of the thread.
    """

    def __init__(
        self,
        controller: HotspotController,
        settings: Settings | None = None,
        status_listener: StatusListener | None = None,
    ) -> None:
        """Create a monitor daemon.

        Args:
            controller: Hotspot controller to supervise.
            settings: Interval, settle delay, enabled and auto-recovery flags.
            status_listener: Optional callback invoked with each status read.
        """
        settings = settings or Settings()
        self.controller = controller
        self.enabled = settings.monitor_enabled
        self.interval_seconds = settings.monitor_interval
        self.auto_recovery = settings.auto_recovery
        self.settle_delay = settings.settle_delay
        self.status_listener = status_listener

        self._stop_event = threading.Event()
        self._status_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._latest_status: HotspotStatusRecord | None = None
        self._logger = Logger.get("hotspot.monitor")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background thread; a no-op if disabled or already running."""
        if not self.enabled:
            self._logger.info("Hotspot monitor disabled")
            return
        if self._thread is not None:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="hotspot-monitor", daemon=True
        )
        self._thread.start()
        self._logger.info(
            f"Hotspot monitor started (interval {self.interval_seconds}s, "
            f"auto-recovery {'on' if self.auto_recovery else 'off'})"
        )

    def stop(self) -> None:
        """Signal the thread and wait for it to finish."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None
        self._logger.info("Hotspot monitor stopped")

    def get_latest_status(self) -> HotspotStatusRecord | None:
        """Return the most recent status read, or None before the first tick."""
        with self._status_lock:
            return self._latest_status

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.check_once()
            except Exception as e:
                self._logger.exception(f"Hotspot monitor tick failed: {e}")

    def check_once(self) -> None:
        """Run one health check and, if needed, one recovery sequence."""
        try:
            status = self.controller.get_status()
        except NetConfigError as e:
            self._logger.warning(f"Hotspot status check failed: {e}")
            return

        with self._status_lock:
            self._latest_status = status
        if self.status_listener:
            self.status_listener(status)

        if status.success and status.enabled:
            self._logger.debug(
                f"Hotspot healthy: {status.ssid} ({status.client_count} clients)"
            )
            return

        reason = status.error or "hotspot is not enabled"
        if not self.auto_recovery:
            self._logger.warning(f"Hotspot down ({reason}); auto-recovery is off")
            return

        self._logger.warning(f"Hotspot down ({reason}); restarting")
        self._recover()

    def _recover(self) -> None:
        try:
            self.controller.set_enabled(False)
        except NetConfigError as e:
            self._logger.error(f"Hotspot recovery aborted, disable failed: {e}")
            return

        # A stop requested during the settle wait still re-enables.
        self._stop_event.wait(self.settle_delay)

        try:
            self.controller.set_enabled(True)
        except NetConfigError as e:
            self._logger.error(f"Hotspot recovery failed, enable failed: {e}")
            return
        self._logger.info("Hotspot recovered")
