"""Base class for mobile hotspot backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from netconfig.models import HotspotStatusRecord
from netconfig.models.constants import HotspotBackendKind
from netconfig.utils.commands import CommandResult, CommandRunner
from netconfig.utils.logger import Logger


class HotspotBackend(ABC):
    """One way of driving the Windows mobile hotspot.

    get_status() raises QueryError on failure; configure() and
    set_enabled() raise ConfigurationError with ``backend`` set to kind.
    """

    kind: HotspotBackendKind

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner or CommandRunner()
        self._logger = Logger.get(f"hotspot.{self.kind}")

    def _run(self, args: Sequence[str]) -> CommandResult:
        result = self.runner.run(args)
        if not result.success:
            self._logger.debug(f"{self.kind} backend command failed: {result.diagnostic}")
        return result

    @abstractmethod
    def get_status(self) -> HotspotStatusRecord:
        pass

    @abstractmethod
    def configure(self, ssid: str, passphrase: str) -> None:
        """Store SSID and passphrase without changing the enabled state."""
        pass

    @abstractmethod
    def set_enabled(self, enabled: bool) -> None:
        pass
