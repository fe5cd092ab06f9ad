"""Hotspot control with backend selection and diagnostics-mode fallback."""

from __future__ import annotations

from collections.abc import Callable

from netconfig.backends.hotspot.base import HotspotBackend
from netconfig.backends.hotspot.diagnostics import collect_hotspot_diagnostics
from netconfig.backends.hotspot.legacy import LegacyHotspotBackend
from netconfig.backends.hotspot.modern import ModernHotspotBackend
from netconfig.exceptions import (
    ConfigurationError,
    HotspotEnableError,
    HotspotQueryError,
    QueryError,
    UnsupportedPlatformError,
    ValidationError,
)
from netconfig.models import HotspotCapability, HotspotConfigRequest, HotspotStatusRecord
from netconfig.models.constants import (
    PASSPHRASE_MAX_LENGTH,
    PASSPHRASE_MIN_LENGTH,
    SSID_MAX_LENGTH,
    SSID_MIN_LENGTH,
    HotspotBackendKind,
)
from netconfig.utils.commands import CommandRunner
from netconfig.utils.logger import Logger

BACKEND_CLASSES: dict[HotspotBackendKind, type[HotspotBackend]] = {
    HotspotBackendKind.MODERN: ModernHotspotBackend,
    HotspotBackendKind.LEGACY: LegacyHotspotBackend,
}


def validate_hotspot_request(request: HotspotConfigRequest) -> None:
    """Check SSID and passphrase lengths.

    Raises:
        ValidationError: If either value is out of range.
    """
    if not SSID_MIN_LENGTH <= len(request.ssid) <= SSID_MAX_LENGTH:
        raise ValidationError(
            "ssid", f"must be {SSID_MIN_LENGTH}-{SSID_MAX_LENGTH} characters"
        )
    if not PASSPHRASE_MIN_LENGTH <= len(request.passphrase) <= PASSPHRASE_MAX_LENGTH:
        raise ValidationError(
            "passphrase",
            f"must be {PASSPHRASE_MIN_LENGTH}-{PASSPHRASE_MAX_LENGTH} characters",
        )


class HotspotController:
    """Uniform get-status / configure / set-enabled over the hotspot backends.

    Every operation runs on the capability's preferred backend. Only in
    debug mode does a failure trigger diagnostics collection and a second
    attempt on the other backend. There is no retry beyond that.
    """

    def __init__(
        self,
        capability: HotspotCapability,
        runner: CommandRunner | None = None,
        debug: bool = False,
        backends: dict[HotspotBackendKind, HotspotBackend] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            capability: Result of probe_hotspot_capability().
            runner: Command runner shared by the backends.
            debug: Enable diagnostics collection and backend fallback.
            backends: Pre-built backends by kind; missing kinds are created
                on first use.
        """
        self.capability = capability
        self.runner = runner or CommandRunner()
        self.debug = debug
        self._backends: dict[HotspotBackendKind, HotspotBackend] = dict(backends or {})
        self._logger = Logger.get("hotspot.controller")

    def _backend(self, kind: HotspotBackendKind) -> HotspotBackend:
        if kind not in self._backends:
            self._backends[kind] = BACKEND_CLASSES[kind](self.runner)
        return self._backends[kind]

    def _preferred_kind(self) -> HotspotBackendKind:
        if self.capability.preferred is None:
            raise UnsupportedPlatformError("Mobile hotspot", self.capability.platform)
        return self.capability.preferred

    def _fallback_kind(self, error: Exception) -> HotspotBackendKind | None:
        """The alternate backend in debug mode, after collecting diagnostics."""
        alternate = self.capability.alternate
        if not self.debug or alternate is None:
            return None
        self._logger.warning(
            f"{self.capability.preferred} hotspot backend failed ({error}); "
            f"collecting diagnostics and trying {alternate}"
        )
        collect_hotspot_diagnostics(self.runner)
        return alternate

    def get_status(self) -> HotspotStatusRecord:
        """Read the hotspot state.

        Raises
        ------
            HotspotQueryError: Every attempted backend failed.
            UnsupportedPlatformError: No backend on this platform.
        """
        preferred = self._preferred_kind()
        try:
            return self._backend(preferred).get_status()
        except QueryError as e:
            first_error = e

        alternate = self._fallback_kind(first_error)
        if alternate is None:
            raise HotspotQueryError(str(first_error), [preferred]) from first_error

        try:
            return self._backend(alternate).get_status()
        except QueryError as e:
            raise HotspotQueryError(
                f"{first_error}; {e}", [preferred, alternate]
            ) from e

    def _write(self, operation: Callable[[HotspotBackend], None]) -> HotspotBackend:
        """Run a write on the preferred backend; return the backend that succeeded."""
        backend = self._backend(self._preferred_kind())
        try:
            operation(backend)
            return backend
        except ConfigurationError as e:
            alternate = self._fallback_kind(e)
            if alternate is None:
                raise

        backend = self._backend(alternate)
        operation(backend)
        return backend

    def configure(self, request: HotspotConfigRequest) -> None:
        """Set SSID and passphrase, then enable on the same backend if asked.

        Raises
        ------
            ValidationError: Bad SSID or passphrase; no backend was called.
            ConfigurationError: The configure step failed (step="configure").
            HotspotEnableError: Configured, but enabling afterwards failed.
        """
        validate_hotspot_request(request)

        backend = self._write(lambda b: b.configure(request.ssid, request.passphrase))
        self._logger.info(f"Hotspot configured via {backend.kind}: {request.ssid}")

        if request.enable:
            try:
                backend.set_enabled(True)
            except ConfigurationError as e:
                raise HotspotEnableError(str(e), backend=backend.kind) from e

    def set_enabled(self, enabled: bool) -> None:
        """Start or stop the hotspot. Redundant calls are passed through."""
        backend = self._write(lambda b: b.set_enabled(enabled))
        self._logger.info(
            f"Hotspot {'enabled' if enabled else 'disabled'} via {backend.kind}"
        )
