"""Exception hierarchy for netconfig.

Read failures are QueryError subclasses, write failures are
ConfigurationError subclasses carrying the sub-step that failed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from netconfig.models.network_models import InterfaceRecord


class NetConfigError(Exception):
    """Base exception for all netconfig errors."""

    pass


class InterfaceNotFoundError(NetConfigError):
    """Raised when a named interface does not exist at the OS level."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Interface not found: {name}")


# Name used by API layers that only care about the "404" case.
NotFoundError = InterfaceNotFoundError


class ValidationError(NetConfigError):
    """Raised when a request is malformed; no backend has been called."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"Invalid {field}: {message}")


class QueryError(NetConfigError):
    """Raised when a read operation's underlying command or API failed."""

    def __init__(self, message: str, diagnostic: str = "") -> None:
        self.diagnostic = diagnostic
        if diagnostic:
            message = f"{message}: {diagnostic}"
        super().__init__(message)


class HardwareQueryError(QueryError):
    """Raised by get_interface when hardware details could not be resolved.

    The record assembled so far (with a MAC-only hardware descriptor) is
    attached so enumeration can still apply its filters to it.
    """

    def __init__(
        self,
        name: str,
        diagnostic: str,
        partial_record: InterfaceRecord | None = None,
    ) -> None:
        self.name = name
        self.partial_record = partial_record
        super().__init__(f"Hardware query failed for {name}", diagnostic)


class HotspotQueryError(QueryError):
    """Raised when the hotspot status could not be read from any backend."""

    def __init__(self, diagnostic: str, backends: list[str] | None = None) -> None:
        self.backends = backends or []
        attempted = ", ".join(self.backends) or "none"
        super().__init__(f"Hotspot status query failed (tried: {attempted})", diagnostic)


class ConfigurationError(NetConfigError):
    """Raised when a write operation failed.

    Args:
        step: Sub-step that failed ("ipv4", "ipv6", "configure", "enable", ...).
        message: Human readable cause.
        backend: Hotspot backend that was attempted, if any.
    """

    def __init__(self, step: str, message: str, backend: str | None = None) -> None:
        self.step = step
        self.backend = backend
        where = f"{step} via {backend}" if backend else step
        super().__init__(f"Configuration failed at {where}: {message}")


class HotspotEnableError(ConfigurationError):
    """Raised when a hotspot was configured but enabling it afterwards failed."""

    def __init__(self, message: str, backend: str | None = None) -> None:
        super().__init__("enable", f"configured but not enabled: {message}", backend)


class DecodeError(NetConfigError):
    """Raised when tool output is neither valid UTF-8 nor GBK."""

    pass


class UnsupportedPlatformError(NetConfigError):
    """Raised when an operation has no backend on the current platform."""

    def __init__(self, operation: str, platform_name: str) -> None:
        self.operation = operation
        self.platform_name = platform_name
        super().__init__(f"{operation} is not supported on {platform_name}")


__all__ = [
    "ConfigurationError",
    "DecodeError",
    "HardwareQueryError",
    "HotspotEnableError",
    "HotspotQueryError",
    "InterfaceNotFoundError",
    "NetConfigError",
    "NotFoundError",
    "QueryError",
    "UnsupportedPlatformError",
    "ValidationError",
]
