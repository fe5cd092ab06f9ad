"""Constants for netconfig models and commands."""

import sys
from enum import auto

if sys.version_info >= (3, 11):  # noqa: UP036
    from enum import StrEnum
else:
    from backports.strenum import StrEnum  # noqa: UP035


class AdapterType(StrEnum):
    """Physical classification of a network adapter."""

    ETHERNET = auto()
    WIRELESS = auto()


class InterfaceStatus(StrEnum):
    """Operational status of an interface."""

    UP = auto()
    DOWN = auto()


class HotspotBackendKind(StrEnum):
    """Hotspot control backends."""

    MODERN = auto()
    LEGACY = auto()


class AddressFamily(StrEnum):
    """Address families handled by the engine."""

    IPV4 = auto()
    IPV6 = auto()


# DNS list sentinels. Callers must not treat these as resolver addresses.
DNS_NONE = "none"
DNS_UNAVAILABLE = "unavailable"

DATE_UNKNOWN = "Unknown"

SSID_MIN_LENGTH = 1
SSID_MAX_LENGTH = 32
PASSPHRASE_MIN_LENGTH = 8
PASSPHRASE_MAX_LENGTH = 63

# Windows 11 starts at build 22000 (major version still reports 10).
MODERN_HOTSPOT_MIN_BUILD = 22000

WIRELESS_NAME_HINTS = ("wi-fi", "wireless", "wlan")
WIRELESS_NAME_PREFIXES = ("wl",)

# Matched case-insensitively as substrings of the interface name.
DEFAULT_VIRTUAL_SIGNATURES = (
    "virtual",
    "vethernet",
    "wireguard",
    "virtualbox",
    "vmware",
    "vpn",
    "hyper-v",
    "tap-windows",
    "loopback",
)

# Matched as name prefixes (Linux naming).
DEFAULT_VIRTUAL_PREFIXES = (
    "docker",
    "veth",
    "br-",
    "virbr",
    "tun",
    "tap",
    "wg",
    "vmnet",
    "vboxnet",
    "zt",
    "tailscale",
)

DEFAULT_PRODUCT_DENYLIST = ("KM-TEST",)
