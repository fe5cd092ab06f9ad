"""netconfig - network interface discovery, configuration and hotspot control."""

from netconfig.version.netconfig_version import NETCONFIG_VERSION, Version

__version__ = str(NETCONFIG_VERSION)
__version_info__ = NETCONFIG_VERSION

__all__ = [
    "NETCONFIG_VERSION",
    "Version",
    "__version__",
    "__version_info__",
]
