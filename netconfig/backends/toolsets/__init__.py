"""Platform toolsets for interface queries and mutations."""

from netconfig.backends.toolsets.base import GatewayStrategy, NetworkToolset
from netconfig.backends.toolsets.factory import (
    NetworkToolsetFactory,
    get_network_toolset,
)

__all__ = [
    "GatewayStrategy",
    "NetworkToolset",
    "NetworkToolsetFactory",
    "get_network_toolset",
]
