"""Factory for creating platform-specific network toolsets."""

import platform

from netconfig.backends.toolsets.base import NetworkToolset
from netconfig.exceptions import UnsupportedPlatformError
from netconfig.utils.commands import CommandRunner


class NetworkToolsetFactory:
    """Factory for creating network toolsets for the current platform.

    Automatically selects the appropriate platform implementation
    (Windows or Linux) based on the running system.
    """

    @staticmethod
    def create(
        runner: CommandRunner | None = None, system: str | None = None
    ) -> NetworkToolset:
        """Create a network toolset for the current platform.

        Args:
            runner: Command runner shared by the toolset's queries.
            system: Override for platform.system(), mainly for tests.

        Returns
        -------
            NetworkToolset subclass instance

        Raises
        ------
            UnsupportedPlatformError: If the platform has no toolset
        """
        system = system or platform.system()

        if system == "Windows":
            from netconfig.backends.toolsets.windows import WindowsToolset

            return WindowsToolset(runner)
        elif system == "Linux":
            from netconfig.backends.toolsets.linux import LinuxToolset

            return LinuxToolset(runner)
        else:
            raise UnsupportedPlatformError("Network configuration", system)


def get_network_toolset(runner: CommandRunner | None = None) -> NetworkToolset:
    """Get a network toolset for the current platform.

    Convenience function for easy access to the platform-specific toolset.
    """
    return NetworkToolsetFactory.create(runner)
