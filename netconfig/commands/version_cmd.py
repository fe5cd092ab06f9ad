"""
Version command - displays netconfig version information
"""

from netconfig.version.netconfig_version import NETCONFIG_VERSION


def run_version(verbose: bool = False) -> None:
    """
    Display netconfig version information.

    Args:
        verbose: If True, show additional details like full hash and date
    """
    if verbose:
        print(f"netconfig version {NETCONFIG_VERSION.full_version()}")
        print("\nDetailed version information:")
        print(f"  Semantic Version: {NETCONFIG_VERSION}")
        print(f"  Release Date:     {NETCONFIG_VERSION.date_string()}")
        print(f"  Package Hash:     {NETCONFIG_VERSION.hash}")
    else:
        print(f"netconfig {NETCONFIG_VERSION}")
