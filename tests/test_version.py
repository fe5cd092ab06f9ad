"""Tests for the netconfig version information."""

from datetime import datetime

from netconfig.version.netconfig_version import Version


def test_version_methods():
    """Test Version class methods."""
    v = Version(
        major=1,
        minor=2,
        patch=3,
        hash="abcdef123456",
        date=datetime(2023, 1, 1),
    )

    assert str(v) == "1.2.3"
    assert v.semver() == (1, 2, 3)
    assert v.hash_short(4) == "abcd"
    assert v.date_string("%Y") == "2023"
    assert "1.2.3" in v.full_version()
    assert "abcd" in v.full_version()


def test_netconfig_version_instance():
    """Test the global NETCONFIG_VERSION instance."""
    import netconfig
    from netconfig.version.netconfig_version import NETCONFIG_VERSION

    assert isinstance(NETCONFIG_VERSION, Version)
    assert NETCONFIG_VERSION.major >= 0
    assert len(NETCONFIG_VERSION.hash) == 64
    assert netconfig.__version__ == str(NETCONFIG_VERSION)
