"""Tests for hotspot backends, capability probing and the controller."""

import pytest
from conftest import FakeRunner

from netconfig.backends.hotspot import (
    HotspotBackend,
    HotspotController,
    LegacyHotspotBackend,
    ModernHotspotBackend,
    probe_hotspot_capability,
)
from netconfig.exceptions import (
    ConfigurationError,
    HotspotEnableError,
    HotspotQueryError,
    QueryError,
    UnsupportedPlatformError,
    ValidationError,
)
from netconfig.models import (
    HotspotCapability,
    HotspotConfigRequest,
    HotspotStatusRecord,
)
from netconfig.models.constants import HotspotBackendKind

MODERN = HotspotBackendKind.MODERN
LEGACY = HotspotBackendKind.LEGACY


class FakeHotspotBackend(HotspotBackend):
    """Backend that records calls and fails the operations it is told to."""

    def __init__(self, kind, fail=()):
        self.kind = kind
        super().__init__(FakeRunner())
        self.fail = set(fail)
        self.calls = []
        self.status = HotspotStatusRecord(success=True, enabled=True, ssid="Hotspot")

    def get_status(self):
        self.calls.append(("get_status",))
        if "status" in self.fail:
            raise QueryError(f"{self.kind} status failed")
        return self.status

    def configure(self, ssid, passphrase):
        self.calls.append(("configure", ssid, passphrase))
        if "configure" in self.fail:
            raise ConfigurationError("configure", "refused", backend=self.kind)

    def set_enabled(self, enabled):
        self.calls.append(("set_enabled", enabled))
        step = "enable" if enabled else "disable"
        if step in self.fail:
            raise ConfigurationError(step, "radio off", backend=self.kind)


def _controller(modern_fail=(), legacy_fail=(), debug=False):
    modern = FakeHotspotBackend(MODERN, modern_fail)
    legacy = FakeHotspotBackend(LEGACY, legacy_fail)
    runner = FakeRunner()
    controller = HotspotController(
        HotspotCapability(platform="Windows", os_build=22631, preferred=MODERN),
        runner=runner,
        debug=debug,
        backends={MODERN: modern, LEGACY: legacy},
    )
    return controller, modern, legacy, runner


@pytest.mark.parametrize(
    ("ssid", "passphrase", "field"),
    [
        ("x" * 33, "password1", "ssid"),
        ("", "password1", "ssid"),
        ("MyHotspot", "x" * 7, "passphrase"),
        ("MyHotspot", "x" * 64, "passphrase"),
    ],
)
def test_configure_validation_calls_no_backend(ssid, passphrase, field):
    """Test out-of-range credentials are rejected before any backend runs."""
    controller, modern, legacy, runner = _controller(debug=True)

    with pytest.raises(ValidationError) as exc_info:
        controller.configure(HotspotConfigRequest(ssid=ssid, passphrase=passphrase))

    assert exc_info.value.field == field
    assert modern.calls == []
    assert legacy.calls == []
    assert runner.calls == []


def test_configure_length_boundaries():
    """Test the shortest and longest allowed values are accepted."""
    controller, modern, _, _ = _controller()

    controller.configure(HotspotConfigRequest(ssid="x" * 32, passphrase="y" * 8))
    controller.configure(HotspotConfigRequest(ssid="x", passphrase="y" * 63))

    assert [c[0] for c in modern.calls] == ["configure", "configure"]


def test_configure_then_enable_on_same_backend():
    """Test enable follows configure on the backend that configured."""
    controller, modern, legacy, _ = _controller()

    controller.configure(
        HotspotConfigRequest(ssid="MyHotspot", passphrase="password1", enable=True)
    )

    assert modern.calls == [
        ("configure", "MyHotspot", "password1"),
        ("set_enabled", True),
    ]
    assert legacy.calls == []


def test_no_fallback_outside_debug_mode():
    """Test a failure is raised as-is without diagnostics or fallback."""
    controller, _, legacy, runner = _controller(modern_fail={"configure"})

    with pytest.raises(ConfigurationError) as exc_info:
        controller.configure(HotspotConfigRequest(ssid="MyHotspot", passphrase="password1"))

    assert exc_info.value.backend == MODERN
    assert legacy.calls == []
    assert runner.calls == []


def test_debug_fallback_runs_diagnostics_and_alternate():
    """Test debug mode collects diagnostics and retries on the other backend."""
    controller, modern, legacy, runner = _controller(
        modern_fail={"configure"}, debug=True
    )

    controller.configure(
        HotspotConfigRequest(ssid="MyHotspot", passphrase="password1", enable=True)
    )

    assert modern.calls == [("configure", "MyHotspot", "password1")]
    assert legacy.calls == [
        ("configure", "MyHotspot", "password1"),
        ("set_enabled", True),
    ]
    assert len(runner.calls) == 3
    assert all(call[0] == "powershell" for call in runner.calls)


def test_enable_failure_after_configure():
    """Test a failed enable after a good configure raises HotspotEnableError."""
    controller, modern, legacy, _ = _controller(modern_fail={"enable"}, debug=True)

    with pytest.raises(HotspotEnableError) as exc_info:
        controller.configure(
            HotspotConfigRequest(ssid="MyHotspot", passphrase="password1", enable=True)
        )

    assert exc_info.value.step == "enable"
    assert exc_info.value.backend == MODERN
    assert legacy.calls == []


def test_set_enabled_fallback():
    """Test set_enabled follows the same fallback rule."""
    controller, modern, legacy, _ = _controller(modern_fail={"disable"}, debug=True)

    controller.set_enabled(False)

    assert modern.calls == [("set_enabled", False)]
    assert legacy.calls == [("set_enabled", False)]


def test_status_failure_names_backends():
    """Test HotspotQueryError lists every backend that was tried."""
    controller, _, _, _ = _controller(modern_fail={"status"})
    with pytest.raises(HotspotQueryError) as exc_info:
        controller.get_status()
    assert exc_info.value.backends == ["modern"]
    assert "tried: modern" in str(exc_info.value)

    controller, _, _, _ = _controller(
        modern_fail={"status"}, legacy_fail={"status"}, debug=True
    )
    with pytest.raises(HotspotQueryError) as exc_info:
        controller.get_status()
    assert exc_info.value.backends == ["modern", "legacy"]


def test_status_debug_fallback_succeeds():
    """Test the alternate backend's status is returned in debug mode."""
    controller, _, legacy, _ = _controller(modern_fail={"status"}, debug=True)
    legacy.status = HotspotStatusRecord(success=True, enabled=False, ssid="Legacy")

    assert controller.get_status().ssid == "Legacy"


def test_unsupported_platform():
    """Test every operation is refused where no backend exists."""
    controller = HotspotController(HotspotCapability(platform="Linux"), FakeRunner())

    with pytest.raises(UnsupportedPlatformError):
        controller.get_status()
    with pytest.raises(UnsupportedPlatformError):
        controller.set_enabled(True)


@pytest.mark.parametrize(
    ("output", "success", "preferred", "build"),
    [
        ('{"Major":10,"Minor":0,"Build":22631,"Revision":0}', True, MODERN, 22631),
        ('{"Major":10,"Minor":0,"Build":19045,"Revision":0}', True, LEGACY, 19045),
        ("", False, LEGACY, None),
        ("garbage", True, LEGACY, None),
    ],
)
def test_capability_probe_windows(output, success, preferred, build):
    """Test the backend choice follows the Windows build number."""
    runner = FakeRunner().add(["powershell"], output, success=success)

    capability = probe_hotspot_capability(runner, system="Windows")

    assert capability.preferred == preferred
    assert capability.os_build == build
    assert capability.supported


def test_capability_probe_other_platform():
    """Test non-Windows hosts get no hotspot backend and run no command."""
    runner = FakeRunner()

    capability = probe_hotspot_capability(runner, system="Linux")

    assert not capability.supported
    assert capability.alternate is None
    assert runner.calls == []


def test_capability_alternate():
    """Test each backend's alternate is the other one."""
    assert HotspotCapability(platform="Windows", preferred=MODERN).alternate == LEGACY
    assert HotspotCapability(platform="Windows", preferred=LEGACY).alternate == MODERN


# Backends


def test_legacy_backend_commands():
    """Test the netsh hostednetwork commands."""
    runner = FakeRunner().add(["netsh", "wlan"], "The hosted network started.")
    backend = LegacyHotspotBackend(runner)

    backend.configure("MyHotspot", "password1")
    backend.set_enabled(True)
    backend.set_enabled(False)

    assert runner.calls == [
        [
            "netsh",
            "wlan",
            "set",
            "hostednetwork",
            "mode=allow",
            "ssid=MyHotspot",
            "key=password1",
        ],
        ["netsh", "wlan", "start", "hostednetwork"],
        ["netsh", "wlan", "stop", "hostednetwork"],
    ]


def test_legacy_backend_failure():
    """Test failures carry the step and the backend kind."""
    runner = FakeRunner().add(
        ["netsh"], success=False, diagnostic="The hosted network couldn't be started."
    )
    backend = LegacyHotspotBackend(runner)

    with pytest.raises(ConfigurationError) as exc_info:
        backend.set_enabled(True)
    assert exc_info.value.step == "enable"
    assert exc_info.value.backend == LEGACY

    with pytest.raises(QueryError):
        backend.get_status()


def test_legacy_backend_status():
    """Test the hosted network status is parsed."""
    runner = FakeRunner().add(
        ["netsh", "wlan", "show", "hostednetwork"],
        '    SSID name              : "MyHotspot"\n'
        "    Status                 : Started\n"
        "    Number of clients      : 1\n",
    )

    status = LegacyHotspotBackend(runner).get_status()

    assert status.enabled is True
    assert status.ssid == "MyHotspot"
    assert status.client_count == 1


def test_modern_backend_requires_success_marker():
    """Test a script that exits cleanly without the marker is a failure."""
    runner = FakeRunner().add(["powershell"], "")
    backend = ModernHotspotBackend(runner)

    with pytest.raises(ConfigurationError) as exc_info:
        backend.set_enabled(True)
    assert exc_info.value.backend == MODERN

    runner.add(["powershell"], "Success\r\n")
    backend.set_enabled(True)
    assert "StartTetheringAsync" in runner.calls[-1][-1]


def test_modern_backend_quotes_credentials():
    """Test SSID and passphrase are embedded as PowerShell literals."""
    runner = FakeRunner().add(["powershell"], "Success")

    ModernHotspotBackend(runner).configure("Bob's AP", "pass'word")

    script = runner.calls[-1][-1]
    assert "$config.Ssid = 'Bob''s AP'" in script
    assert "$config.Passphrase = 'pass''word'" in script


def test_modern_backend_status():
    """Test the status JSON and an unreadable reply."""
    runner = FakeRunner().add(
        ["powershell"],
        '{"Enabled":true,"SSID":"Hotspot-1","MaxClients":8,"ClientsCount":2}',
    )
    status = ModernHotspotBackend(runner).get_status()
    assert status.enabled is True
    assert status.client_count == 2

    runner.add(["powershell"], "Exception calling GetCurrentAccessPointConfiguration")
    with pytest.raises(QueryError):
        ModernHotspotBackend(runner).get_status()
