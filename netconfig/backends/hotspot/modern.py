"""Modern hotspot backend: the Windows tethering API through PowerShell.

Used on Windows 11 (build 22000 and later), where the hosted network
feature of netsh is gone. Each call runs a short script against
NetworkOperatorTetheringManager bound to the current internet profile.
"""

from __future__ import annotations

from netconfig.backends.hotspot.base import HotspotBackend
from netconfig.backends.toolsets.windows import POWERSHELL, ps_literal
from netconfig.exceptions import ConfigurationError, QueryError
from netconfig.models import HotspotStatusRecord
from netconfig.models.constants import HotspotBackendKind
from netconfig.parsers import parse_tethering_status

SUCCESS_MARKER = "Success"

_PREAMBLE = """
[Console]::OutputEncoding = [System.Text.Encoding]::UTF8
$PSDefaultParameterValues['*:Encoding'] = 'utf8'
Add-Type -AssemblyName System.Runtime.WindowsRuntime
$profile = [Windows.Networking.Connectivity.NetworkInformation,Windows.Networking.Connectivity,ContentType=WindowsRuntime]::GetInternetConnectionProfile()
$manager = [Windows.Networking.NetworkOperators.NetworkOperatorTetheringManager,Windows.Networking.NetworkOperators,ContentType=WindowsRuntime]::CreateFromConnectionProfile($profile)
"""

_STATUS_SCRIPT = """
try {
    $config = $manager.GetCurrentAccessPointConfiguration()
    @{
        Enabled = [string]$manager.TetheringOperationalState -eq 'On'
        SSID = $config.Ssid
        MaxClients = $manager.MaxClientCount
        Authentication = [string]$config.Authentication
        Encryption = [string]$config.Encryption
        ClientsCount = $manager.ClientCount
    } | ConvertTo-Json -Compress
} catch {
    Write-Error $_.Exception.Message
    exit 1
}
"""

_CONFIGURE_SCRIPT = """
try {{
    $config = $manager.GetCurrentAccessPointConfiguration()
    $config.Ssid = {ssid}
    $config.Passphrase = {passphrase}
    $manager.ConfigureAccessPointAsync($config).AsTask().Wait()
    Write-Output "Success"
}} catch {{
    Write-Error $_.Exception.Message
    exit 1
}}
"""

_SET_ENABLED_SCRIPT = """
try {{
    $manager.{operation}().AsTask().Wait()
    Write-Output "Success"
}} catch {{
    Write-Error $_.Exception.Message
    exit 1
}}
"""


class ModernHotspotBackend(HotspotBackend):
    """Hotspot control via NetworkOperatorTetheringManager."""

    kind = HotspotBackendKind.MODERN

    def _script(self, body: str):
        return self._run([*POWERSHELL, _PREAMBLE + body])

    def _write(self, body: str, step: str) -> None:
        result = self._script(body)
        if not result.success:
            raise ConfigurationError(step, result.diagnostic, backend=self.kind)
        if SUCCESS_MARKER not in result.output:
            raise ConfigurationError(
                step,
                f"no success marker in output: {result.combined.strip()}",
                backend=self.kind,
            )

    def get_status(self) -> HotspotStatusRecord:
        result = self._script(_STATUS_SCRIPT)
        if not result.success:
            raise QueryError("Tethering status query failed", result.diagnostic)
        try:
            return parse_tethering_status(result.output)
        except ValueError as e:
            raise QueryError("Tethering status unreadable", str(e)) from e

    def configure(self, ssid: str, passphrase: str) -> None:
        self._write(
            _CONFIGURE_SCRIPT.format(
                ssid=ps_literal(ssid), passphrase=ps_literal(passphrase)
            ),
            "configure",
        )
        self._logger.info(f"Tethering access point configured: {ssid}")

    def set_enabled(self, enabled: bool) -> None:
        operation = "StartTetheringAsync" if enabled else "StopTetheringAsync"
        self._write(
            _SET_ENABLED_SCRIPT.format(operation=operation),
            "enable" if enabled else "disable",
        )
        self._logger.info(f"Tethering {'started' if enabled else 'stopped'}")
