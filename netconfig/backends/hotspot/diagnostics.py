"""Diagnostic collection run before a hotspot backend fallback.

The results are only logged; they never change control flow.
"""

from __future__ import annotations

from netconfig.backends.toolsets.windows import POWERSHELL
from netconfig.utils.commands import CommandRunner
from netconfig.utils.logger import Logger

DIAGNOSTIC_SCRIPTS = {
    "execution_policy": "Get-ExecutionPolicy",
    "active_adapters": (
        "Get-NetAdapter | Where-Object { $_.Status -eq 'Up' } | "
        "Select-Object Name, InterfaceDescription | ConvertTo-Json -Compress"
    ),
    "sharedaccess_service": (
        "Get-Service -Name SharedAccess | Select-Object Name, Status | "
        "ConvertTo-Json -Compress"
    ),
}


def collect_hotspot_diagnostics(runner: CommandRunner) -> dict[str, str]:
    """Collect execution policy, active adapters and ICS service state."""
    log = Logger.get("hotspot.diagnostics")
    findings: dict[str, str] = {}

    for key, script in DIAGNOSTIC_SCRIPTS.items():
        result = runner.run([*POWERSHELL, script])
        value = result.output.strip() if result.success else f"error: {result.diagnostic}"
        findings[key] = value
        log.info(f"{key}: {value}")

    if findings["execution_policy"] == "Restricted":
        log.warning("PowerShell execution policy is Restricted; tethering scripts may fail")

    return findings
