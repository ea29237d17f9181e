"""Host environment probing.

Answers a single question about the host: is the ``vagrant-auto_network``
plugin installed? The answer only selects a smarter default IP address, so
any failure to ask Vagrant is treated as "not installed".
"""

from __future__ import annotations

from typing import Protocol

from rich.markup import escape

from src.utils import console, run_command

AUTO_NETWORK_PLUGIN = "auto_network"

AUTO_NETWORK_IP = "0.0.0.0"
STATIC_DEFAULT_IP = "192.168.88.88"


class PluginLister(Protocol):
    """Anything able to list installed Vagrant plugins."""

    async def list_plugins(self) -> str:
        """Return the raw plugin listing.

        Raises:
            OSError: If the listing tool cannot be executed or fails.
        """
        ...


class VagrantPluginLister:
    """Lists plugins through ``vagrant plugin list``."""

    def __init__(self, executable: str = "vagrant", timeout: float = 15) -> None:
        self.executable = executable
        self.timeout = timeout

    async def list_plugins(self) -> str:
        returncode, stdout, stderr = await run_command(
            [self.executable, "plugin", "list"], timeout=self.timeout
        )
        if returncode != 0:
            raise OSError(f"{self.executable} plugin list exited {returncode}: {stderr}")
        return stdout


async def has_local_network_plugin(lister: PluginLister | None = None) -> bool:
    """Return ``True`` if the auto_network Vagrant plugin is installed.

    Missing tooling, non-zero exits and timeouts all count as "absent".
    """
    lister = lister or VagrantPluginLister()
    try:
        listing = await lister.list_plugins()
    except OSError as exc:
        console.print(f"  [dim]Plugin probe unavailable: {escape(str(exc))}[/dim]")
        return False
    return AUTO_NETWORK_PLUGIN in listing


def default_vm_ip(has_auto_network: bool) -> str:
    """Pick the default VM IP for the probe result."""
    return AUTO_NETWORK_IP if has_auto_network else STATIC_DEFAULT_IP
