"""Host environment probing.

Key objects:
    has_local_network_plugin - Detect the vagrant-auto_network plugin
    VagrantPluginLister      - ``vagrant plugin list`` backed PluginLister
"""

from .probe import (
    AUTO_NETWORK_IP,
    STATIC_DEFAULT_IP,
    PluginLister,
    VagrantPluginLister,
    default_vm_ip,
    has_local_network_plugin,
)

__all__ = [
    "AUTO_NETWORK_IP",
    "STATIC_DEFAULT_IP",
    "PluginLister",
    "VagrantPluginLister",
    "default_vm_ip",
    "has_local_network_plugin",
]
