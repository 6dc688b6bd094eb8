"""Connectivity check — is any real network interface up?"""

import ipaddress
import logging
import socket

import psutil

logger = logging.getLogger(__name__)


def _is_loopback(iface_name: str) -> bool:
    name_lower = iface_name.lower()
    return 'loopback' in name_lower or name_lower == 'lo'


def _is_routable(addr) -> bool:
    """True for an IPv4 address or a non-link-local IPv6 address."""
    if addr.family == socket.AF_INET:
        return not addr.address.startswith('127.')
    if addr.family == socket.AF_INET6:
        # Strip zone index, e.g. "fe80::1%eth0"
        ip = ipaddress.ip_address(addr.address.split('%', 1)[0])
        return not (ip.is_link_local or ip.is_loopback)
    return False


class NetworkDetector:
    """Detects an active, connected network interface using psutil."""

    @staticmethod
    def _active_interfaces() -> list[str]:
        stats = psutil.net_if_stats()
        addrs = psutil.net_if_addrs()
        active = []
        for iface_name, iface_stats in stats.items():
            if not iface_stats.isup or _is_loopback(iface_name):
                continue
            if any(_is_routable(a) for a in addrs.get(iface_name, [])):
                active.append(iface_name)
        return active

    @staticmethod
    def is_connected() -> bool:
        """Return True if at least one non-loopback interface is up with an address."""
        try:
            active = NetworkDetector._active_interfaces()
        except Exception as e:
            logger.warning("Network detection failed: %s", e)
            return False
        if active:
            logger.info("Active network interface(s): %s", ", ".join(active))
        else:
            logger.info("No active network interface")
        return bool(active)

