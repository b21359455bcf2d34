import logging
import socket

import psutil
from netrate.util import procnet

logger = logging.getLogger(__name__)


def get_ip_addresses() -> list[str]:
    """
    Return the IPv4 addresses of every allowed interface that is up.
    """
    addresses: list[str] = []
    try:
        all_addrs = psutil.net_if_addrs()
        all_stats = psutil.net_if_stats()
    except (OSError, psutil.Error) as e:
        logger.debug(f"[get_ip_addresses] - failed to list interfaces: {e}")
        return addresses

    for interface in sorted(all_addrs.keys()):
        if not procnet.is_allowed_interface(interface):
            continue

        stats = all_stats.get(interface)
        if stats is None or not stats.isup:
            continue

        for addr in all_addrs[interface]:
            if addr.family == socket.AF_INET and addr.address:
                addresses.append(addr.address)

    return addresses


def get_primary_ip() -> str | None:
    addresses = get_ip_addresses()
    return addresses[0] if addresses else None
