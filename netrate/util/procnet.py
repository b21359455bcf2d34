import logging
import re
from dataclasses import fields

from dacite import Config, from_dict
from netrate.data.network_rates import InterfaceCounters
from netrate.util import misc

PROC_NET_DEV = "/proc/net/dev"
HEADER_LINES = 2
MIN_FIELDS = 9

# (kind, value) pairs; any match excludes the interface
INTERFACE_EXCLUDES: list[tuple[str, str]] = [
    ("exact", "lo"),
    ("prefix", "br-"),
    ("prefix", "docker"),
    ("prefix", "services"),
    ("prefix", "veth"),
]

COUNTER_FIELDS = [f.name for f in fields(InterfaceCounters) if f.name != "interface"]

logger = logging.getLogger(__name__)


def is_allowed_interface(name: str) -> bool:
    """
    Return False for loopback, bridge, docker and veth style interfaces.
    """
    for kind, value in INTERFACE_EXCLUDES:
        if kind == "exact" and name == value:
            return False
        if kind == "prefix" and name.startswith(value):
            return False
    return True


def parse_interface_counters(content: str) -> list[InterfaceCounters]:
    """
    Parse the contents of /proc/net/dev into one InterfaceCounters per data line.

    Header lines are skipped, as are lines without a colon or with fewer than
    nine counter fields. Non-numeric counters become 0.
    """
    entries: list[InterfaceCounters] = []
    lines = content.split("\n")[HEADER_LINES:]

    for line in lines:
        if not line.strip():
            continue

        raw_name, sep, raw_data = line.strip().partition(":")
        if not sep:
            logger.debug(f"[parse_interface_counters] - skipping line without colon: {line!r}")
            continue

        values = re.split(r"\s+", raw_data.strip()) if raw_data.strip() else []
        if len(values) < MIN_FIELDS:
            logger.debug(f"[parse_interface_counters] - skipping short line: {line!r}")
            continue

        data: dict[str, object] = {"interface": raw_name.strip()}
        data.update(zip(COUNTER_FIELDS, values))
        entry = from_dict(
            data_class=InterfaceCounters,
            data=data,
            config=Config(type_hooks={int: misc.int_hook}),
        )
        entries.append(entry)

    return entries


def parse_proc_net_dev(content: str) -> tuple[int, int]:
    """
    Sum received and transmitted bytes over all allowed interfaces.
    """
    rx_bytes = 0
    tx_bytes = 0

    for entry in parse_interface_counters(content):
        if not is_allowed_interface(entry.interface):
            continue
        rx_bytes += entry.r_bytes
        tx_bytes += entry.t_bytes

    return rx_bytes, tx_bytes
