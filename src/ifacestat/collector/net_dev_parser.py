"""
Parser for the kernel's /proc/net/dev table.

Two header lines, then one line per interface:

    Inter-|   Receive                                                |  Transmit
     face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
        lo:    8284     108    0    0    0     0          0         0     8284     108    0    0    0     0       0          0

Any malformed line fails the whole read. No external deps.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from ifacestat.metrics import COUNTER_NAMES, NUM_COUNTERS

log = logging.getLogger(__name__)

DEFAULT_PROC_NET_DEV = "/proc/net/dev"

HEADER_LINES = 2

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# int() alone would also accept "1_000" and unicode digits
_INT_RE = re.compile(r"^[+-]?[0-9]+$")

NetDevStats = Dict[str, Dict[str, int]]


class NetDevParseError(ValueError):
    def __init__(self, message: str, line_no: Optional[int] = None, path: Optional[str] = None):
        self.line_no = line_no
        self.path = path
        where = path or "<text>"
        if line_no is not None:
            where = f"{where}:{line_no}"
        super().__init__(f"{where}: {message}")


def _parse_int(field: str, line_no: int, path: Optional[str]) -> int:
    if not _INT_RE.match(field):
        raise NetDevParseError(f"invalid counter value {field!r}", line_no, path)
    value = int(field)
    if not INT64_MIN <= value <= INT64_MAX:
        raise NetDevParseError(f"counter value {field} out of int64 range", line_no, path)
    return value


def parse_net_dev(text: str, path: Optional[str] = None) -> NetDevStats:
    """Returns {interface: {counter_name: value}} with 16 counters per interface."""
    stats: NetDevStats = {}

    for line_no, line in enumerate(text.split("\n")[HEADER_LINES:], start=HEADER_LINES + 1):
        if not line.strip():
            continue

        iface, sep, rest = line.partition(":")
        if not sep:
            raise NetDevParseError("missing ':' after interface name", line_no, path)

        iface = iface.strip()
        if not iface:
            raise NetDevParseError("empty interface name", line_no, path)

        fields = rest.split()
        if len(fields) != NUM_COUNTERS:
            raise NetDevParseError(
                f"expected {NUM_COUNTERS} fields for {iface!r}, got {len(fields)}",
                line_no,
                path,
            )

        stats[iface] = {
            name: _parse_int(field, line_no, path)
            for name, field in zip(COUNTER_NAMES, fields)
        }

    return stats


def read_net_dev(path: str = DEFAULT_PROC_NET_DEV) -> NetDevStats:
    """Read and parse the table at path. OSError and NetDevParseError propagate."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise NetDevParseError(f"not valid utf-8 text ({e.reason})", path=path) from e

    stats = parse_net_dev(text, path=path)
    log.debug("Read %d interfaces from %s", len(stats), path)
    return stats
