"""
Core metric definitions for ifacestat.

These are the value types the host monitoring framework exchanges with
the collector: namespaces, metrics, plugin metadata and config policy.
The counter taxonomy mirrors the 16 columns of /proc/net/dev.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Tuple

VENDOR = "intel"
PLUGIN_CLASS = "procfs"
PLUGIN_NAME = "iface"
PLUGIN_VERSION = 1

NAMESPACE_PREFIX: Tuple[str, ...] = (VENDOR, PLUGIN_CLASS, PLUGIN_NAME)

WILDCARD = "*"


@dataclass(frozen=True)
class CounterInfo:
    unit: str
    description: str


# Source column order: 8 receive columns, then the same 8 for transmit.
_BASE_COUNTERS = (
    ("bytes", "B", "bytes"),
    ("packets", "packets", "packets"),
    ("errs", "errors", "errors"),
    ("drop", "packets", "dropped packets"),
    ("fifo", "errors", "FIFO buffer errors"),
    ("frame", "errors", "packet framing errors"),
    ("compressed", "packets", "compressed packets"),
    ("multicast", "packets", "multicast frames"),
)

COUNTER_INFO: Dict[str, CounterInfo] = {}
for _direction, _verb in (("recv", "received"), ("sent", "transmitted")):
    for _kind, _unit, _what in _BASE_COUNTERS:
        COUNTER_INFO[f"{_kind}_{_direction}"] = CounterInfo(
            unit=_unit,
            description=f"Number of {_what} {_verb} by the interface",
        )

COUNTER_NAMES: Tuple[str, ...] = tuple(COUNTER_INFO)
NUM_COUNTERS = len(COUNTER_NAMES)


@dataclass(frozen=True)
class Namespace:
    """Ordered metric path, e.g. /intel/procfs/iface/lo/bytes_recv."""

    elements: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "elements", tuple(self.elements))

    @classmethod
    def for_counter(cls, interface: str, counter: str) -> "Namespace":
        return cls(NAMESPACE_PREFIX + (interface, counter))

    @classmethod
    def parse(cls, text: str) -> "Namespace":
        """Build a namespace from its /a/b/c text form."""
        parts = text.strip().strip("/").split("/")
        if parts == [""]:
            return cls(())
        return cls(tuple(parts))

    @property
    def interface(self) -> Optional[str]:
        return self.elements[3] if len(self.elements) > 3 else None

    @property
    def counter(self) -> Optional[str]:
        return self.elements[4] if len(self.elements) > 4 else None

    @property
    def is_wildcard(self) -> bool:
        return WILDCARD in self.elements

    def strings(self) -> Tuple[str, ...]:
        return self.elements

    def __str__(self) -> str:
        return "/" + "/".join(self.elements)


@dataclass
class Metric:
    """A metric as exchanged with the host.

    Catalog entries carry no data or timestamp; collected metrics carry both.
    """

    namespace: Namespace
    data: Optional[int] = None
    timestamp: Optional[datetime] = None
    unit: str = ""
    description: str = ""
    tags: Dict[str, str] = field(default_factory=dict)

    def summary(self) -> dict:
        """Return a plain dict for display or JSON output."""
        return {
            "namespace": str(self.namespace),
            "data": self.data,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "unit": self.unit,
            "description": self.description,
            "tags": dict(self.tags),
        }


@dataclass(frozen=True)
class PluginMeta:
    name: str = PLUGIN_NAME
    version: int = PLUGIN_VERSION
    plugin_type: str = "collector"
    concurrency_count: int = 5


@dataclass
class ConfigPolicy:
    """Config rules keyed by namespace prefix. Empty means nothing is required."""

    rules: Dict[Tuple[str, ...], Dict[str, dict]] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.rules
