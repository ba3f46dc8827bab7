"""
Collector for network interface counters. Reads /proc/net/dev fresh on
every call and maps it into /intel/procfs/iface/<iface>/<counter> metrics.

Nothing is cached between calls: the counters are live kernel state. A
batch either succeeds completely or fails; there are no partial results.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Union

from ifacestat.collector.base import MetricsCollector
from ifacestat.collector.net_dev_parser import (
    DEFAULT_PROC_NET_DEV,
    NetDevStats,
    read_net_dev,
)
from ifacestat.metrics import (
    COUNTER_INFO,
    COUNTER_NAMES,
    NAMESPACE_PREFIX,
    WILDCARD,
    Metric,
    Namespace,
    PluginMeta,
)

log = logging.getLogger(__name__)


class MetricLookupError(LookupError):
    """A requested namespace isn't present in the current snapshot."""

    def __init__(self, namespace: Namespace, reason: str):
        self.namespace = namespace
        super().__init__(f"{namespace}: {reason}")


class IfaceCollector(MetricsCollector):

    def __init__(self, proc_path: str = DEFAULT_PROC_NET_DEV):
        self.proc_path = proc_path

    def get_stats(self) -> NetDevStats:
        return read_net_dev(self.proc_path)

    def get_metric_types(self, config: Optional[dict] = None) -> List[Metric]:
        """One wildcard catalog entry per counter kind seen in the source.

        Describes the shape of what can be collected, not live interfaces,
        so the result doesn't grow with the number of interfaces.
        """
        stats = self.get_stats()

        seen = set()
        for counters in stats.values():
            seen.update(counters)

        mts = []
        for counter in COUNTER_NAMES:
            if counter not in seen:
                continue
            info = COUNTER_INFO[counter]
            mts.append(Metric(
                namespace=Namespace.for_counter(WILDCARD, counter),
                unit=info.unit,
                description=info.description,
            ))

        log.debug("Catalog: %d metric types from %d interfaces", len(mts), len(stats))
        return mts

    def collect_metrics(self, requested: Sequence[Union[Metric, Namespace]]) -> List[Metric]:
        """Look up every requested namespace in a single fresh snapshot."""
        stats = self.get_stats()
        ts = datetime.now(timezone.utc)

        metrics = []
        for req in requested:
            if isinstance(req, Metric):
                ns, tags = req.namespace, req.tags
            else:
                ns, tags = req, {}

            value = self._lookup(stats, ns)
            info = COUNTER_INFO[ns.counter]
            metrics.append(Metric(
                namespace=ns,
                data=value,
                timestamp=ts,
                unit=info.unit,
                description=info.description,
                tags=dict(tags),
            ))

        log.debug("Collected %d metrics from %s", len(metrics), self.proc_path)
        return metrics

    @staticmethod
    def _lookup(stats: NetDevStats, ns: Namespace) -> int:
        elements = ns.strings()
        if len(elements) != len(NAMESPACE_PREFIX) + 2 or elements[:3] != NAMESPACE_PREFIX:
            raise MetricLookupError(ns, "not an /intel/procfs/iface/<interface>/<counter> namespace")

        iface, counter = ns.interface, ns.counter
        if iface == WILDCARD:
            raise MetricLookupError(ns, "collection needs a concrete interface, not '*'")

        counters = stats.get(iface)
        if counters is None:
            raise MetricLookupError(ns, f"interface {iface!r} not found")
        if counter not in counters:
            raise MetricLookupError(ns, f"counter {counter!r} not found")
        return counters[counter]

    def meta(self) -> PluginMeta:
        return PluginMeta()

    def name(self) -> str:
        return f"iface ({self.proc_path})"
