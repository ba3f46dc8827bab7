"""
Base collector interface.

The host framework drives every collector through the same entry points:
enumerate what can be collected, collect a batch of requested metrics,
and describe the plugin. This keeps the host and CLI decoupled from where
the numbers actually come from.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

from ifacestat.metrics import ConfigPolicy, Metric, Namespace, PluginMeta


class MetricsCollector(ABC):
    """Interface for all metrics sources."""

    @abstractmethod
    def get_metric_types(self, config: Optional[dict] = None) -> List[Metric]:
        """List the metrics this collector can produce (catalog form)."""
        ...

    @abstractmethod
    def collect_metrics(self, requested: Sequence[Union[Metric, Namespace]]) -> List[Metric]:
        """Collect values for exactly the requested namespaces."""
        ...

    @abstractmethod
    def meta(self) -> PluginMeta:
        ...

    def get_config_policy(self) -> ConfigPolicy:
        return ConfigPolicy()

    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this source."""
        ...
