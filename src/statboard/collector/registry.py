"""
Collector plugin registry.

Discovers collectors at runtime via ``importlib.metadata`` entry points
(group: ``statboard.collectors``).  Third-party packages can register
collectors in their own ``pyproject.toml``:

    [project.entry-points."statboard.collectors"]
    my_device = "my_package.collector:MyCollector"
"""

from importlib.metadata import entry_points
from typing import Any

from loguru import logger

from .base import Collector

ENTRY_POINT_GROUP = "statboard.collectors"


def _is_collector_class(obj: Any) -> bool:
    # issubclass() is not supported for protocols with data members
    if not isinstance(obj, type):
        return False
    return isinstance(getattr(obj, "name", None), str) and callable(getattr(obj, "collect", None))


class CollectorRegistry:
    """Discover and manage metric collector plugins."""

    def __init__(self):
        self._collectors: dict[str, type] = {}

    def discover(self) -> dict[str, type]:
        """Scan entry points and return {name: collector_class}."""
        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                cls = ep.load()
            except Exception as e:
                logger.warning(f"Failed to load collector '{ep.name}': {e}")
                continue

            if _is_collector_class(cls):
                self._collectors[ep.name] = cls
                logger.debug(f"Discovered collector: {ep.name}")
            else:
                logger.warning(f"Entry point '{ep.name}' is not a Collector, skipping")

        return dict(self._collectors)

    def register(self, name: str, collector_class: type) -> None:
        """Manually register a collector (useful for testing)."""
        self._collectors[name] = collector_class

    def get(self, name: str) -> type | None:
        """Get a registered collector class by name."""
        return self._collectors.get(name)

    def list_names(self) -> list[str]:
        return sorted(self._collectors)

    def create(self, name: str, **config: Any) -> Collector:
        """Instantiate a collector by name with the given config."""
        cls = self._collectors.get(name)
        if cls is None:
            raise KeyError(f"No collector registered as '{name}'. Available: {self.list_names()}")
        return cls(**config)


def default_registry() -> CollectorRegistry:
    """Registry with the built-in collectors plus anything installed via entry points."""
    from .fitbit import FitbitCollector

    registry = CollectorRegistry()
    registry.register(FitbitCollector.name, FitbitCollector)
    registry.discover()
    return registry
