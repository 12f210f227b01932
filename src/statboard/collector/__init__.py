"""
Metric collectors.

Each collector pulls one provider's data and returns ``Metric`` records.
"""

from .base import Collector, HTTPClient, HTTPResponse
from .fitbit import FitbitCollector
from .registry import CollectorRegistry, default_registry

__all__ = [
    "Collector",
    "CollectorRegistry",
    "FitbitCollector",
    "HTTPClient",
    "HTTPResponse",
    "default_registry",
]
