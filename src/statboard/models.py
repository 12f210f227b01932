"""
Dashboard data models.

A Metric is the only thing collectors hand to the outside world: a named,
dated number.  Sinks (rendering, storage) consume lists of them.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any


@dataclass(frozen=True)
class Metric:
    """One dated observation, e.g. ``fitbit.steps`` on 2025-01-03 = 8412.0."""

    name: str
    date: date
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "date": self.date.isoformat(), "value": self.value}
