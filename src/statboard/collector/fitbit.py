"""
Fitbit Web API collector.

Fetches daily time series from ``https://api.fitbit.com/1/user/-`` and turns
them into ``Metric`` records.  The window always ends yesterday so a partially
recorded current day never reaches the dashboard.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from loguru import logger

from statboard.core.auth.fitbit_oauth import ACTIVITY_SCOPE, create_fitbit_client
from statboard.core.exceptions import (
    ClientCreationError,
    DateParseError,
    DecodeError,
    InvalidWindowError,
    MissingConfigError,
    UnsupportedMetricError,
    ValueParseError,
)

from ..models import Metric
from .base import HTTPClient
from .http import do_request

FITBIT_URI = "https://api.fitbit.com/1/user/-"
DATE_FORMAT = "%Y-%m-%d"

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_NUMBER_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class StepsRow:
    activity_date: str
    steps: str


@dataclass(frozen=True)
class StepsResponse:
    """Body of ``activities/steps/date/<start>/<end>.json``."""

    steps: list[StepsRow]

    @classmethod
    def from_json(cls, body: bytes) -> StepsResponse:
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"unmarshaling steps failed: {e}") from e

        if not isinstance(payload, dict):
            raise DecodeError(f"unmarshaling steps failed: expected object, got {type(payload).__name__}")
        raw_rows = payload.get("activities-steps", [])
        if not isinstance(raw_rows, list):
            raise DecodeError("unmarshaling steps failed: 'activities-steps' is not a list")

        rows = []
        for raw in raw_rows:
            if not isinstance(raw, dict):
                raise DecodeError(f"unmarshaling steps failed: row is not an object: {raw!r}")
            activity_date = raw.get("dateTime", "")
            steps = raw.get("value", "")
            if not isinstance(activity_date, str) or not isinstance(steps, str):
                raise DecodeError(f"unmarshaling steps failed: expected string fields in {raw!r}")
            rows.append(StepsRow(activity_date=activity_date, steps=steps))
        return cls(steps=rows)


def parse_date(value: str) -> date:
    if not _DATE_RE.fullmatch(value):
        raise DateParseError(f"parsing activity date failed: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise DateParseError(f"parsing activity date failed: {value!r}") from e


def parse_value(value: str) -> float:
    # float() alone would also take surrounding whitespace and digit separators
    if not _NUMBER_RE.fullmatch(value):
        raise ValueParseError(f"converting steps to float failed: {value!r}")
    parsed = float(value)
    if not math.isfinite(parsed):
        raise ValueParseError(f"converting steps to float failed: {value!r} is not finite")
    return parsed


class FitbitCollector:
    """Collects metrics from the Fitbit Web API.

    Args:
        client_id: Fitbit application client ID.
        client_secret: Fitbit application client secret.
        cache_file: Where the OAuth token is cached between runs.
        client: Pre-built HTTP client; skips ``client_factory`` when given.
        client_factory: Builds the authenticated client from the credentials.
        base_uri: API root every endpoint is joined to.
        today: Clock used to anchor the collection window.

    Other keyword arguments (extra keys in the ``fitbit`` config section) are ignored.
    """

    name = "fitbit"

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        cache_file: str = "",
        *,
        client: HTTPClient | None = None,
        client_factory: Callable[..., HTTPClient] = create_fitbit_client,
        base_uri: str = FITBIT_URI,
        today: Callable[[], date] = date.today,
        **_extra: Any,
    ):
        if not client_id:
            raise MissingConfigError("fitbit.client_id")
        if not client_secret:
            raise MissingConfigError("fitbit.client_secret")
        if not cache_file:
            raise MissingConfigError("fitbit.cache_file")

        if client is None:
            try:
                client = client_factory(
                    client_id=client_id,
                    client_secret=client_secret,
                    cache_file=cache_file,
                    scopes=list(ACTIVITY_SCOPE),
                )
            except Exception as e:
                raise ClientCreationError(f"could not create fitbit client: {e}") from e

        self.base_uri = base_uri
        self.client = client
        self._today = today

    def collect(self, metric_name: str, days_back: int) -> list[Metric]:
        handler = self.handlers.get(metric_name)
        if handler is None:
            raise UnsupportedMetricError(metric_name)
        if days_back < 0:
            raise InvalidWindowError(f"days_back must be >= 0, got {days_back}")

        metrics = handler(self, days_back)
        logger.info(f"Collected {len(metrics)} {self.name}.{metric_name} metrics")
        return metrics

    def supported_metrics(self) -> list[str]:
        return sorted(self.handlers)

    def date_window(self, days_back: int) -> tuple[date, date]:
        """Return (start, end) inclusive, ending yesterday."""
        end = self._today() - timedelta(days=1)
        start = end - timedelta(days=days_back)
        return start, end

    # ── metric handlers ──────────────────────────────────────────────

    def _get_steps(self, days_back: int) -> list[Metric]:
        start, end = self.date_window(days_back)
        endpoint = f"activities/steps/date/{start.strftime(DATE_FORMAT)}/{end.strftime(DATE_FORMAT)}.json"
        body = do_request(self.client, self.base_uri, endpoint)

        response = StepsResponse.from_json(body)
        return [
            Metric(name=f"{self.name}.steps", date=parse_date(row.activity_date), value=parse_value(row.steps))
            for row in response.steps
        ]

    handlers: dict[str, Callable[[FitbitCollector, int], list[Metric]]] = {
        "steps": _get_steps,
    }
