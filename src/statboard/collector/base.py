"""
Collector protocol and the HTTP seam collectors talk through.

Any data source (Fitbit, Garmin, Oura, ...) implements ``Collector`` so the
dashboard can treat them uniformly.  Collectors that call web APIs receive an
``HTTPClient`` — in production an authenticated ``requests`` session, in tests
a fake — so the parsing logic never needs real network access.
"""

from typing import Any, Protocol, runtime_checkable

from ..models import Metric


@runtime_checkable
class Collector(Protocol):
    """Protocol that every metric collector must satisfy."""

    name: str

    def collect(self, metric_name: str, days_back: int) -> list[Metric]:
        """Collect ``metric_name`` for the window of ``days_back`` days ending yesterday."""
        ...


@runtime_checkable
class HTTPResponse(Protocol):
    """The subset of ``requests.Response`` collectors rely on."""

    status_code: int

    @property
    def content(self) -> bytes: ...

    def close(self) -> None: ...


@runtime_checkable
class HTTPClient(Protocol):
    """Anything that can perform an authenticated GET (e.g. ``OAuth2Session``)."""

    def get(self, url: str, **kwargs: Any) -> HTTPResponse: ...
