"""
Statboard exception hierarchy.

All statboard exceptions inherit from StatboardError, making it easy for callers
to catch library-level errors while still branching on the specific failure mode
(missing config, bad HTTP status, malformed row, ...).
"""


class StatboardError(Exception):
    """Base exception class for all statboard errors."""


class ConfigurationError(StatboardError):
    """Raised for configuration errors (missing keys, invalid values)."""


class MissingConfigError(ConfigurationError):
    """Raised when a required config key is empty or absent."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"'{field}' must be present in config")


class ClientCreationError(StatboardError):
    """Raised when the authenticated HTTP client cannot be built."""


class AuthenticationError(StatboardError):
    """Raised for authentication errors."""


class CollectionError(StatboardError):
    """Raised for invalid collection requests."""


class UnsupportedMetricError(CollectionError):
    """Raised when a collector is asked for a metric it does not provide."""

    def __init__(self, metric_name: str):
        self.metric_name = metric_name
        super().__init__(f"unsupported metric: {metric_name}")


class InvalidWindowError(CollectionError):
    """Raised when the requested day window is negative."""


class APIError(StatboardError):
    """Raised for API communication errors."""


class RequestBuildError(APIError):
    """Raised when a request cannot be constructed (malformed URI)."""


class RequestError(APIError):
    """Raised when performing the request fails (network, TLS, ...)."""


class BadStatusError(APIError):
    """Raised when the API answers with anything other than 200."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"bad response code: {status_code}")


class ResponseReadError(APIError):
    """Raised when the response body cannot be read."""


class DataProcessingError(StatboardError):
    """Raised for data processing errors."""


class DecodeError(DataProcessingError):
    """Raised when a response body is not the expected JSON shape."""


class DateParseError(DataProcessingError):
    """Raised when a row carries a malformed date."""


class ValueParseError(DataProcessingError):
    """Raised when a row carries a malformed or non-finite number."""
