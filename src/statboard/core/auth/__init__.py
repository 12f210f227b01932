"""OAuth providers for the APIs statboard collects from."""

from .fitbit_oauth import ACTIVITY_SCOPE, FitbitOAuth, FitbitSession, create_fitbit_client

__all__ = [
    "ACTIVITY_SCOPE",
    "FitbitOAuth",
    "FitbitSession",
    "create_fitbit_client",
]
