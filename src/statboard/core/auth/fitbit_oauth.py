"""Fitbit OAuth 2.0 authentication.

Handles the authorization-code flow for the Fitbit Web API and hands back a
``FitbitSession`` (an ``OAuth2Session``).  Tokens are cached as JSON in a local
file; refresh is done by the session itself and every refreshed token is
written back to the cache.

The first run is interactive: the user opens the authorization URL, approves
access, and pastes the URL the browser was redirected to.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from loguru import logger
from requests.auth import HTTPBasicAuth
from requests_oauthlib import OAuth2Session

from statboard.core.exceptions import AuthenticationError

AUTHORIZE_URL = "https://www.fitbit.com/oauth2/authorize"
TOKEN_URL = "https://api.fitbit.com/oauth2/token"
DEFAULT_REDIRECT_URI = "https://127.0.0.1:8080/"

ACTIVITY_SCOPE = ["activity"]


def _console_prompt(authorization_url: str) -> str:
    click.echo("Open this URL in a browser and approve access:\n")
    click.echo(f"  {authorization_url}\n")
    return click.prompt("Paste the full URL you were redirected to")


class FitbitSession(OAuth2Session):
    """``OAuth2Session`` that refreshes the way Fitbit's token endpoint expects.

    Fitbit authenticates refresh requests with the client credentials in an
    HTTP Basic header.  ``OAuth2Session.request`` also hands its own keyword
    arguments (``stream``, ``allow_redirects``) to ``refresh_token``, which
    would put them in the form body, so those are dropped here.
    """

    def __init__(self, client_id: str, client_secret: str, **kwargs: Any):
        super().__init__(client_id, **kwargs)
        self.client_secret = client_secret

    def refresh_token(
        self,
        token_url,
        refresh_token=None,
        body="",
        auth=None,
        timeout=None,
        headers=None,
        verify=None,
        proxies=None,
        **kwargs,
    ):
        logger.info("Fitbit access token expired, refreshing")
        return super().refresh_token(
            token_url,
            refresh_token=refresh_token,
            body=body,
            auth=auth or HTTPBasicAuth(self.client_id, self.client_secret),
            timeout=timeout,
            headers=headers,
            verify=verify,
            proxies=proxies,
        )


class FitbitOAuth:
    """Authorization-code flow with a JSON token cache.

    Args:
        client_id: Fitbit application client ID.
        client_secret: Fitbit application client secret.
        cache_file: Path to store/load the cached token.
        scopes: OAuth scopes.  Defaults to ``activity``.
        redirect_uri: Redirect URI registered with the Fitbit application.
        prompt: Called with the authorization URL, returns the redirect URL.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        cache_file: str | Path,
        scopes: list[str] | None = None,
        redirect_uri: str = DEFAULT_REDIRECT_URI,
        prompt: Callable[[str], str] | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.cache_file = Path(cache_file).expanduser()
        self.scopes = scopes or list(ACTIVITY_SCOPE)
        self.redirect_uri = redirect_uri
        self.prompt = prompt or _console_prompt

    def load_token(self) -> dict[str, Any] | None:
        """Return the cached token, or None if there is no usable cache."""
        if not self.cache_file.exists():
            return None
        try:
            with open(self.cache_file) as f:
                token = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load Fitbit token from {self.cache_file}: {e}")
            return None
        if not isinstance(token, dict) or "access_token" not in token:
            logger.warning(f"Ignoring malformed Fitbit token cache: {self.cache_file}")
            return None
        logger.debug(f"Loaded Fitbit token from {self.cache_file}")
        return token

    def save_token(self, token: dict[str, Any]) -> None:
        """Persist ``token``; also used as the session's refresh callback."""
        self.cache_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.cache_file, "w") as f:
            json.dump(token, f)
        self.cache_file.chmod(0o600)
        logger.debug(f"Fitbit token saved to {self.cache_file}")

    def authorize(self) -> dict[str, Any]:
        """Run the interactive flow and cache the resulting token."""
        oauth = OAuth2Session(self.client_id, scope=self.scopes, redirect_uri=self.redirect_uri)
        authorization_url, _state = oauth.authorization_url(AUTHORIZE_URL)
        logger.info("Starting Fitbit OAuth flow -- complete authentication in browser")

        response_url = self.prompt(authorization_url)
        try:
            token = oauth.fetch_token(
                TOKEN_URL,
                authorization_response=response_url,
                client_secret=self.client_secret,
            )
        except Exception as e:
            raise AuthenticationError(f"Fitbit token exchange failed: {e}") from e

        token = dict(token)
        self.save_token(token)
        return token

    def session(self) -> FitbitSession:
        """Return an authenticated session that refreshes its own token."""
        token = self.load_token() or self.authorize()
        return FitbitSession(
            self.client_id,
            self.client_secret,
            token=token,
            scope=self.scopes,
            auto_refresh_url=TOKEN_URL,
            token_updater=self.save_token,
        )


def create_fitbit_client(
    client_id: str,
    client_secret: str,
    cache_file: str | Path,
    scopes: list[str] | None = None,
) -> FitbitSession:
    """Default client factory for ``FitbitCollector``."""
    return FitbitOAuth(client_id, client_secret, cache_file, scopes=scopes).session()
