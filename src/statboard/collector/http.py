"""Single-shot GET helper shared by API collectors."""

from __future__ import annotations

from contextlib import closing

import requests
from loguru import logger
from oauthlib.oauth2 import OAuth2Error

from statboard.core.exceptions import (
    AuthenticationError,
    BadStatusError,
    RequestBuildError,
    RequestError,
    ResponseReadError,
)

from .base import HTTPClient

_INVALID_REQUEST = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
)


def build_uri(base_uri: str, endpoint: str) -> str:
    return f"{base_uri.rstrip('/')}/{endpoint.strip('/')}"


def do_request(client: HTTPClient, base_uri: str, endpoint: str) -> bytes:
    """GET ``endpoint`` relative to ``base_uri`` and return the raw body.

    No retries.  The response is closed on every path.

    Raises:
        RequestBuildError: The URI is malformed.
        RequestError: Sending the request failed.
        AuthenticationError: The client could not refresh its OAuth token.
        BadStatusError: Status code is anything but 200.
        ResponseReadError: The body could not be read.
    """
    uri = build_uri(base_uri, endpoint)
    logger.debug(f"GET {uri}")

    try:
        resp = client.get(uri, headers={"Accept": "application/json"}, stream=True)
    except _INVALID_REQUEST as e:
        raise RequestBuildError(f"creating request to {uri} failed: {e}") from e
    except requests.exceptions.RequestException as e:
        raise RequestError(f"performing request to {uri} failed: {e}") from e
    except OAuth2Error as e:
        raise AuthenticationError(f"authorizing request to {uri} failed: {e}") from e

    with closing(resp):
        if resp.status_code != 200:
            raise BadStatusError(resp.status_code)

        try:
            return resp.content
        except requests.exceptions.RequestException as e:
            raise ResponseReadError(f"reading the response body failed: {e}") from e
