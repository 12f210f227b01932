"""Tests for collector.http — do_request."""

import pytest
import requests
from oauthlib.oauth2 import InvalidGrantError

from statboard.collector.http import build_uri, do_request
from statboard.core.exceptions import (
    APIError,
    AuthenticationError,
    BadStatusError,
    RequestBuildError,
    RequestError,
    ResponseReadError,
)

BASE = "https://api.fitbit.com/1/user/-"


def test_build_uri_single_slash():
    assert build_uri(BASE, "/activities/steps.json/") == f"{BASE}/activities/steps.json"
    assert build_uri(BASE + "/", "activities/steps.json") == f"{BASE}/activities/steps.json"


class TestDoRequest:
    def test_returns_body_and_closes(self, make_client, make_response):
        response = make_response(b'{"ok": true}')
        client = make_client(response)

        assert do_request(client, BASE, "profile.json") == b'{"ok": true}'
        assert response.closed
        url, kwargs = client.calls[0]
        assert url == f"{BASE}/profile.json"
        assert kwargs["headers"]["Accept"] == "application/json"

    @pytest.mark.parametrize("status", [201, 204, 301, 401, 404, 429, 500, 503])
    def test_any_non_200_is_bad_status(self, make_client, make_response, status):
        response = make_response(b"{}", status_code=status)
        with pytest.raises(BadStatusError) as exc_info:
            do_request(make_client(response), BASE, "profile.json")
        assert exc_info.value.status_code == status
        assert str(exc_info.value) == f"bad response code: {status}"
        assert response.closed

    def test_malformed_uri(self, make_client):
        client = make_client(error=requests.exceptions.MissingSchema("No scheme supplied"))
        with pytest.raises(RequestBuildError, match="creating request to not-a-url/profile.json failed"):
            do_request(client, "not-a-url", "profile.json")

    def test_network_failure(self, make_client):
        client = make_client(error=requests.exceptions.ConnectionError("connection refused"))
        with pytest.raises(RequestError, match="performing request to") as exc_info:
            do_request(client, BASE, "profile.json")
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    def test_body_read_failure_closes(self, make_client, make_response):
        response = make_response(read_error=requests.exceptions.ChunkedEncodingError("truncated"))
        with pytest.raises(ResponseReadError, match="reading the response body failed"):
            do_request(make_client(response), BASE, "profile.json")
        assert response.closed

    def test_errors_share_api_error_base(self, make_client):
        client = make_client(error=requests.exceptions.Timeout("slow"))
        with pytest.raises(APIError):
            do_request(client, BASE, "profile.json")

    def test_token_refresh_failure(self, make_client):
        client = make_client(error=InvalidGrantError(description="Refresh token invalid"))
        with pytest.raises(AuthenticationError, match="authorizing request to") as exc_info:
            do_request(client, BASE, "profile.json")
        assert isinstance(exc_info.value.__cause__, InvalidGrantError)
