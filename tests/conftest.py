"""Shared test fixtures for statboard."""

import json
import os
import tempfile

import pytest


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file with Fitbit credentials."""
    import yaml

    config_data = {
        "fitbit": {
            "client_id": "ABC123",
            "client_secret": "s3cret",
            "cache_file": os.path.join(tmp_dir, "fitbit_token.json"),
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


class FakeResponse:
    """Stand-in for ``requests.Response`` that records whether it was closed."""

    def __init__(self, body: bytes | str | object = b"", status_code: int = 200, read_error: Exception | None = None):
        if isinstance(body, str):
            body = body.encode("utf-8")
        elif not isinstance(body, bytes):
            body = json.dumps(body).encode("utf-8")
        self._body = body
        self.status_code = status_code
        self.read_error = read_error
        self.closed = False

    @property
    def content(self) -> bytes:
        if self.read_error is not None:
            raise self.read_error
        return self._body

    def close(self) -> None:
        self.closed = True


class FakeClient:
    """Stand-in for an authenticated session; records every GET."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response or FakeResponse({"activities-steps": []})
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def get(self, url: str, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def make_client():
    return FakeClient
