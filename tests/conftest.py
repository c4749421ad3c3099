"""Pytest configuration and fixtures."""

import json
from unittest.mock import Mock

import pytest
import requests

from meeting_relay.models import ZoomCredentials


def build_response(status_code=200, json_data=None, text=None, url="https://api.zoom.us/v2/test"):
    """Build a real requests.Response so raise_for_status behaves normally."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    if json_data is not None:
        response._content = json.dumps(json_data).encode("utf-8")
    else:
        response._content = (text or "").encode("utf-8")
    return response


@pytest.fixture
def make_response():
    """Provide the response factory."""
    return build_response


@pytest.fixture
def credentials():
    """Provide test Zoom credentials."""
    return ZoomCredentials(
        client_id="test_client",
        client_secret="test_secret",
        account_id="test_account",
    )


@pytest.fixture
def token_response():
    """Provide a successful OAuth token response."""
    return build_response(
        json_data={"access_token": "test_token", "token_type": "bearer", "expires_in": 3600},
        url="https://zoom.us/oauth/token",
    )


@pytest.fixture
def session(token_response):
    """Provide a mock requests session that hands out a token on POST."""
    mock_session = Mock()
    mock_session.headers = {}
    mock_session.post.return_value = token_response
    return mock_session


@pytest.fixture
def meeting_payload():
    """Provide a GET /meetings/{id} response body."""
    return {
        "id": 1234567890,
        "topic": "Weekly sync",
        "start_time": "2025-01-15T15:00:00Z",
        "join_url": "https://zoom.us/j/1234567890?pwd=abcXYZ",
    }
