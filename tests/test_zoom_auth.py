"""Unit tests for Zoom token acquisition."""

import pytest
import requests

from meeting_relay.models import AccessToken
from meeting_relay.zoom_auth import AuthError, ZoomTokenProvider
from meeting_relay.zoom_client import ZoomClient


class TestZoomTokenProvider:
    """Test the OAuth client-credentials exchange."""

    def test_acquire_token_request(self, credentials, session):
        """Test the token request carries grant type, account id and basic auth."""
        provider = ZoomTokenProvider(credentials, session=session)
        token = provider.acquire_token()

        assert token.token == "test_token"
        session.post.assert_called_once_with(
            "https://zoom.us/oauth/token",
            params={"grant_type": "account_credentials", "account_id": "test_account"},
            auth=("test_client", "test_secret"),
            timeout=10.0,
        )

    def test_get_token_is_lazy(self, credentials, session):
        """Test no request is made until a token is needed."""
        provider = ZoomTokenProvider(credentials, session=session)
        assert not provider.has_token
        session.post.assert_not_called()

        assert provider.get_token() == "test_token"
        assert provider.has_token

    def test_get_token_reuses_cached_token(self, credentials, session):
        """Test a held token is reused."""
        provider = ZoomTokenProvider(credentials, session=session)
        provider.get_token()
        provider.get_token()
        provider.get_token()

        assert session.post.call_count == 1

    def test_get_token_refreshes_expired_token(self, credentials, session):
        """Test an expired token triggers a new exchange."""
        provider = ZoomTokenProvider(credentials, session=session)
        provider.get_token()
        provider._token.expires_at = 0

        provider.get_token()
        assert session.post.call_count == 2

    def test_invalidate(self, credentials, session):
        """Test invalidate forces re-authentication."""
        provider = ZoomTokenProvider(credentials, session=session)
        provider.get_token()
        provider.invalidate()
        provider.get_token()

        assert session.post.call_count == 2

    def test_rejected_credentials(self, credentials, session, make_response):
        """Test a non-2xx response raises AuthError."""
        session.post.return_value = make_response(
            401, json_data={"reason": "Invalid client_id or client_secret"}
        )
        provider = ZoomTokenProvider(credentials, session=session)

        with pytest.raises(AuthError) as exc_info:
            provider.get_token()
        assert "401" in str(exc_info.value)
        assert not provider.has_token

    def test_network_failure(self, credentials, session):
        """Test a connection error raises AuthError."""
        session.post.side_effect = requests.exceptions.ConnectionError("unreachable")
        provider = ZoomTokenProvider(credentials, session=session)

        with pytest.raises(AuthError):
            provider.acquire_token()

    def test_missing_access_token(self, credentials, session, make_response):
        """Test a 200 without access_token raises AuthError."""
        session.post.return_value = make_response(200, json_data={"token_type": "bearer"})
        provider = ZoomTokenProvider(credentials, session=session)

        with pytest.raises(AuthError):
            provider.acquire_token()

    def test_invalid_expires_in(self, credentials, session, make_response):
        """Test a non-numeric expires_in raises AuthError."""
        session.post.return_value = make_response(
            200, json_data={"access_token": "t", "expires_in": "soon"}
        )
        provider = ZoomTokenProvider(credentials, session=session)

        with pytest.raises(AuthError):
            provider.get_token()
        assert not provider.has_token

    def test_token_acquired_once_across_lookups(self, credentials, session, make_response, meeting_payload):
        """Test two sequential meeting lookups share one token exchange."""
        session.get.return_value = make_response(200, json_data=meeting_payload)
        client = ZoomClient(credentials, session=session)

        client.get_join_url("1234567890")
        client.get_meeting_details("1234567890")

        assert session.post.call_count == 1
        assert session.get.call_count == 2


class TestAccessToken:
    """Test token expiry bookkeeping."""

    def test_expiry_margin(self):
        """Test expires_at is shortened by the safety margin."""
        token = AccessToken.from_response({"access_token": "t", "expires_in": 3600}, now=1000.0)
        assert token.acquired_at == 1000.0
        assert token.expires_at == 1000.0 + 3300
        assert not token.is_expired(now=4299.0)
        assert token.is_expired(now=4300.0)

    def test_default_lifetime(self):
        """Test a missing expires_in falls back to one hour."""
        token = AccessToken.from_response({"access_token": "t"}, now=0.0)
        assert token.expires_at == 3300.0
