"""
Zoom Server-to-Server OAuth token handling.

Exchanges account credentials for a bearer token and keeps it in
memory until it expires.
"""

import logging
import time
from typing import Optional

import requests

from .config import DEFAULT_HTTP_TIMEOUT, DEFAULT_ZOOM_OAUTH_URL
from .models import AccessToken, ZoomCredentials

logger = logging.getLogger(__name__)


class ZoomTokenProvider:
    """
    Lazily acquires and caches a Zoom access token.

    The token is fetched on first use and reused for every later call
    on the same instance until it expires. There is no lock: two
    threads racing on an empty cache both fetch a token, and the last
    one written wins.
    """

    def __init__(
        self,
        credentials: ZoomCredentials,
        oauth_url: str = DEFAULT_ZOOM_OAUTH_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the token provider.

        Args:
            credentials: Zoom app client id, secret and account id
            oauth_url: Token endpoint
            timeout: Request timeout in seconds
            session: Optional requests session (shared with the API client)
        """
        self.credentials = credentials
        self.oauth_url = oauth_url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._token: Optional[AccessToken] = None

    @property
    def has_token(self) -> bool:
        return self._token is not None and not self._token.is_expired()

    def acquire_token(self) -> AccessToken:
        """
        Exchange the client credentials for a new access token.

        Returns:
            The freshly acquired AccessToken (also cached on the instance)

        Raises:
            AuthError: If the request fails, Zoom rejects the credentials,
                       or the response carries no usable access_token
        """
        try:
            response = self._session.post(
                self.oauth_url,
                params={
                    "grant_type": "account_credentials",
                    "account_id": self.credentials.account_id,
                },
                auth=(self.credentials.client_id, self.credentials.client_secret),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            detail = _error_detail(e)
            logger.error(f"Failed to get Zoom API token: {detail}")
            raise AuthError(f"Failed to get Zoom API token: {detail}") from e
        except ValueError as e:
            logger.error(f"Zoom token endpoint returned invalid JSON: {e}")
            raise AuthError("Zoom token endpoint returned invalid JSON") from e

        if not isinstance(data, dict) or not data.get("access_token"):
            logger.error("Zoom token response did not include an access_token")
            raise AuthError("No access_token in Zoom OAuth response")

        try:
            self._token = AccessToken.from_response(data, now=time.time())
        except (TypeError, ValueError) as e:
            logger.error(f"Zoom token response had an invalid expires_in: {e}")
            raise AuthError("Invalid expires_in in Zoom OAuth response") from e
        logger.info("Zoom API access token acquired")
        return self._token

    def get_token(self) -> str:
        """
        Return a valid bearer token, acquiring one only when none is held
        or the held one has expired.
        """
        if self._token is None:
            self.acquire_token()
        elif self._token.is_expired():
            logger.info("Zoom access token expired, refreshing")
            self.acquire_token()
        return self._token.token

    def invalidate(self):
        """Forget the cached token so the next call re-authenticates."""
        self._token = None


class ZoomAPIError(Exception):
    """Base exception for Zoom API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthError(ZoomAPIError):
    """Raised when the credential exchange fails."""
    pass


def _error_detail(error: requests.exceptions.RequestException) -> str:
    """Prefer the response body over the exception text when Zoom sent one."""
    response = getattr(error, "response", None)
    if response is not None:
        try:
            return f"{response.status_code} {response.json()}"
        except ValueError:
            return f"{response.status_code} {response.text[:200]}"
    return str(error)
