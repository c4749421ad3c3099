"""
Environment configuration for the meeting relay.

Settings are read once at startup and handed to each client's
constructor. Nothing else in the package reads os.environ.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .models import ZoomCredentials

logger = logging.getLogger(__name__)

DEFAULT_ZOOM_API_BASE = "https://api.zoom.us/v2"
DEFAULT_ZOOM_OAUTH_URL = "https://zoom.us/oauth/token"
DEFAULT_TELEX_CHANNEL = "meeting-transcripts"
DEFAULT_HTTP_TIMEOUT = 10.0

ZOOM_VARS = ("ZOOM_CLIENT_ID", "ZOOM_CLIENT_SECRET", "ZOOM_ACCOUNT_ID")
TELEX_VARS = ("TELEX_API_URL",)
REQUIRED_VARS = ZOOM_VARS + TELEX_VARS


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""

    def __init__(self, message: str, missing: Iterable[str] = ()):
        super().__init__(message)
        self.missing = tuple(missing)


@dataclass(frozen=True)
class Settings:
    """Validated process configuration."""
    zoom_client_id: Optional[str]
    zoom_client_secret: Optional[str]
    zoom_account_id: Optional[str]
    telex_api_url: Optional[str]
    telex_channel: str = DEFAULT_TELEX_CHANNEL
    zoom_api_base: str = DEFAULT_ZOOM_API_BASE
    zoom_oauth_url: str = DEFAULT_ZOOM_OAUTH_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @property
    def zoom_credentials(self) -> ZoomCredentials:
        """
        Zoom OAuth credentials.

        Raises:
            ConfigError: If any credential was not configured
        """
        missing = [
            name for name, value in zip(
                ZOOM_VARS,
                (self.zoom_client_id, self.zoom_client_secret, self.zoom_account_id),
            )
            if not value
        ]
        if missing:
            raise ConfigError(
                f"Missing Zoom credentials: {', '.join(missing)}", missing
            )
        return ZoomCredentials(
            client_id=self.zoom_client_id,
            client_secret=self.zoom_client_secret,
            account_id=self.zoom_account_id,
        )

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        required: Iterable[str] = REQUIRED_VARS,
    ) -> "Settings":
        """
        Load and validate settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)
            required: Variable names that must be present and non-empty

        Returns:
            Settings instance

        Raises:
            ConfigError: Listing every missing variable, or naming a
                         variable that could not be parsed
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(name)
            if value is None:
                return None
            value = value.strip()
            return value or None

        missing = [name for name in required if not get(name)]
        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)}",
                missing,
            )

        timeout_raw = get("HTTP_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_HTTP_TIMEOUT
        except ValueError as e:
            raise ConfigError(f"HTTP_TIMEOUT must be a number, got {timeout_raw!r}") from e
        if timeout <= 0:
            raise ConfigError(f"HTTP_TIMEOUT must be positive, got {timeout}")

        settings = cls(
            zoom_client_id=get("ZOOM_CLIENT_ID"),
            zoom_client_secret=get("ZOOM_CLIENT_SECRET"),
            zoom_account_id=get("ZOOM_ACCOUNT_ID"),
            telex_api_url=get("TELEX_API_URL"),
            telex_channel=get("TELEX_CHANNEL") or DEFAULT_TELEX_CHANNEL,
            zoom_api_base=(get("ZOOM_API_BASE") or DEFAULT_ZOOM_API_BASE).rstrip("/"),
            zoom_oauth_url=get("ZOOM_OAUTH_URL") or DEFAULT_ZOOM_OAUTH_URL,
            http_timeout=timeout,
        )
        logger.debug(
            f"Settings loaded: zoom_api_base={settings.zoom_api_base}, "
            f"telex_channel={settings.telex_channel}, timeout={settings.http_timeout}s"
        )
        return settings
