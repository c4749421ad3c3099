"""
Telex notifier.

Posts meeting summaries to a Telex channel webhook. Failures here are
logged and absorbed so they never interrupt the summary pipeline.
"""

import logging
from typing import Optional

import requests

from .config import DEFAULT_HTTP_TIMEOUT, DEFAULT_TELEX_CHANNEL, ConfigError, Settings
from .models import SummaryNotification

logger = logging.getLogger(__name__)

SUMMARY_HEADER = "**AI-Generated Summary:**"


class TelexNotifier:
    """Fire-and-forget client for a Telex channel endpoint."""

    def __init__(
        self,
        api_url: str,
        channel: str = DEFAULT_TELEX_CHANNEL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.channel = channel
        self.timeout = timeout
        self._session = session or requests.Session()
        logger.info(f"TelexNotifier initialized, channel={channel}")

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "TelexNotifier":
        if not settings.telex_api_url:
            raise ConfigError("TELEX_API_URL is not configured", ("TELEX_API_URL",))
        return cls(
            settings.telex_api_url,
            channel=settings.telex_channel,
            timeout=settings.http_timeout,
            **kwargs,
        )

    def build_notification(self, summary_text: Optional[str]) -> SummaryNotification:
        return SummaryNotification(
            channel=self.channel,
            message=f"{SUMMARY_HEADER}\n{summary_text}",
        )

    def send_summary(self, summary_text: Optional[str]) -> bool:
        """
        Post a summary to the channel.

        Never raises. Returns True if Telex accepted the message.
        """
        notification = self.build_notification(summary_text)
        try:
            self._post(notification)
        except ForwardError as e:
            logger.error(f"Failed to send summary to Telex: {e}")
            return False
        except Exception as e:
            logger.exception(f"Unexpected error sending summary to Telex: {e}")
            return False

        logger.info(f"AI summary sent to Telex channel {notification.channel}")
        return True

    def _post(self, notification: SummaryNotification):
        try:
            response = self._session.post(
                self.api_url,
                json=notification.to_payload(),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ForwardError(str(e)) from e

    def close(self):
        self._session.close()


class ForwardError(Exception):
    """Raised internally when a notification cannot be delivered."""
    pass
