"""
Data models for the meeting relay.

Every value here is transient: built from a Zoom or Telex exchange,
used once within a single request flow, and discarded.
"""

from dataclasses import dataclass
from typing import Optional
import time


# Zoom tokens live for an hour; refresh a little early.
DEFAULT_TOKEN_LIFETIME = 3600
TOKEN_EXPIRY_MARGIN = 300


@dataclass(frozen=True)
class ZoomCredentials:
    """Server-to-Server OAuth app credentials."""
    client_id: str
    client_secret: str
    account_id: str

    def __repr__(self) -> str:
        return (
            f"ZoomCredentials(client_id={self.client_id!r}, "
            f"account_id={self.account_id!r}, client_secret='***')"
        )


@dataclass
class AccessToken:
    """
    Bearer token held in memory by a token provider.

    expires_at is already shortened by TOKEN_EXPIRY_MARGIN so callers
    can compare against the current time directly.
    """
    token: str
    acquired_at: float
    expires_at: float

    def is_expired(self, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        return now >= self.expires_at

    @classmethod
    def from_response(cls, data: dict, now: Optional[float] = None) -> "AccessToken":
        """Build from the JSON body of the OAuth token endpoint."""
        now = time.time() if now is None else now
        lifetime = data.get("expires_in") or DEFAULT_TOKEN_LIFETIME
        return cls(
            token=data["access_token"],
            acquired_at=now,
            expires_at=now + max(float(lifetime) - TOKEN_EXPIRY_MARGIN, 0.0),
        )


@dataclass(frozen=True)
class MeetingReference:
    """Meeting identifier and optional passcode taken from an invite link."""
    meeting_id: str
    passcode: Optional[str] = None


@dataclass
class MeetingDetails:
    """Read-only projection of the Zoom meeting resource."""
    meeting_id: str
    topic: Optional[str]
    start_time: Optional[str]  # ISO 8601, as returned by Zoom
    join_url: Optional[str]

    @classmethod
    def from_api(cls, data: dict, meeting_id: Optional[str] = None) -> "MeetingDetails":
        """Project a GET /meetings/{id} response body."""
        return cls(
            meeting_id=str(data.get("id") or meeting_id or ""),
            topic=data.get("topic"),
            start_time=data.get("start_time"),
            join_url=data.get("join_url"),
        )


@dataclass
class Transcript:
    meeting_id: str
    text: str

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass
class SummaryNotification:
    """Message posted to a Telex channel."""
    channel: str
    message: str

    def to_payload(self) -> dict:
        return {"channel": self.channel, "message": self.message}
