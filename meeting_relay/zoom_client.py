"""
Zoom REST API client.

Resolves meetings and fetches their transcripts, authenticating with
a lazily acquired Server-to-Server OAuth token.
"""

import logging
from typing import Optional

import requests

from .config import DEFAULT_HTTP_TIMEOUT, DEFAULT_ZOOM_API_BASE, DEFAULT_ZOOM_OAUTH_URL, Settings
from .invite_link import parse_invite_link, quote_meeting_id
from .models import MeetingDetails, MeetingReference, Transcript, ZoomCredentials
from .transcript import MockTranscriptSource, TranscriptError, ZoomRecordingTranscriptSource
from .zoom_auth import AuthError, ZoomAPIError, ZoomTokenProvider

logger = logging.getLogger(__name__)


class ZoomClient:
    """
    Client for the Zoom meetings API.

    One instance holds one access token, acquired on the first call
    that needs it and reused until it expires.
    """

    def __init__(
        self,
        credentials: ZoomCredentials,
        api_base: str = DEFAULT_ZOOM_API_BASE,
        oauth_url: str = DEFAULT_ZOOM_OAUTH_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transcript_source=None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize Zoom client.

        Args:
            credentials: Zoom app credentials
            api_base: REST API base URL
            oauth_url: OAuth token endpoint
            timeout: Request timeout in seconds
            transcript_source: Object with fetch_transcript(meeting_id, token).
                               Defaults to ZoomRecordingTranscriptSource.
            session: Optional requests session, shared by all calls
        """
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self.tokens = ZoomTokenProvider(
            credentials,
            oauth_url=oauth_url,
            timeout=timeout,
            session=self._session,
        )
        self.transcript_source = transcript_source or ZoomRecordingTranscriptSource(
            api_base=self.api_base,
            timeout=timeout,
            session=self._session,
        )
        logger.info(f"ZoomClient initialized, api_base={self.api_base}")

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "ZoomClient":
        return cls(
            settings.zoom_credentials,
            api_base=settings.zoom_api_base,
            oauth_url=settings.zoom_oauth_url,
            timeout=settings.http_timeout,
            **kwargs,
        )

    def _get_meeting(self, meeting_id: str) -> dict:
        """
        GET /meetings/{meeting_id}.

        Raises:
            AuthError: If no token could be acquired
            MeetingNotFoundError: On HTTP 404
            FetchError: On any other failure
        """
        token = self.tokens.get_token()
        meeting_id = normalize_meeting_id(meeting_id)
        endpoint = f"{self.api_base}/meetings/{quote_meeting_id(meeting_id)}"

        try:
            response = self._session.get(
                endpoint,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Meeting lookup failed for {meeting_id}: {e}") from e

        if response.status_code == 404:
            raise MeetingNotFoundError(f"Meeting {meeting_id} not found", status_code=404)
        if response.status_code == 401:
            # Revoked or expired early; make the next call re-authenticate.
            self.tokens.invalidate()

        try:
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            raise FetchError(
                f"Meeting lookup failed for {meeting_id}: {e}",
                status_code=response.status_code,
            ) from e
        except ValueError as e:
            raise FetchError(f"Meeting lookup for {meeting_id} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise FetchError(f"Meeting lookup for {meeting_id} returned an unexpected body")
        return data

    def get_join_url(self, meeting_id: str) -> Optional[MeetingDetails]:
        """
        Look up a meeting, returning None if it cannot be fetched.

        A missing meeting and a failed request both yield None. Use
        get_meeting_details when the difference matters.

        Raises:
            AuthError: If no token could be acquired
        """
        try:
            data = self._get_meeting(meeting_id)
        except FetchError as e:
            logger.error(f"Failed to fetch join URL: {e}")
            return None

        details = MeetingDetails.from_api(data, meeting_id=meeting_id)
        logger.info(f"Join URL retrieved for meeting {details.meeting_id}: {details.join_url}")
        return details

    def get_meeting_details(self, meeting_id: str) -> MeetingDetails:
        """
        Look up a meeting's topic, start time and join URL.

        Raises:
            AuthError: If no token could be acquired
            MeetingNotFoundError: If Zoom has no such meeting
            FetchError: On transport errors or other non-2xx responses
        """
        try:
            data = self._get_meeting(meeting_id)
        except FetchError as e:
            logger.error(f"Failed to fetch meeting details: {e}")
            raise
        return MeetingDetails.from_api(data, meeting_id=meeting_id)

    def parse_invite_link(self, invite_link: str) -> MeetingReference:
        return parse_invite_link(invite_link)

    def resolve_invite_link(self, invite_link: str) -> MeetingDetails:
        """Parse an invite link and fetch the meeting it points to."""
        reference = parse_invite_link(invite_link)
        return self.get_meeting_details(reference.meeting_id)

    def get_transcript(self, meeting_id: str) -> Transcript:
        """
        Fetch a meeting's transcript through the transcript source.

        Raises:
            AuthError: If no token could be acquired
            TranscriptError: If the source fails
        """
        token = self.tokens.get_token()
        meeting_id = normalize_meeting_id(meeting_id)
        logger.info(f"Fetching transcript for meeting {meeting_id}")

        try:
            text = self.transcript_source.fetch_transcript(meeting_id, token)
        except TranscriptError as e:
            logger.error(f"Failed to retrieve transcript: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to retrieve transcript: {e}")
            raise TranscriptError(f"Transcript retrieval failed for {meeting_id}: {e}") from e

        logger.info(f"Transcript retrieved for meeting {meeting_id}")
        return Transcript(meeting_id=meeting_id, text=text)

    def close(self):
        """Close the HTTP session."""
        self._session.close()
        logger.info("ZoomClient session closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def normalize_meeting_id(meeting_id: str) -> str:
    """Drop the spaces people paste from formatted ids like '123 456 7890'."""
    return str(meeting_id).replace(" ", "").strip()


class FetchError(ZoomAPIError):
    """Raised when a meeting lookup fails."""
    pass


class MeetingNotFoundError(FetchError):
    """Raised when Zoom answers 404 for a meeting id."""
    pass


# --- Mock client for testing without real API ---

class MockZoomClient(ZoomClient):
    """
    Mock Zoom client for local runs.

    Answers every lookup with a fixed meeting and uses
    MockTranscriptSource for transcripts. No credentials needed.
    """

    def __init__(self, transcript_source=None):
        # Don't call super().__init__ since we don't need real API setup
        self.api_base = DEFAULT_ZOOM_API_BASE
        self.transcript_source = transcript_source or MockTranscriptSource()
        logger.info("MockZoomClient initialized for testing")

    def _get_meeting(self, meeting_id: str) -> dict:
        meeting_id = normalize_meeting_id(meeting_id)
        return {
            "id": meeting_id,
            "topic": "Quarterly review (mock)",
            "start_time": "2025-01-15T15:00:00Z",
            "join_url": f"https://zoom.us/j/{meeting_id}",
        }

    def get_transcript(self, meeting_id: str) -> Transcript:
        meeting_id = normalize_meeting_id(meeting_id)
        text = self.transcript_source.fetch_transcript(meeting_id, "mock-token")
        return Transcript(meeting_id=meeting_id, text=text)

    def close(self):
        logger.info("MockZoomClient closed")


__all__ = [
    "AuthError",
    "FetchError",
    "MeetingNotFoundError",
    "MockZoomClient",
    "ZoomAPIError",
    "ZoomClient",
    "normalize_meeting_id",
]
