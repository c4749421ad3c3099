"""
Transcript sources for Zoom meetings.

ZoomClient.get_transcript delegates the actual retrieval to one of
these. A source only needs fetch_transcript(meeting_id, access_token).
"""

import logging
import re
from typing import Optional

import requests

from .config import DEFAULT_HTTP_TIMEOUT, DEFAULT_ZOOM_API_BASE
from .invite_link import quote_meeting_id

logger = logging.getLogger(__name__)

TRANSCRIPT_FILE_TYPE = "TRANSCRIPT"

_TIMING_LINE = re.compile(r"^\d{2}:\d{2}(:\d{2})?\.\d{3}\s+-->\s+")


class ZoomRecordingTranscriptSource:
    """
    Reads the audio transcript Zoom attaches to a cloud recording.

    The meeting must have been recorded to the cloud with audio
    transcription enabled.
    """

    def __init__(
        self,
        api_base: str = DEFAULT_ZOOM_API_BASE,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch_transcript(self, meeting_id: str, access_token: str) -> str:
        """
        Download and flatten the transcript of a recorded meeting.

        Args:
            meeting_id: Zoom meeting id or UUID
            access_token: Bearer token from ZoomTokenProvider

        Returns:
            Transcript as plain text, one cue per line

        Raises:
            TranscriptError: If there is no recording or no transcript
                             file, or a request fails
        """
        headers = {"Authorization": f"Bearer {access_token}"}
        endpoint = f"{self.api_base}/meetings/{quote_meeting_id(meeting_id)}/recordings"

        try:
            response = self._session.get(endpoint, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            recording = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to list recordings for meeting {meeting_id}: {e}")
            raise TranscriptError(f"Failed to list recordings: {e}") from e
        except ValueError as e:
            raise TranscriptError("Recording listing was not valid JSON") from e

        if not isinstance(recording, dict):
            raise TranscriptError(f"Recording listing for meeting {meeting_id} returned an unexpected body")

        download_url = self._find_transcript_url(recording)
        if not download_url:
            raise TranscriptError(f"No transcript file for meeting {meeting_id}")

        try:
            response = self._session.get(download_url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to download transcript for meeting {meeting_id}: {e}")
            raise TranscriptError(f"Failed to download transcript: {e}") from e

        text = vtt_to_text(response.text)
        logger.debug(f"Downloaded transcript for meeting {meeting_id} ({len(text)} chars)")
        return text

    @staticmethod
    def _find_transcript_url(recording: dict) -> Optional[str]:
        for item in recording.get("recording_files") or []:
            if item.get("file_type") == TRANSCRIPT_FILE_TYPE and item.get("download_url"):
                return item["download_url"]
        return None

    def close(self):
        self._session.close()


def vtt_to_text(vtt: str) -> str:
    """
    Strip WebVTT framing and keep the spoken lines.

    Drops the WEBVTT header, cue numbers, timing lines and blank lines.
    """
    lines = []
    for raw in vtt.splitlines():
        line = raw.strip()
        if not line or line.startswith("WEBVTT") or line.isdigit():
            continue
        if _TIMING_LINE.match(line):
            continue
        lines.append(line)
    return "\n".join(lines)


class TranscriptError(Exception):
    """Raised when a meeting transcript cannot be retrieved."""
    pass


# --- Mock source for local runs without Zoom ---

class MockTranscriptSource:
    """Returns a canned transcript regardless of meeting id."""

    SAMPLE = (
        "Alice: Let's review the quarterly results.\n"
        "Bob: Revenue is up, but support costs grew faster than planned.\n"
        "Alice: Can we schedule a follow-up with finance next week?\n"
        "Bob: I'll send the report after this meeting."
    )

    def __init__(self, text: Optional[str] = None):
        self.text = self.SAMPLE if text is None else text
        self.calls = []

    def fetch_transcript(self, meeting_id: str, access_token: str) -> str:
        self.calls.append((meeting_id, access_token))
        logger.info(f"MockTranscriptSource returning sample transcript for {meeting_id}")
        return self.text

    def close(self):
        pass
