"""
Meeting summary pipeline.

Resolves a meeting, fetches its transcript, summarizes it and posts
the summary to Telex. One run handles one meeting.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .invite_link import looks_like_link, parse_invite_link
from .models import MeetingDetails, Transcript
from .telex_client import TelexNotifier
from .zoom_client import ZoomClient

logger = logging.getLogger(__name__)

Summarizer = Callable[[MeetingDetails, Transcript], str]

EXCERPT_LENGTH = 1500


def excerpt_summary(details: MeetingDetails, transcript: Transcript) -> str:
    """
    Placeholder summarizer.

    Returns the meeting header and the start of the transcript. Swap in
    an LLM-backed callable for real summaries.
    """
    text = transcript.text.strip()
    if len(text) > EXCERPT_LENGTH:
        text = text[:EXCERPT_LENGTH].rstrip() + "..."
    header = f"Meeting: {details.topic or details.meeting_id}"
    if details.start_time:
        header += f"\nStarted: {details.start_time}"
    return f"{header}\n\n{text or '(empty transcript)'}"


@dataclass
class PipelineResult:
    details: MeetingDetails
    transcript: Transcript
    summary: str
    forwarded: bool


class SummaryPipeline:
    """
    Linear Zoom -> summarizer -> Telex flow.

    Zoom failures (auth, lookup, transcript) propagate to the caller.
    Telex failures do not: they show up as forwarded=False.
    """

    def __init__(
        self,
        zoom_client: ZoomClient,
        notifier: Optional[TelexNotifier],
        summarize: Optional[Summarizer] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            zoom_client: Client used for meeting lookup and transcripts
            notifier: Telex notifier, or None to skip forwarding (dry run)
            summarize: Callable turning (details, transcript) into a summary.
                       Defaults to excerpt_summary.
        """
        self.zoom_client = zoom_client
        self.notifier = notifier
        self.summarize = summarize or excerpt_summary
        self._stats = {
            "runs": 0,
            "forwarded": 0,
            "errors": 0,
        }

    def run(self, meeting: str) -> PipelineResult:
        """
        Process one meeting.

        Args:
            meeting: Zoom invite link or bare meeting id

        Returns:
            PipelineResult with the summary and whether it was forwarded
        """
        self._stats["runs"] += 1
        try:
            meeting_id = self._meeting_id(meeting)
            details = self.zoom_client.get_meeting_details(meeting_id)
            transcript = self.zoom_client.get_transcript(meeting_id)
            summary = self.summarize(details, transcript)
        except Exception:
            self._stats["errors"] += 1
            raise

        forwarded = False
        if self.notifier is None:
            logger.info("Dry run, summary not forwarded")
        else:
            forwarded = self.notifier.send_summary(summary)
            if forwarded:
                self._stats["forwarded"] += 1
            else:
                self._stats["errors"] += 1

        logger.info(
            f"Pipeline finished for meeting {details.meeting_id}: "
            f"transcript_chars={len(transcript.text)}, forwarded={forwarded}"
        )
        return PipelineResult(
            details=details,
            transcript=transcript,
            summary=summary,
            forwarded=forwarded,
        )

    @staticmethod
    def _meeting_id(meeting: str) -> str:
        if looks_like_link(meeting):
            reference = parse_invite_link(meeting)
            if reference.passcode:
                logger.debug(f"Invite link carries a passcode for meeting {reference.meeting_id}")
            return reference.meeting_id
        return meeting

    @property
    def stats(self) -> dict:
        """Get current pipeline statistics."""
        return self._stats.copy()
