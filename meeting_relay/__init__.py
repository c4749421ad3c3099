# Meeting Relay
# Zoom meeting transcripts summarized and forwarded to Telex

from .config import ConfigError, Settings
from .invite_link import ParseError, format_invite_link, parse_invite_link
from .models import MeetingDetails, MeetingReference, SummaryNotification, Transcript
from .pipeline import SummaryPipeline
from .telex_client import TelexNotifier
from .transcript import TranscriptError
from .zoom_auth import AuthError, ZoomTokenProvider
from .zoom_client import FetchError, MeetingNotFoundError, ZoomClient

__all__ = [
    "AuthError",
    "ConfigError",
    "FetchError",
    "MeetingDetails",
    "MeetingNotFoundError",
    "MeetingReference",
    "ParseError",
    "Settings",
    "SummaryNotification",
    "SummaryPipeline",
    "TelexNotifier",
    "Transcript",
    "TranscriptError",
    "ZoomClient",
    "ZoomTokenProvider",
    "format_invite_link",
    "parse_invite_link",
]
