"""
Zoom invite link parsing.

Pure string handling, no network access.
"""

from typing import Optional
from urllib.parse import parse_qs, quote, urlencode, urlparse

from .models import MeetingReference

# "/j/1234567890".split("/") -> ["", "j", "1234567890"]
MEETING_ID_SEGMENT = 2
PASSCODE_PARAM = "pwd"


class ParseError(ValueError):
    """Raised when an invite link cannot be parsed."""
    pass


def parse_invite_link(url: str) -> MeetingReference:
    """
    Extract the meeting id and passcode from a Zoom invite link.

    Args:
        url: Invite link, e.g. "https://zoom.us/j/1234567890?pwd=abcXYZ"

    Returns:
        MeetingReference with passcode None when the link has no pwd

    Raises:
        ParseError: If the link is not a URL or has no meeting id segment
    """
    if not isinstance(url, str) or not url.strip():
        raise ParseError(f"Invite link must be a non-empty string, got {url!r}")

    try:
        parsed = urlparse(url.strip())
    except ValueError as e:
        raise ParseError(f"Malformed invite link: {url!r}") from e

    if not parsed.scheme or not parsed.netloc:
        raise ParseError(f"Invite link is not an absolute URL: {url!r}")

    segments = parsed.path.split("/")
    if len(segments) <= MEETING_ID_SEGMENT or not segments[MEETING_ID_SEGMENT]:
        raise ParseError(f"Invite link has no meeting id: {url!r}")

    passcodes = parse_qs(parsed.query).get(PASSCODE_PARAM)
    passcode = passcodes[0] if passcodes else None

    return MeetingReference(
        meeting_id=segments[MEETING_ID_SEGMENT],
        passcode=passcode,
    )


def format_invite_link(
    meeting_id: str,
    passcode: Optional[str] = None,
    host: str = "zoom.us",
) -> str:
    """Build a join link that parse_invite_link reads back unchanged."""
    url = f"https://{host}/j/{meeting_id}"
    if passcode:
        url += "?" + urlencode({PASSCODE_PARAM: passcode})
    return url


def looks_like_link(value: str) -> bool:
    """True when value has a URL scheme rather than being a bare meeting id."""
    return "://" in value


def quote_meeting_id(meeting_id: str) -> str:
    """
    Encode a meeting id or UUID for use as a URL path segment.

    Zoom requires UUIDs that start with "/" or contain "//" to be
    encoded twice.
    """
    quoted = quote(meeting_id, safe="")
    if meeting_id.startswith("/") or "//" in meeting_id:
        quoted = quote(quoted, safe="")
    return quoted
