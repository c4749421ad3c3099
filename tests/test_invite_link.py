"""Unit tests for invite link parsing."""

import pytest

from meeting_relay.invite_link import (
    ParseError,
    format_invite_link,
    looks_like_link,
    parse_invite_link,
    quote_meeting_id,
)
from meeting_relay.models import MeetingReference


class TestParseInviteLink:
    """Test meeting id and passcode extraction."""

    def test_meeting_id_and_passcode(self):
        """Test a standard join link."""
        reference = parse_invite_link("https://zoom.us/j/1234567890?pwd=abcXYZ")
        assert reference == MeetingReference(meeting_id="1234567890", passcode="abcXYZ")

    def test_missing_passcode(self):
        """Test a link without pwd yields no passcode."""
        reference = parse_invite_link("https://zoom.us/j/1234567890")
        assert reference.meeting_id == "1234567890"
        assert reference.passcode is None

    def test_blank_passcode(self):
        """Test an empty pwd parameter is treated as absent."""
        assert parse_invite_link("https://zoom.us/j/1234567890?pwd=").passcode is None

    def test_vanity_subdomain_and_extra_params(self):
        """Test company subdomains and other query parameters."""
        reference = parse_invite_link(
            "https://acme.zoom.us/j/98765432101?from=addon&pwd=Zx9.1&uname=bob"
        )
        assert reference.meeting_id == "98765432101"
        assert reference.passcode == "Zx9.1"

    def test_webinar_path(self):
        """Test the id is taken from the third path segment whatever the prefix."""
        assert parse_invite_link("https://zoom.us/w/555666777").meeting_id == "555666777"

    @pytest.mark.parametrize("url", [
        "",
        "   ",
        "zoom.us/j/123",
        "not a url",
        "https://zoom.us/",
        "https://zoom.us/j",
        "https://zoom.us/j/",
    ])
    def test_malformed(self, url):
        """Test links without scheme, host or id segment are rejected."""
        with pytest.raises(ParseError):
            parse_invite_link(url)

    def test_non_string(self):
        """Test non-string input raises ParseError."""
        with pytest.raises(ParseError):
            parse_invite_link(None)

    def test_parse_error_is_value_error(self):
        """Test callers can catch ValueError."""
        with pytest.raises(ValueError):
            parse_invite_link("nope")


class TestFormatInviteLink:
    """Test building links."""

    def test_format_with_passcode(self):
        """Test pwd is added as a query parameter."""
        assert format_invite_link("1234567890", "abcXYZ") == "https://zoom.us/j/1234567890?pwd=abcXYZ"

    def test_format_without_passcode(self):
        """Test no query string when there is no passcode."""
        assert format_invite_link("1234567890") == "https://zoom.us/j/1234567890"

    @pytest.mark.parametrize("meeting_id,passcode", [
        ("1234567890", "abcXYZ"),
        ("85746352410", None),
        ("111", "a+b/c=d&e"),
    ])
    def test_parse_recovers_formatted_pair(self, meeting_id, passcode):
        """Test a formatted link parses back to the same pair."""
        reference = parse_invite_link(format_invite_link(meeting_id, passcode))
        assert reference == MeetingReference(meeting_id=meeting_id, passcode=passcode)


def test_looks_like_link():
    """Test bare ids are told apart from links."""
    assert looks_like_link("https://zoom.us/j/1")
    assert not looks_like_link("1234567890")


class TestQuoteMeetingId:
    """Test path encoding of meeting ids."""

    def test_numeric_id_unchanged(self):
        """Test plain ids pass through."""
        assert quote_meeting_id("1234567890") == "1234567890"

    def test_reserved_characters_encoded(self):
        """Test characters that would alter the path or query are encoded."""
        assert quote_meeting_id("123?x=1") == "123%3Fx%3D1"
        assert quote_meeting_id("4444AAAiAAAAAiAiAiiAii/A==") == "4444AAAiAAAAAiAiAiiAii%2FA%3D%3D"

    @pytest.mark.parametrize("uuid,expected", [
        ("/ajXp112QmuoKj4854875==", "%252FajXp112QmuoKj4854875%253D%253D"),
        ("aa//bb==", "aa%252F%252Fbb%253D%253D"),
    ])
    def test_uuid_double_encoded(self, uuid, expected):
        """Test UUIDs starting with a slash or holding a double slash are encoded twice."""
        assert quote_meeting_id(uuid) == expected
