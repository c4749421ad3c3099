#!/usr/bin/env python3
"""
Main entrypoint for the meeting relay.

Runs a single pass that:
1. Resolves a Zoom meeting from an invite link or meeting id
2. Fetches the meeting transcript
3. Summarizes it and posts the summary to a Telex channel

Usage:
    # With real Zoom and Telex:
    export ZOOM_CLIENT_ID="..."
    export ZOOM_CLIENT_SECRET="..."
    export ZOOM_ACCOUNT_ID="..."
    export TELEX_API_URL="https://ping.telex.im/v1/webhooks/..."
    python -m meeting_relay.main "https://zoom.us/j/1234567890?pwd=abc"

    # With mock Zoom client, printing instead of posting:
    python -m meeting_relay.main 1234567890 --mock --dry-run

Environment Variables:
    ZOOM_CLIENT_ID: Server-to-Server OAuth app client id
    ZOOM_CLIENT_SECRET: Server-to-Server OAuth app client secret
    ZOOM_ACCOUNT_ID: Zoom account id
    TELEX_API_URL: Telex channel webhook URL
    TELEX_CHANNEL: (optional) Channel name, default: meeting-transcripts
    ZOOM_API_BASE: (optional) Zoom API base URL
    ZOOM_OAUTH_URL: (optional) Zoom OAuth token URL
    HTTP_TIMEOUT: (optional) Request timeout in seconds, default: 10.0
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import TELEX_VARS, ZOOM_VARS, ConfigError, Settings
from .invite_link import ParseError
from .pipeline import SummaryPipeline
from .telex_client import TelexNotifier
from .transcript import TranscriptError
from .zoom_client import MockZoomClient, ZoomAPIError, ZoomClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Summarize a Zoom meeting transcript and post it to Telex"
    )
    parser.add_argument(
        "meeting",
        help="Zoom invite link or meeting id",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use mock Zoom client (no Zoom credentials or API calls)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the summary instead of posting it to Telex",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def required_vars(use_mock: bool, dry_run: bool) -> tuple:
    required = ()
    if not use_mock:
        required += ZOOM_VARS
    if not dry_run:
        required += TELEX_VARS
    return required


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entrypoint."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        settings = Settings.from_env(required=required_vars(args.mock, args.dry_run))
    except ConfigError as e:
        logger.error(str(e))
        return 1

    if args.mock:
        logger.info("Using mock Zoom client for testing")
        zoom_client = MockZoomClient()
    else:
        zoom_client = ZoomClient.from_settings(settings)

    notifier = None if args.dry_run else TelexNotifier.from_settings(settings)
    pipeline = SummaryPipeline(zoom_client=zoom_client, notifier=notifier)

    logger.info("=" * 60)
    logger.info("Meeting Relay")
    logger.info(f"Meeting: {args.meeting}")
    logger.info(f"Mode: {'Mock' if args.mock else 'Live'}{' (dry run)' if args.dry_run else ''}")
    logger.info("=" * 60)

    try:
        result = pipeline.run(args.meeting)
    except (ParseError, ZoomAPIError, TranscriptError) as e:
        logger.error(f"Meeting relay failed: {e}")
        return 1
    finally:
        zoom_client.close()
        if notifier is not None:
            notifier.close()
        logger.info("Shutdown complete")

    if args.dry_run:
        print(result.summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
