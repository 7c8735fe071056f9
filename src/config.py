"""
Configuration management for repo-pulse.

Loads settings from environment variables (and a .env file if present).
"""

import os
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.tz import tzlocal
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")
CALENDAR_TIMEZONE = os.getenv("CALENDAR_TIMEZONE", "")
CALENDAR_WEEK_START = os.getenv("CALENDAR_WEEK_START", "sunday")
CONTRIBUTOR_SCAN_LIMIT = os.getenv("CONTRIBUTOR_SCAN_LIMIT", "1000")
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

# datetime.weekday() numbering
WEEK_STARTS = {"monday": 0, "sunday": 6}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def resolve_timezone(name: str | None = None) -> tzinfo:
    """
    Resolve the timezone used for calendar bucketing.

    Args:
        name: IANA zone name (e.g. "Europe/Warsaw"). Empty or None means the
            host's local timezone (DST-aware, offset looked up per instant).

    Returns:
        A tzinfo instance

    Raises:
        ValueError: If the zone name is unknown
    """
    if not name:
        return tzlocal()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def resolve_week_start(name: str) -> int:
    """Map a week start name to a weekday number (Monday=0)."""
    try:
        return WEEK_STARTS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Invalid week start: {name!r} (expected one of: {', '.join(WEEK_STARTS)})"
        ) from None


def get_contributor_scan_limit() -> int:
    """Number of commits scanned for the contributor ranking."""
    return int(CONTRIBUTOR_SCAN_LIMIT)


def validate_config():
    """Validate that configuration values are usable."""
    problems = []

    if CALENDAR_WEEK_START.strip().lower() not in WEEK_STARTS:
        problems.append(f"CALENDAR_WEEK_START must be one of: {', '.join(WEEK_STARTS)}")

    try:
        resolve_timezone(CALENDAR_TIMEZONE)
    except ValueError:
        problems.append(f"CALENDAR_TIMEZONE is not a known timezone: {CALENDAR_TIMEZONE}")

    if not CONTRIBUTOR_SCAN_LIMIT.isdigit() or int(CONTRIBUTOR_SCAN_LIMIT) < 1:
        problems.append("CONTRIBUTOR_SCAN_LIMIT must be a positive integer")

    if LOG_LEVEL.upper() not in LOG_LEVELS:
        problems.append(f"LOG_LEVEL must be one of: {', '.join(sorted(LOG_LEVELS))}")

    if problems:
        raise ValueError(
            "Invalid configuration:\n  "
            + "\n  ".join(problems)
            + "\nCheck your environment or .env file."
        )
