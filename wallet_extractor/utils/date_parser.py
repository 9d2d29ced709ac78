"""Date and time parsing for statement anchor lines."""
import logging
from datetime import datetime
from typing import Optional, List

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

# Statement layouts: "Mar 08, 2025" + "2:30 PM"
DEFAULT_TIMESTAMP_FORMATS = [
    "%b %d, %Y %I:%M %p",
    "%b %d, %Y %I:%M%p",
    "%B %d, %Y %I:%M %p",
]

# Fills fields dateutil cannot find, so results never depend on "today"
_DATEUTIL_DEFAULT = datetime(1970, 1, 1)


def parse_timestamp(
    date_string: str,
    time_string: str,
    formats: Optional[List[str]] = None
) -> Optional[datetime]:
    """
    Combine a statement date line and time line into a datetime.

    Args:
        date_string: Date as printed (e.g., "Mar 08, 2025")
        time_string: Time as printed (e.g., "2:30 PM")
        formats: strptime formats to try before the dateutil fallback

    Returns:
        datetime object or None if parsing fails
    """
    if not date_string or not time_string:
        return None

    combined = normalize_whitespace(f"{date_string} {time_string}")

    for fmt in formats or DEFAULT_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(combined, fmt)
        except ValueError:
            continue

    try:
        return dateutil_parser.parse(combined, default=_DATEUTIL_DEFAULT)
    except (ValueError, OverflowError):
        pass

    logger.debug(f"Could not parse timestamp: {combined}")
    return None


def normalize_whitespace(value: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return ' '.join(value.split())
