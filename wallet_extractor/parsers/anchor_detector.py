"""Transaction anchor detection.

An anchor is the two-line header of a transaction block:

    Mar 08, 2025
    2:30 PM

A date-like line that is not immediately followed by a time line is NOT an
anchor. Statement narrative sometimes contains dates ("Statement period
Feb 01, 2025 - Mar 31, 2025"), and those must not open a transaction.
"""

import logging
import re
from typing import Sequence

from .base_parser import keyword_alternation
from ..config import StatementTemplate
from ..models import RawLine

logger = logging.getLogger(__name__)

DAY_OF_MONTH = r'(?:0?[1-9]|[12]\d|3[01])'
HOUR_12 = r'(?:0?[1-9]|1[0-2])'


class AnchorDetector:
    """Recognise date/time anchor pairs using the template's locale tables."""

    def __init__(self, template: StatementTemplate):
        """
        Compile date and time patterns for a template.

        Args:
            template: Supplies month abbreviations and AM/PM tokens
        """
        months = keyword_alternation(template.month_abbreviations)
        meridiem = keyword_alternation(template.meridiem_tokens)

        self.date_pattern = re.compile(
            rf'^(?:{months})\s+{DAY_OF_MONTH},\s*\d{{4}}$',
            re.IGNORECASE
        )
        self.time_pattern = re.compile(
            rf'^{HOUR_12}:[0-5]\d\s*(?:{meridiem})$',
            re.IGNORECASE
        )

    def is_date(self, text: str) -> bool:
        """Check whether a whole line is a statement date (e.g., 'Mar 08, 2025')."""
        return bool(self.date_pattern.match(text.strip()))

    def is_time(self, text: str) -> bool:
        """Check whether a whole line is a statement time (e.g., '2:30 PM')."""
        return bool(self.time_pattern.match(text.strip()))

    def is_anchor(self, lines: Sequence[RawLine], index: int) -> bool:
        """
        Check whether lines[index] opens a transaction.

        Args:
            lines: All statement lines
            index: Cursor position

        Returns:
            True if lines[index] is a date and lines[index + 1] is a time
        """
        if index + 1 >= len(lines):
            return False

        if not self.is_date(lines[index].text):
            return False

        if not self.is_time(lines[index + 1].text):
            logger.debug(f"Date without time at line {lines[index].index}: {lines[index].text}")
            return False

        return True
