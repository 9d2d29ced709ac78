"""Base statement parser with shared utilities for all parsing strategies.

This module provides the abstract base class that every parsing strategy
inherits from. Following the Template Method pattern, `parse()` fixes the
order of work (split lines, validate, extract) while subclasses implement
`extract()` for their statement layout.

Common Parsing Patterns:
-----------------------

1. Validate before extracting:
   A document that carries none of the template's statement markers is
   returned as `Rejected`, never as an empty `Parsed`. Callers rely on this
   to tell "wrong file" apart from "statement with no transactions".

2. Leniency inside a statement:
   Once a document is accepted, malformed lines never abort the run. Bad
   amounts degrade to "0.00", missing identifiers to "". Only structural
   discards (drafts with no usable content) drop data.

3. Pattern Matching Priority:
   When a state machine holds an open draft, always check for a NEW
   transaction anchor before classifying the line into the open draft.

       # GOOD: Check for new anchor first
       if anchor_detector.is_anchor(lines, i):
           # Close previous draft, open a new one
       elif draft is not None:
           # Classify line into the open draft

4. Table-driven patterns:
   Keywords, prefixes and labels come from the StatementTemplate. Build
   regexes from them with `keyword_alternation()` rather than hard-coding
   strings in parser code.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence, Union

from ..config import StatementTemplate
from ..models import RawLine, TransactionRecord, ParseResult, Parsed, Rejected, split_lines
from ..validators import StatementValidator

logger = logging.getLogger(__name__)


def keyword_alternation(keywords: Iterable[str]) -> str:
    """
    Build a regex alternation from literal keywords.

    Longer keywords are tried first and internal whitespace matches any
    run of whitespace, so "UTR No" also matches "UTR  No".

    Args:
        keywords: Literal keyword strings

    Returns:
        Regex source (without surrounding group), or a never-matching
        pattern when no keywords are given
    """
    parts = []
    for keyword in sorted({k.strip() for k in keywords if k and k.strip()}, key=len, reverse=True):
        parts.append(r'\s+'.join(re.escape(token) for token in keyword.split()))

    if not parts:
        return r'(?!)'
    return '|'.join(parts)


class BaseStatementParser(ABC):
    """
    Abstract base class for statement parsers.

    Subclasses must implement:
    - extract(): Turn an ordered RawLine sequence into transaction records

    The parser holds no state between calls; one instance can parse any
    number of independent statements.
    """

    def __init__(self, template: StatementTemplate):
        """
        Initialize parser with a statement template.

        Args:
            template: Statement template (keywords, labels, window size)
        """
        self.template = template
        self.validator = StatementValidator(template)

    def parse(self, content: Union[str, Sequence[str]]) -> ParseResult:
        """
        Validate and parse a statement.

        Args:
            content: Full extracted text, or the extracted lines in reading order

        Returns:
            Parsed(records) if the document is recognised, otherwise
            Rejected(reason, message). Extraction is never attempted for a
            rejected document.
        """
        if isinstance(content, str):
            text = content
        else:
            text = "\n".join(line or "" for line in content)

        validation = self.validator.validate(text)
        if not validation.success:
            return Rejected(reason=validation.reason, message=validation.message)

        lines = split_lines(text)
        logger.info(f"Parsing {self.template.display_name} statement: {len(lines)} lines")

        records = self.extract(lines)
        logger.info(f"Parsed {len(records)} transactions")
        return Parsed(records=records)

    @abstractmethod
    def extract(self, lines: Sequence[RawLine]) -> List[TransactionRecord]:
        """
        Extract transaction records from non-blank statement lines.

        This is the main method that subclasses must implement with their
        layout-specific logic. It performs no validation.

        Args:
            lines: Ordered, trimmed, non-blank lines

        Returns:
            Transaction records in the order they appear in the statement
        """
        pass

    @staticmethod
    def _as_raw_lines(lines: Sequence[Union[RawLine, str]]) -> List[RawLine]:
        """Accept plain strings as well as RawLines."""
        if all(isinstance(line, RawLine) for line in lines):
            return list(lines)
        return split_lines(line.text if isinstance(line, RawLine) else line for line in lines)
