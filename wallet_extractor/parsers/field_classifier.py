"""Per-line field classification for transaction blocks.

Each line inside a transaction block is assigned to at most one field.
Rules are tried in a fixed order and the first match wins:

    1. DETAILS            "Paid to Nandini milk parlour"
    2. TRANSACTION_ID     "Transaction ID : T25030814064432917711"
    3. UTR                "UTR No : 841302199001"
    4. ACCOUNT_REFERENCE  "Debited from XX5779"
    5. AMOUNT             "INR 14.00"  (or "INR" + "14.00" on the next line)
    6. TYPE               "Debit"
    7. UNMATCHED          anything else (headers, page footers, noise)
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from .base_parser import keyword_alternation
from ..config import StatementTemplate
from ..models import RawLine, TransactionType
from ..utils import normalize_amount, normalize_whitespace, ZERO_AMOUNT

logger = logging.getLogger(__name__)

# Identifier tokens after a label such as "Transaction ID :" or "UTR No."
LABEL_SEPARATOR = r'\s*[:.#-]?\s*'
IDENTIFIER_TOKEN = r'([A-Za-z0-9]+)'

# A currency amount: digits with optional thousands separators and up to two
# fraction digits, not followed by further digits
AMOUNT_TOKEN = r'(\d[\d,]*(?:\.\d{0,2})?)(?!\.?\d)'

# A line holding only a formatted number (second line of a split amount)
BARE_NUMBER_PATTERN = re.compile(r'^(?=.*\d)[\d,]+\.?\d{0,2}$')


class FieldKind(Enum):
    """Semantic field a statement line contributes to."""
    DETAILS = "details"
    TRANSACTION_ID = "transaction_id"
    UTR = "utr_no"
    ACCOUNT_REFERENCE = "account_reference"
    AMOUNT = "amount"
    TYPE = "type"
    UNMATCHED = "unmatched"


@dataclass(frozen=True)
class Classification:
    """
    Result of classifying one line.

    Attributes:
        kind: Field the line belongs to
        value: Extracted field value (None for UNMATCHED and bare TYPE lines)
        transaction_type: Direction implied by the line, if any
        consumed: Number of lines used (2 for a split amount layout)
    """
    kind: FieldKind
    value: Optional[str] = None
    transaction_type: Optional[TransactionType] = None
    consumed: int = 1


UNMATCHED = Classification(FieldKind.UNMATCHED)


def _word_pattern(keywords: Sequence[str]) -> Pattern:
    """Case-insensitive, word-bounded match of any keyword."""
    return re.compile(rf'\b(?:{keyword_alternation(keywords)})\b', re.IGNORECASE)


def _marker_alternation(markers: Sequence[str]) -> str:
    """
    Alternation for currency markers.

    Alphabetic codes ("INR") must stand alone so "MINRAL" does not count;
    symbols ("₹") may touch the number.
    """
    parts = []
    for marker in sorted({m.strip() for m in markers if m and m.strip()}, key=len, reverse=True):
        escaped = re.escape(marker)
        if marker[0].isalpha():
            escaped = rf'(?<![A-Za-z]){escaped}'
        if marker[-1].isalpha():
            escaped = rf'{escaped}(?![A-Za-z])'
        parts.append(escaped)
    return '|'.join(parts) if parts else r'(?!)'


def _directional_patterns(table: Dict[str, List[str]], build) -> List[Tuple[Pattern, TransactionType]]:
    """Compile a {direction: [keywords]} table into (pattern, type) pairs, in table order."""
    compiled = []
    for direction, keywords in table.items():
        if not keywords:
            continue
        compiled.append((build(keywords), TransactionType.from_direction(direction)))
    return compiled


class FieldClassifier:
    """
    Classify statement lines into transaction fields.

    All patterns are compiled once per template; `classify()` is pure and
    never raises for malformed lines.
    """

    def __init__(self, template: StatementTemplate):
        """
        Compile the template's keyword tables.

        Args:
            template: Statement template
        """
        self.template = template

        self.detail_patterns = _directional_patterns(
            template.detail_prefixes,
            lambda prefixes: re.compile(rf'^(?:{keyword_alternation(prefixes)})', re.IGNORECASE)
        )
        self.transaction_id_pattern = re.compile(
            rf'\b(?:{keyword_alternation(template.transaction_id_labels)})\b'
            rf'{LABEL_SEPARATOR}{IDENTIFIER_TOKEN}',
            re.IGNORECASE
        )
        self.utr_pattern = re.compile(
            rf'\b(?:{keyword_alternation(template.utr_labels)})\b'
            rf'{LABEL_SEPARATOR}{IDENTIFIER_TOKEN}',
            re.IGNORECASE
        )
        self.account_reference_pattern = re.compile(
            rf'\b(?:{keyword_alternation(template.account_reference_phrases)})\s+\S+',
            re.IGNORECASE
        )

        markers = _marker_alternation(template.currency_markers)
        self.currency_pattern = re.compile(rf'(?:{markers})', re.IGNORECASE)
        self.bare_currency_pattern = re.compile(rf'^(?:{markers})$', re.IGNORECASE)
        self.amount_pattern = re.compile(rf'(?:{markers})\s*{AMOUNT_TOKEN}', re.IGNORECASE)

        self.direction_patterns = _directional_patterns(template.direction_keywords, _word_pattern)
        self.type_label_patterns = _directional_patterns(
            template.type_labels,
            lambda labels: re.compile(rf'^(?:{keyword_alternation(labels)})$', re.IGNORECASE)
        )

    def classify(self, lines: Sequence[RawLine], index: int) -> Classification:
        """
        Classify lines[index].

        Args:
            lines: All statement lines (the next line is needed for split amounts)
            index: Position of the line to classify

        Returns:
            Classification for the line
        """
        line = lines[index].text

        for rule in (
            self._match_details,
            self._match_transaction_id,
            self._match_utr,
            self._match_account_reference,
        ):
            result = rule(line)
            if result is not None:
                return result

        amount = self._match_amount(lines, index)
        if amount is not None:
            return amount

        type_label = self._match_type_label(line)
        if type_label is not None:
            return type_label

        if len(line) > 5:
            logger.debug(f"Unprocessed line {lines[index].index}: {line}")
        return UNMATCHED

    def _match_details(self, line: str) -> Optional[Classification]:
        for pattern, transaction_type in self.detail_patterns:
            if pattern.match(line):
                return Classification(FieldKind.DETAILS, line.strip(), transaction_type)
        return None

    def _match_transaction_id(self, line: str) -> Optional[Classification]:
        match = self.transaction_id_pattern.search(line)
        if match:
            return Classification(FieldKind.TRANSACTION_ID, match.group(1))
        return None

    def _match_utr(self, line: str) -> Optional[Classification]:
        match = self.utr_pattern.search(line)
        if match:
            return Classification(FieldKind.UTR, match.group(1))
        return None

    def _match_account_reference(self, line: str) -> Optional[Classification]:
        if self.account_reference_pattern.search(line):
            return Classification(FieldKind.ACCOUNT_REFERENCE, normalize_whitespace(line))
        return None

    def _match_amount(self, lines: Sequence[RawLine], index: int) -> Optional[Classification]:
        """
        Match an amount on the current line, or a marker line plus number line.

        Lines that carry a currency marker but no usable number still
        classify as AMOUNT with value "0.00".
        """
        line = lines[index].text

        if not self.currency_pattern.search(line):
            return None

        direction = self._infer_direction(line)

        match = self.amount_pattern.search(line)
        if match:
            return Classification(FieldKind.AMOUNT, normalize_amount(match.group(1)), direction)

        # Split layout: "INR" on one line, "1,234.00" on the next
        if self.bare_currency_pattern.match(line) and index + 1 < len(lines):
            next_line = lines[index + 1].text
            if BARE_NUMBER_PATTERN.match(next_line):
                return Classification(
                    FieldKind.AMOUNT,
                    normalize_amount(next_line),
                    direction,
                    consumed=2
                )

        logger.debug(f"Currency marker without amount at line {lines[index].index}: {line}")
        return Classification(FieldKind.AMOUNT, ZERO_AMOUNT, direction)

    def _infer_direction(self, line: str) -> Optional[TransactionType]:
        for pattern, transaction_type in self.direction_patterns:
            if pattern.search(line):
                return transaction_type
        return None

    def _match_type_label(self, line: str) -> Optional[Classification]:
        for pattern, transaction_type in self.type_label_patterns:
            if pattern.match(line.strip()):
                return Classification(FieldKind.TYPE, transaction_type=transaction_type)
        return None
