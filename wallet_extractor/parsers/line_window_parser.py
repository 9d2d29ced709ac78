"""Line-window statement parser.

Handles statements whose transactions are printed as vertical blocks with no
column layout, e.g. PhonePe UPI statements:

    Mar 08, 2025                           <- anchor: date line
    2:30 PM                                <- anchor: time line
    Paid to Nandini milk parlour           <- details (sets Debit)
    Transaction ID : T25030814064432917711
    UTR No : 841302199001
    Debited from XX5779
    INR 14.00                              <- amount

Algorithm (single forward pass, no backtracking):
- An anchor closes the open draft and opens a new one.
- Lines after an anchor are classified into the draft while they lie within
  the template's lookahead window (offset from the date line).
- Lines past the window are only checked for the next anchor; fields there
  are NOT attributed to the draft. Layouts with longer blocks need a larger
  `lookahead_window` in the template.
- Drafts with no usable content are discarded as noise.
"""

import logging
from typing import List, Optional, Sequence, Union

from .base_parser import BaseStatementParser
from .anchor_detector import AnchorDetector
from .field_classifier import FieldClassifier, FieldKind, Classification
from ..config import StatementTemplate
from ..models import RawLine, TransactionDraft, TransactionRecord

logger = logging.getLogger(__name__)


class LineWindowParser(BaseStatementParser):
    """Parser for anchor-delimited, one-field-per-line statement layouts."""

    def __init__(self, template: StatementTemplate):
        """
        Initialize parser.

        Args:
            template: Statement template (patterns, lookahead window, discard policy)
        """
        super().__init__(template)
        self.anchor_detector = AnchorDetector(template)
        self.classifier = FieldClassifier(template)
        self.lookahead_window = template.lookahead_window
        self.require_details = template.require_details

        if self.lookahead_window < 2:
            logger.warning(
                f"Lookahead window {self.lookahead_window} for {template.name} "
                f"leaves no room for fields after the anchor"
            )

    def extract(self, lines: Sequence[Union[RawLine, str]]) -> List[TransactionRecord]:
        """
        Extract transactions from statement lines.

        Args:
            lines: Ordered, trimmed, non-blank lines

        Returns:
            Records in anchor order
        """
        lines = self._as_raw_lines(lines)
        records: List[TransactionRecord] = []
        draft: Optional[TransactionDraft] = None
        anchor_pos = 0
        anchor_count = 0

        i = 0
        while i < len(lines):
            # Check for new anchor first, even when a draft is open
            if self.anchor_detector.is_anchor(lines, i):
                self._close_draft(draft, records)
                draft = TransactionDraft(
                    date=lines[i].text,
                    time=lines[i + 1].text,
                    anchor_index=lines[i].index
                )
                anchor_pos = i
                anchor_count += 1
                i += 2
                continue

            if draft is None:
                # Preamble before the first transaction
                i += 1
                continue

            if i - anchor_pos > self.lookahead_window:
                i += 1
                continue

            classification = self.classifier.classify(lines, i)
            self._apply(draft, classification)
            i += classification.consumed

        self._close_draft(draft, records)

        logger.debug(f"Found {anchor_count} anchors, emitted {len(records)} transactions")
        return records

    def _apply(self, draft: TransactionDraft, classification: Classification) -> None:
        """Merge one classified line into the draft."""
        kind = classification.kind

        if kind is FieldKind.DETAILS:
            if draft.set_details(classification.value, classification.transaction_type):
                logger.debug(
                    f"Found transaction details: {classification.value} - "
                    f"Type: {classification.transaction_type.value if classification.transaction_type else '-'}"
                )
        elif kind is FieldKind.TRANSACTION_ID:
            draft.transaction_id = classification.value
        elif kind is FieldKind.UTR:
            draft.utr_no = classification.value
        elif kind is FieldKind.ACCOUNT_REFERENCE:
            draft.account_reference = classification.value
        elif kind is FieldKind.AMOUNT:
            draft.amount = classification.value
            draft.infer_type(classification.transaction_type)
        elif kind is FieldKind.TYPE:
            draft.infer_type(classification.transaction_type)

    def _close_draft(self, draft: Optional[TransactionDraft], records: List[TransactionRecord]) -> None:
        """Emit the draft as a record, or discard it as noise."""
        if draft is None:
            return

        if draft.is_complete(self.require_details):
            record = draft.finalize()
            records.append(record)
            logger.debug(f"Added transaction: {record.details} - {record.amount}")
        else:
            logger.debug(f"Discarded incomplete draft at line {draft.anchor_index}: {draft!r}")
