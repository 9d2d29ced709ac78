"""Transaction data models."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from enum import Enum

from ..utils.date_parser import parse_timestamp

DEFAULT_AMOUNT = "0.00"


class TransactionType(Enum):
    """Transaction direction."""
    CREDIT = "Credit"
    DEBIT = "Debit"
    UNKNOWN = "Unknown"

    @classmethod
    def from_direction(cls, direction: str) -> "TransactionType":
        """Map a template direction key ('credit'/'debit') to a type."""
        try:
            return cls[direction.upper()]
        except KeyError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class TransactionRecord:
    """
    Represents a single parsed statement transaction.

    Attributes:
        date: Statement-native date (e.g., "Mar 08, 2025")
        time: Statement-native time (e.g., "2:30 PM")
        details: Counterparty line (e.g., "Paid to Nandini milk parlour")
        transaction_type: Credit, Debit or Unknown
        transaction_id: Wallet transaction identifier
        utr_no: Bank settlement reference (UTR)
        account_reference: Masked account line (e.g., "Debited from XX5779")
        amount: Decimal string with exactly two fraction digits
    """
    date: str
    time: str
    details: str = ""
    transaction_type: TransactionType = TransactionType.UNKNOWN
    transaction_id: str = ""
    utr_no: str = ""
    account_reference: str = ""
    amount: str = DEFAULT_AMOUNT

    def __post_init__(self):
        """Validate transaction data."""
        if not self.date or not self.time:
            raise ValueError("date and time are required")

    @property
    def timestamp(self) -> Optional[datetime]:
        """Combined date and time, or None if the statement text is not parseable."""
        return parse_timestamp(self.date, self.time)

    @property
    def is_credit(self) -> bool:
        return self.transaction_type is TransactionType.CREDIT

    @property
    def is_debit(self) -> bool:
        return self.transaction_type is TransactionType.DEBIT

    def to_dict(self) -> dict:
        """Convert transaction to dictionary."""
        timestamp = self.timestamp
        return {
            'date': self.date,
            'time': self.time,
            'details': self.details,
            'type': self.transaction_type.value,
            'transactionId': self.transaction_id,
            'utrNo': self.utr_no,
            'accountReference': self.account_reference,
            'amount': self.amount,
            'timestamp': timestamp.isoformat() if timestamp else None,
        }


class TransactionDraft:
    """
    Mutable accumulator for the lines of one transaction block.

    Opened on an anchor (date line + time line) and filled by the field
    classifier until the next anchor or end of input.
    """

    def __init__(self, date: str, time: str, anchor_index: int = 0):
        self.date = date
        self.time = time
        self.anchor_index = anchor_index
        self.details: Optional[str] = None
        self.transaction_type: Optional[TransactionType] = None
        self.type_from_details = False
        self.transaction_id: Optional[str] = None
        self.utr_no: Optional[str] = None
        self.account_reference: Optional[str] = None
        self.amount: Optional[str] = None

    def set_details(self, details: str, transaction_type: Optional[TransactionType]) -> bool:
        """
        Record the counterparty line. First occurrence wins.

        The prefix-derived type overrides any type inferred from weaker
        signals seen earlier in the block.

        Returns:
            True if the draft changed
        """
        if self.details is not None:
            return False
        self.details = details
        if transaction_type is not None and transaction_type is not TransactionType.UNKNOWN:
            self.transaction_type = transaction_type
            self.type_from_details = True
        return True

    def infer_type(self, transaction_type: Optional[TransactionType]) -> bool:
        """Set the type from a weak signal, only if no type is known yet."""
        if transaction_type is None or self.transaction_type is not None:
            return False
        self.transaction_type = transaction_type
        return True

    def has_any_field(self) -> bool:
        return any(
            value is not None
            for value in (self.details, self.amount, self.transaction_type)
        )

    def is_complete(self, require_details: bool = True) -> bool:
        """
        Check whether the draft should be emitted.

        Args:
            require_details: Emit only drafts with details and an amount or type.
                When False, any draft holding details, amount or type is kept.

        Returns:
            True if the draft is a transaction, False if it is noise
        """
        if not require_details:
            return self.has_any_field()
        return self.details is not None and (
            self.amount is not None or self.transaction_type is not None
        )

    def finalize(self) -> TransactionRecord:
        """Convert the draft into an immutable record with defaults applied."""
        return TransactionRecord(
            date=self.date,
            time=self.time,
            details=self.details or "",
            transaction_type=self.transaction_type or TransactionType.UNKNOWN,
            transaction_id=self.transaction_id or "",
            utr_no=self.utr_no or "",
            account_reference=self.account_reference or "",
            amount=self.amount or DEFAULT_AMOUNT,
        )

    def __repr__(self) -> str:
        return (
            f"TransactionDraft(date={self.date!r}, time={self.time!r}, "
            f"details={self.details!r}, amount={self.amount!r})"
        )
