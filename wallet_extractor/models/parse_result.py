"""Parser outcome models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .transaction import TransactionRecord


class RejectionReason(Enum):
    """Why a document was not accepted as a statement."""
    EMPTY_DOCUMENT = "empty_document"
    UNRECOGNISED_STATEMENT = "unrecognised_statement"


@dataclass(frozen=True)
class ParseResult:
    """Base class for the outcome of parsing one statement."""

    @property
    def success(self) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Parsed(ParseResult):
    """The document was recognised; records may legitimately be empty."""
    records: List[TransactionRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected(ParseResult):
    """The document failed statement validation; nothing was extracted."""
    reason: RejectionReason = RejectionReason.UNRECOGNISED_STATEMENT
    message: str = ""

    @property
    def success(self) -> bool:
        return False
