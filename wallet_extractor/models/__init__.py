"""Data models for wallet statement extraction."""
from .raw_line import RawLine, split_lines
from .transaction import TransactionType, TransactionDraft, TransactionRecord, DEFAULT_AMOUNT
from .parse_result import ParseResult, Parsed, Rejected, RejectionReason
from .extraction_result import ExtractionResult, ExtractionStatus

__all__ = [
    'RawLine',
    'split_lines',
    'TransactionType',
    'TransactionDraft',
    'TransactionRecord',
    'DEFAULT_AMOUNT',
    'ParseResult',
    'Parsed',
    'Rejected',
    'RejectionReason',
    'ExtractionResult',
    'ExtractionStatus',
]
