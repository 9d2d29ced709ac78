"""Extract transactions from UPI wallet statement text."""
from .parsers import StatementParser
from .models import TransactionRecord, TransactionType, Parsed, Rejected, RejectionReason
from .config import StatementTemplate, get_template_loader

__version__ = "0.1.0"

__all__ = [
    'StatementParser',
    'TransactionRecord',
    'TransactionType',
    'Parsed',
    'Rejected',
    'RejectionReason',
    'StatementTemplate',
    'get_template_loader',
]
