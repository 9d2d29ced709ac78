"""Utility functions."""
from .logger import setup_logger, attach_audit_log, log_extraction_audit, AUDIT_LOGGER_NAME
from .amount_parser import normalize_amount, to_decimal, format_currency, ZERO_AMOUNT
from .date_parser import parse_timestamp, normalize_whitespace

__all__ = [
    'setup_logger',
    'attach_audit_log',
    'log_extraction_audit',
    'AUDIT_LOGGER_NAME',
    'normalize_amount',
    'to_decimal',
    'format_currency',
    'ZERO_AMOUNT',
    'parse_timestamp',
    'normalize_whitespace',
]
