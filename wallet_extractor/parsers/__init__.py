"""Statement parsing modules."""
from .statement_parser import StatementParser
from .base_parser import BaseStatementParser, keyword_alternation
from .anchor_detector import AnchorDetector
from .field_classifier import FieldClassifier, FieldKind, Classification
from .line_window_parser import LineWindowParser

__all__ = [
    'StatementParser',
    'BaseStatementParser',
    'keyword_alternation',
    'AnchorDetector',
    'FieldClassifier',
    'FieldKind',
    'Classification',
    'LineWindowParser',
]
