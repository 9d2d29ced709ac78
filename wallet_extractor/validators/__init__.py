"""Validation modules."""
from .statement_validator import StatementValidator, ValidationResult

__all__ = ['StatementValidator', 'ValidationResult']
