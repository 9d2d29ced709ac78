"""
Statement validation.

Rejects documents that are not statements of the expected family before
any parsing happens, so "wrong file" is never reported as "no transactions".
"""
import logging
from dataclasses import dataclass
from typing import Optional

from ..config import StatementTemplate
from ..models import RejectionReason

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of statement validation."""
    success: bool
    message: str
    reason: Optional[RejectionReason] = None
    matched_keyword: Optional[str] = None


class StatementValidator:
    """
    Check extracted text for the template's statement markers.

    Matching is a case-insensitive substring search; one marker anywhere in
    the document is enough.
    """

    def __init__(self, template: StatementTemplate):
        """
        Initialize validator.

        Args:
            template: Statement template supplying the marker keywords
        """
        self.template = template
        self._keywords = [k for k in template.statement_keywords if k and k.strip()]

    def validate(self, text: Optional[str]) -> ValidationResult:
        """
        Validate that text looks like a statement of this template.

        Args:
            text: Full extracted text (may be empty)

        Returns:
            ValidationResult with success status and rejection reason
        """
        if not text or not text.strip():
            message = "Statement text is empty"
            logger.warning(message)
            return ValidationResult(
                success=False,
                message=message,
                reason=RejectionReason.EMPTY_DOCUMENT
            )

        text_lower = text.lower()
        for keyword in self._keywords:
            if keyword.lower() in text_lower:
                logger.debug(f"Statement marker found: {keyword!r}")
                return ValidationResult(
                    success=True,
                    message=f"Recognised {self.template.display_name} statement",
                    matched_keyword=keyword
                )

        message = (
            f"Not a recognised {self.template.display_name} statement "
            f"(expected one of: {', '.join(self._keywords)})"
        )
        logger.warning(message)
        return ValidationResult(
            success=False,
            message=message,
            reason=RejectionReason.UNRECOGNISED_STATEMENT
        )
