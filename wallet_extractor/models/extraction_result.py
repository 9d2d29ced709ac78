"""Extraction result model."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from datetime import datetime

from .transaction import TransactionRecord


class ExtractionStatus(Enum):
    """Outcome of running one file through the pipeline."""
    PARSED = "parsed"
    REJECTED = "rejected"
    PASSWORD_REQUIRED = "password_required"
    EXTRACTION_FAILED = "extraction_failed"


@dataclass
class ExtractionResult:
    """
    Complete result of statement extraction.

    Attributes:
        status: Pipeline outcome (parsed, rejected, password_required, extraction_failed)
        transactions: Parsed records (empty unless status is PARSED)
        template_name: Statement template used for parsing
        extraction_method: Method used (pdfplumber, text)
        line_count: Number of non-blank lines handed to the parser
        error_message: Error message if extraction failed or was rejected
        processing_time: Time taken to process (seconds)
        extracted_at: Timestamp of extraction
    """
    status: ExtractionStatus
    transactions: List[TransactionRecord] = field(default_factory=list)
    template_name: Optional[str] = None
    extraction_method: str = "unknown"
    line_count: int = 0
    error_message: Optional[str] = None
    processing_time: float = 0.0
    extracted_at: datetime = field(default_factory=datetime.now)

    @property
    def success(self) -> bool:
        """Whether the document was parsed (possibly with zero transactions)."""
        return self.status is ExtractionStatus.PARSED

    @property
    def transaction_count(self) -> int:
        """Get number of transactions."""
        return len(self.transactions)

    @property
    def credits(self) -> List[TransactionRecord]:
        return [t for t in self.transactions if t.is_credit]

    @property
    def debits(self) -> List[TransactionRecord]:
        return [t for t in self.transactions if t.is_debit]

    def to_dict(self) -> dict:
        """Convert extraction result to dictionary."""
        return {
            'success': self.success,
            'status': self.status.value,
            'template': self.template_name,
            'extraction_method': self.extraction_method,
            'transaction_count': self.transaction_count,
            'line_count': self.line_count,
            'processing_time': round(self.processing_time, 2),
            'extracted_at': self.extracted_at.isoformat(),
            'transactions': [t.to_dict() for t in self.transactions],
            'error_message': self.error_message,
        }
