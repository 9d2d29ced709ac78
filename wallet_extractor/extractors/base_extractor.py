"""Base extractor abstract class."""
from abc import ABC, abstractmethod
from typing import Optional
from pathlib import Path

from ..config.settings import MAX_FILE_SIZE_MB


class BaseExtractor(ABC):
    """
    Abstract base class for all extractors.

    An extractor turns a statement file into plain text in reading order.
    Decryption happens here; parsers only ever see text.
    """

    #: Short name recorded in results and audit logs
    method = "unknown"

    def __init__(self, max_file_size_mb: int = MAX_FILE_SIZE_MB):
        """Initialize the extractor."""
        self.name = self.__class__.__name__
        self.max_file_size_mb = max_file_size_mb

    @abstractmethod
    def extract(self, file_path: Path, password: Optional[str] = None) -> str:
        """
        Extract text from a document.

        Args:
            file_path: Path to the document file
            password: Candidate password for encrypted documents

        Returns:
            Extracted text, lines separated by newlines

        Raises:
            PasswordError: If the document is encrypted and the password is wrong
            ExtractionError: If extraction fails
        """
        pass

    @abstractmethod
    def can_handle(self, file_path: Path) -> bool:
        """
        Check if this extractor can handle the given file.

        Args:
            file_path: Path to the document file

        Returns:
            True if this extractor can process the file
        """
        pass

    def validate_file(self, file_path: Path) -> None:
        """
        Validate that the file exists, is readable and not too large.

        Args:
            file_path: Path to the document file

        Raises:
            FileNotFoundError: If file doesn't exist
            ExtractionError: If file is empty, not a file, or too large
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not file_path.is_file():
            raise ExtractionError(f"Not a file: {file_path}")

        size = file_path.stat().st_size
        if not size > 0:
            raise ExtractionError(f"File is empty: {file_path}")

        if size > self.max_file_size_mb * 1024 * 1024:
            raise ExtractionError(
                f"File is larger than {self.max_file_size_mb}MB: {file_path}"
            )


class ExtractionError(Exception):
    """Custom exception for extraction errors."""
    pass


class PasswordError(ExtractionError):
    """The document is encrypted and the supplied password did not open it."""
    pass
