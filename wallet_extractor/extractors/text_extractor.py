"""Plain text extraction for statements already converted to text."""
import logging
from pathlib import Path
from typing import Optional

from .base_extractor import BaseExtractor, ExtractionError

logger = logging.getLogger(__name__)


class TextFileExtractor(BaseExtractor):
    """Read a text dump of a statement (e.g., saved from a PDF viewer)."""

    method = "text"

    SUFFIXES = ('.txt', '.text')

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.SUFFIXES

    def extract(self, file_path: Path, password: Optional[str] = None) -> str:
        """
        Read text from file.

        Args:
            file_path: Path to text file
            password: Ignored; text dumps are never encrypted

        Returns:
            File contents

        Raises:
            ExtractionError: If the file cannot be read as UTF-8
        """
        self.validate_file(file_path)

        try:
            text = file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read text file: {e}")
            raise ExtractionError(f"Text extraction failed: {e}") from e

        logger.info(f"Read {len(text)} characters from {file_path.name}")
        return text
