"""PDF text extraction using pdfplumber."""
import logging
from pathlib import Path
from typing import Optional

import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect

from .base_extractor import BaseExtractor, ExtractionError, PasswordError

logger = logging.getLogger(__name__)


def _is_password_error(exc: BaseException) -> bool:
    """
    Check an exception chain for pdfminer's password failure.

    pdfplumber re-raises pdfminer errors wrapped in its own exception type,
    so the pdfminer exception may sit in args or in __cause__.
    """
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        if isinstance(exc, PDFPasswordIncorrect):
            return True
        if any(isinstance(arg, PDFPasswordIncorrect) for arg in exc.args):
            return True
        exc = exc.__cause__ or exc.__context__
    return False


class PDFExtractor(BaseExtractor):
    """
    Extract text from native PDF statements using pdfplumber.

    Wallet statements are generated PDFs with selectable text, often
    protected with a user password (e.g., the registered phone number).
    """

    method = "pdfplumber"

    def can_handle(self, file_path: Path) -> bool:
        """
        Check if file is a PDF.

        Args:
            file_path: Path to the document file

        Returns:
            True if file is a PDF
        """
        return file_path.suffix.lower() == '.pdf'

    def extract(self, file_path: Path, password: Optional[str] = None) -> str:
        """
        Extract text from PDF using pdfplumber.

        Args:
            file_path: Path to PDF file
            password: User password for encrypted statements

        Returns:
            Text of all pages in order

        Raises:
            PasswordError: If the password is missing or wrong
            ExtractionError: If extraction fails
        """
        self.validate_file(file_path)

        if not self.can_handle(file_path):
            raise ExtractionError(f"File is not a PDF: {file_path}")

        logger.info(f"Extracting text from PDF: {file_path}")

        all_text = []
        try:
            with pdfplumber.open(file_path, password=password or "") as pdf:
                total_pages = len(pdf.pages)
                logger.debug(f"PDF has {total_pages} pages")

                for page_num, page in enumerate(pdf.pages, start=1):
                    text = page.extract_text()

                    if text and text.strip():
                        all_text.append(text)
                        logger.debug(f"Extracted {len(text)} chars from page {page_num}")
                    else:
                        logger.warning(f"No text found on page {page_num}")

        except Exception as e:
            if _is_password_error(e):
                logger.warning(f"Password rejected for {file_path.name}")
                raise PasswordError(
                    f"{file_path.name} is password protected and the password "
                    f"{'is incorrect' if password else 'was not supplied'}"
                ) from e
            logger.error(f"Failed to extract text from PDF: {e}")
            raise ExtractionError(f"PDF extraction failed: {e}") from e

        extracted_text = "\n".join(all_text)

        if not extracted_text.strip():
            logger.warning("No text extracted from PDF - likely scanned")
            return ""

        logger.info(
            f"Successfully extracted {len(extracted_text)} characters "
            f"from {len(all_text)}/{total_pages} pages"
        )
        return extracted_text
