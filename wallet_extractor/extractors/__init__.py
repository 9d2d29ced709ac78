"""Extractors for different document types."""
from .base_extractor import BaseExtractor, ExtractionError, PasswordError
from .pdf_extractor import PDFExtractor
from .text_extractor import TextFileExtractor

__all__ = ['BaseExtractor', 'ExtractionError', 'PasswordError', 'PDFExtractor', 'TextFileExtractor']
