"""
Main extraction pipeline.

Coordinates text extraction, template selection, parsing and export.
"""
import logging
import time
from pathlib import Path
from typing import List, Optional

from .config import get_template_loader, StatementTemplate, StatementTemplateLoader
from .config.settings import DEFAULT_TEMPLATE
from .extractors import BaseExtractor, PDFExtractor, TextFileExtractor, ExtractionError, PasswordError
from .exporters import get_exporter, generate_output_filename
from .models import ExtractionResult, ExtractionStatus, Parsed, split_lines
from .parsers import StatementParser
from .utils import log_extraction_audit

logger = logging.getLogger(__name__)

AUTO_TEMPLATE = "auto"


class ExtractionPipeline:
    """
    Main pipeline for wallet statement extraction.

    Phases:
    1. Extract - Get text from PDF (with password) or a text dump
    2. Transform - Validate and parse transactions with the statement template
    3. Load - Optionally export to JSON, CSV or Excel

    The four outcomes are kept distinct so callers can tell a wrong password
    from a wrong document from a statement that simply has no transactions.
    """

    def __init__(
        self,
        template_loader: Optional[StatementTemplateLoader] = None,
        extractors: Optional[List[BaseExtractor]] = None
    ):
        """Initialize pipeline with extractors and template loader."""
        self.template_loader = template_loader or get_template_loader()
        self.extractors = extractors if extractors is not None else [PDFExtractor(), TextFileExtractor()]

    def process(
        self,
        file_path: Path,
        password: Optional[str] = None,
        template_name: Optional[str] = None,
        output_path: Optional[Path] = None,
        export_format: Optional[str] = None
    ) -> ExtractionResult:
        """
        Process a statement file end-to-end.

        Args:
            file_path: Path to statement file (PDF or text)
            password: Candidate password for encrypted PDFs
            template_name: Template to parse with ("auto" to detect; default from settings)
            output_path: Export path (auto-generated when only export_format is given)
            export_format: json, csv or xlsx (inferred from output_path suffix if omitted)

        Returns:
            ExtractionResult with records and status
        """
        file_path = Path(file_path)
        logger.info(f"Processing statement: {file_path.name}")
        start_time = time.time()

        # Phase 1: EXTRACT
        extractor = self._select_extractor(file_path)
        if extractor is None:
            result = self._create_error_result(
                ExtractionStatus.EXTRACTION_FAILED,
                f"Unsupported file type: {file_path.suffix or file_path.name}",
                start_time
            )
            self._audit(file_path, result)
            return result

        try:
            text = extractor.extract(file_path, password=password)
        except PasswordError as e:
            result = self._create_error_result(ExtractionStatus.PASSWORD_REQUIRED, str(e), start_time, extractor.method)
            self._audit(file_path, result)
            return result
        except (ExtractionError, FileNotFoundError) as e:
            result = self._create_error_result(ExtractionStatus.EXTRACTION_FAILED, str(e), start_time, extractor.method)
            self._audit(file_path, result)
            return result

        # Phase 2: TRANSFORM
        result = self.process_text(text, template_name=template_name)
        result.extraction_method = extractor.method
        result.processing_time = time.time() - start_time

        # Phase 3: LOAD
        if result.success and (output_path or export_format):
            try:
                output_path = self.export(result, output_path, export_format)
                logger.info(f"Export complete: {output_path}")
            except (OSError, ValueError) as e:
                logger.exception(f"Export failed: {e}")
                result.error_message = f"Export failed: {e}"

        self._audit(file_path, result)
        return result

    def process_text(self, text: str, template_name: Optional[str] = None) -> ExtractionResult:
        """
        Validate and parse already-extracted statement text.

        Args:
            text: Statement text
            template_name: Template to parse with

        Returns:
            ExtractionResult (PARSED or REJECTED)
        """
        start_time = time.time()

        template = self._resolve_template(text, template_name)
        if template is None:
            return self._create_error_result(
                ExtractionStatus.EXTRACTION_FAILED,
                f"Unknown statement template: {template_name}. "
                f"Available templates: {self.template_loader.get_all_templates()}",
                start_time,
                method="text"
            )

        outcome = StatementParser(template).parse(text)
        line_count = len(split_lines(text or ""))

        if not isinstance(outcome, Parsed):
            logger.warning(f"Statement rejected: {outcome.message}")
            return ExtractionResult(
                status=ExtractionStatus.REJECTED,
                template_name=template.name,
                extraction_method="text",
                line_count=line_count,
                error_message=outcome.message,
                processing_time=time.time() - start_time
            )

        if not outcome.records:
            logger.info("Statement recognised but contains no transactions")

        return ExtractionResult(
            status=ExtractionStatus.PARSED,
            transactions=outcome.records,
            template_name=template.name,
            extraction_method="text",
            line_count=line_count,
            processing_time=time.time() - start_time
        )

    def export(
        self,
        result: ExtractionResult,
        output_path: Optional[Path] = None,
        export_format: Optional[str] = None
    ) -> Path:
        """
        Export a result, inferring the format from the path when needed.

        Raises:
            ValueError: If the format is not supported
        """
        if export_format is None:
            export_format = Path(output_path).suffix.lstrip('.') if output_path else "json"

        if output_path is None:
            output_path = generate_output_filename(result.template_name or "statement", export_format)

        template = self.template_loader.get_template(result.template_name or "")
        currency = template.currency if template else "INR"
        return get_exporter(export_format, currency=currency).export(result, Path(output_path))

    def _select_extractor(self, file_path: Path) -> Optional[BaseExtractor]:
        for extractor in self.extractors:
            if extractor.can_handle(file_path):
                return extractor
        return None

    def _resolve_template(self, text: str, template_name: Optional[str]) -> Optional[StatementTemplate]:
        """Pick the template by name, by detection, or from settings."""
        if template_name and template_name.lower() == AUTO_TEMPLATE:
            detected = self.template_loader.detect_template(text or "")
            if detected:
                return detected
            # Fall back so validation produces a proper rejection
            template_name = None

        return self.template_loader.get_template(template_name or DEFAULT_TEMPLATE)

    def _create_error_result(
        self,
        status: ExtractionStatus,
        error_message: str,
        start_time: float,
        method: str = "unknown"
    ) -> ExtractionResult:
        logger.error(error_message)
        return ExtractionResult(
            status=status,
            extraction_method=method,
            error_message=error_message,
            processing_time=time.time() - start_time
        )

    def _audit(self, file_path: Path, result: ExtractionResult) -> None:
        log_extraction_audit(file_path, result)
