"""Exporters for extraction results."""
from datetime import datetime
from pathlib import Path
from typing import Optional

from .excel_exporter import ExcelExporter
from .text_exporters import JSONExporter, CSVExporter

EXPORTERS = {
    'json': JSONExporter,
    'csv': CSVExporter,
    'xlsx': ExcelExporter,
}


def get_exporter(export_format: str, currency: str = "INR"):
    """
    Create the exporter for a format.

    Args:
        export_format: One of json, csv, xlsx
        currency: Currency code used for spreadsheet number formats

    Raises:
        ValueError: If the format is not supported
    """
    exporter_class = EXPORTERS.get(export_format.lower())
    if exporter_class is None:
        raise ValueError(
            f"Unsupported export format: {export_format}. "
            f"Supported formats: {', '.join(EXPORTERS)}"
        )
    if exporter_class is ExcelExporter:
        return ExcelExporter(currency=currency)
    return exporter_class()


def generate_output_filename(
    template_name: str,
    export_format: str,
    output_dir: Optional[Path] = None
) -> Path:
    """
    Generate standardized output filename.

    Format: {template}_statement_{YYYY-MM-DD}_{HHMMSS}.{ext}
    """
    from ..config.settings import OUTPUT_DIR

    if output_dir is None:
        output_dir = OUTPUT_DIR

    output_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    return output_dir / f"{template_name.lower()}_statement_{stamp}.{export_format.lower()}"


__all__ = [
    'ExcelExporter',
    'JSONExporter',
    'CSVExporter',
    'EXPORTERS',
    'get_exporter',
    'generate_output_filename',
]
