"""JSON and CSV exporters."""
import csv
import json
import logging
from pathlib import Path

from ..models import ExtractionResult

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    'date', 'time', 'details', 'type', 'amount',
    'transactionId', 'utrNo', 'accountReference', 'timestamp',
]


class JSONExporter:
    """Export as {"transactions": [...]} plus run metadata."""

    extension = "json"

    def export(self, result: ExtractionResult, output_path: Path) -> Path:
        logger.info(f"Exporting to JSON: {output_path}")
        Path(output_path).write_text(
            json.dumps(result.to_dict(), indent=2, ensure_ascii=False),
            encoding='utf-8'
        )
        return output_path


class CSVExporter:
    """Export one row per transaction."""

    extension = "csv"

    def export(self, result: ExtractionResult, output_path: Path) -> Path:
        logger.info(f"Exporting to CSV: {output_path}")
        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            for txn in result.transactions:
                writer.writerow(txn.to_dict())
        return output_path
