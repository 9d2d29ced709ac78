"""
Excel exporter for wallet statement data.

Generates Excel workbook with 2 sheets:
1. Transactions - Main transaction data with credit/debit totals
2. Extraction Log - Audit trail of the run
"""
import logging
from pathlib import Path

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter

from ..models import ExtractionResult
from ..utils import to_decimal

logger = logging.getLogger(__name__)


class ExcelExporter:
    """Export extraction results to formatted Excel workbook."""

    extension = "xlsx"

    # Colors
    HEADER_COLOR = "366092"  # Dark blue
    WARNING_COLOR = "FFC7CE"  # Light red
    SUCCESS_COLOR = "C6EFCE"  # Light green
    INFO_COLOR = "FFEB9C"  # Light yellow

    CURRENCY_FORMATS = {
        'INR': '₹#,##0.00',
        'GBP': '£#,##0.00',
        'EUR': '€#,##0.00',
        'USD': '$#,##0.00',
    }

    HEADERS = [
        "Date", "Time", "Details", "Type", "Amount",
        "Transaction ID", "UTR No", "Account Reference",
    ]

    def __init__(self, currency: str = "INR"):
        """Initialize Excel exporter."""
        self.currency = currency

    def export(self, result: ExtractionResult, output_path: Path) -> Path:
        """
        Export extraction result to Excel.

        Args:
            result: Extraction result to export
            output_path: Path for output Excel file

        Returns:
            Path to created Excel file
        """
        logger.info(f"Exporting to Excel: {output_path}")

        wb = openpyxl.Workbook()

        # Remove default sheet
        if "Sheet" in wb.sheetnames:
            wb.remove(wb["Sheet"])

        self._create_transactions_sheet(wb, result)
        self._create_audit_log_sheet(wb, result)

        wb.save(output_path)
        logger.info(f"Excel export complete: {output_path}")

        return output_path

    def _create_transactions_sheet(self, wb: openpyxl.Workbook, result: ExtractionResult) -> None:
        """Create transactions sheet with formatted data."""
        ws = wb.create_sheet("Transactions", 0)
        currency_format = self.CURRENCY_FORMATS.get(self.currency.upper(), f'"{self.currency}" #,##0.00')
        amount_col = self.HEADERS.index("Amount") + 1

        # Write headers
        for col, header in enumerate(self.HEADERS, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = PatternFill(start_color=self.HEADER_COLOR, fill_type="solid")
            cell.alignment = Alignment(horizontal="center", vertical="center")

        # Write transactions
        for row, txn in enumerate(result.transactions, 2):
            values = [
                txn.date,
                txn.time,
                txn.details,
                txn.transaction_type.value,
                float(to_decimal(txn.amount)),
                txn.transaction_id,
                txn.utr_no,
                txn.account_reference,
            ]
            for col, value in enumerate(values, 1):
                ws.cell(row=row, column=col, value=value)

            ws.cell(row=row, column=amount_col).number_format = currency_format

        # Totals rows
        total_row = len(result.transactions) + 3
        totals = [
            ("TOTAL CREDITS", sum(to_decimal(t.amount) for t in result.credits)),
            ("TOTAL DEBITS", sum(to_decimal(t.amount) for t in result.debits)),
        ]
        for offset, (label, total) in enumerate(totals):
            ws.cell(row=total_row + offset, column=1, value=label).font = Font(bold=True)
            cell = ws.cell(row=total_row + offset, column=amount_col, value=float(total))
            cell.font = Font(bold=True)
            cell.number_format = currency_format
            cell.fill = PatternFill(start_color=self.INFO_COLOR, fill_type="solid")

        # Auto-size columns
        for col in range(1, len(self.HEADERS) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18

        # Details column wider
        ws.column_dimensions['C'].width = 45
        ws.column_dimensions['H'].width = 30

        # Freeze header row
        ws.freeze_panes = "A2"

    def _create_audit_log_sheet(self, wb: openpyxl.Workbook, result: ExtractionResult) -> None:
        """Create audit log sheet."""
        ws = wb.create_sheet("Extraction Log", 1)

        ws.cell(row=1, column=1, value="Extraction Audit Log")
        ws.cell(row=1, column=1).font = Font(bold=True, size=14)

        rows = [
            ("Status:", result.status.value.upper()),
            ("Template:", result.template_name or "N/A"),
            ("Extraction Method:", result.extraction_method),
            ("Lines Parsed:", result.line_count),
            ("Transaction Count:", result.transaction_count),
            ("Processing Time:", f"{result.processing_time:.2f} seconds"),
            ("Extracted At:", result.extracted_at.strftime("%Y-%m-%d %H:%M:%S")),
        ]

        row = 3
        for label, value in rows:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
            row += 1

        ws.cell(row=3, column=2).font = Font(bold=True)
        ws.cell(row=3, column=2).fill = PatternFill(
            start_color=self.SUCCESS_COLOR if result.success else self.WARNING_COLOR,
            fill_type="solid"
        )

        # Error message
        if result.error_message:
            row += 1
            ws.cell(row=row, column=1, value="Error:")
            ws.cell(row=row, column=1).font = Font(bold=True)
            ws.cell(row=row, column=2, value=result.error_message)
            ws.cell(row=row, column=2).fill = PatternFill(
                start_color=self.WARNING_COLOR,
                fill_type="solid"
            )

        ws.column_dimensions['A'].width = 25
        ws.column_dimensions['B'].width = 60
