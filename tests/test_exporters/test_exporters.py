"""Tests for result exporters."""
import csv
import json

import openpyxl
import pytest

from wallet_extractor.exporters import (
    CSVExporter, ExcelExporter, JSONExporter, get_exporter, generate_output_filename,
)


class TestJSONExporter:
    """Test JSON export."""

    def test_export(self, sample_extraction_result, temp_output_dir):
        """Test transactions and metadata are written."""
        path = JSONExporter().export(sample_extraction_result, temp_output_dir / "out.json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["status"] == "parsed"
        assert data["template"] == "phonepe"
        assert data["transaction_count"] == 2
        assert data["transactions"][0]["transactionId"] == "T25030814064432917711"
        assert data["transactions"][1]["type"] == "Credit"

    def test_non_ascii_kept(self, sample_extraction_result, temp_output_dir):
        """Test text is written as UTF-8 rather than escaped."""
        sample_extraction_result.error_message = "₹ marker"
        path = JSONExporter().export(sample_extraction_result, temp_output_dir / "out.json")

        assert "₹ marker" in path.read_text(encoding="utf-8")


class TestCSVExporter:
    """Test CSV export."""

    def test_export(self, sample_extraction_result, temp_output_dir):
        """Test one row per transaction."""
        path = CSVExporter().export(sample_extraction_result, temp_output_dir / "out.csv")

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == 2
        assert rows[0]["details"] == "Paid to Nandini milk parlour"
        assert rows[0]["amount"] == "14.00"
        assert rows[0]["timestamp"] == "2025-03-08T14:30:00"
        assert rows[1]["utrNo"] == ""


class TestExcelExporter:
    """Test Excel export."""

    def test_export(self, sample_extraction_result, temp_output_dir):
        """Test workbook layout and totals."""
        path = ExcelExporter().export(sample_extraction_result, temp_output_dir / "out.xlsx")

        wb = openpyxl.load_workbook(path)
        assert wb.sheetnames == ["Transactions", "Extraction Log"]

        ws = wb["Transactions"]
        assert ws["A1"].value == "Date"
        assert ws["A2"].value == "Mar 08, 2025"
        assert ws["D2"].value == "Debit"
        assert ws["E2"].value == pytest.approx(14.0)
        assert ws["F2"].value == "T25030814064432917711"
        assert ws["A5"].value == "TOTAL CREDITS"
        assert ws["E5"].value == pytest.approx(8000.0)
        assert ws["A6"].value == "TOTAL DEBITS"
        assert ws["E6"].value == pytest.approx(14.0)

        log = wb["Extraction Log"]
        assert log["B3"].value == "PARSED"
        assert log["B4"].value == "phonepe"

    def test_empty_result(self, sample_extraction_result, temp_output_dir):
        """Test a statement with no transactions still exports."""
        sample_extraction_result.transactions = []
        path = ExcelExporter().export(sample_extraction_result, temp_output_dir / "empty.xlsx")

        ws = openpyxl.load_workbook(path)["Transactions"]
        assert ws["A3"].value == "TOTAL CREDITS"
        assert ws["E3"].value == 0


class TestExporterHelpers:
    """Test exporter lookup and file naming."""

    def test_get_exporter(self):
        """Test format lookup."""
        assert isinstance(get_exporter("json"), JSONExporter)
        assert isinstance(get_exporter("CSV"), CSVExporter)
        exporter = get_exporter("xlsx", currency="GBP")
        assert isinstance(exporter, ExcelExporter)
        assert exporter.currency == "GBP"

    def test_get_exporter_unknown(self):
        """Test unsupported formats."""
        with pytest.raises(ValueError, match="Unsupported export format"):
            get_exporter("pdf")

    def test_generate_output_filename(self, tmp_path):
        """Test naming and directory creation."""
        path = generate_output_filename("PhonePe", "csv", output_dir=tmp_path / "exports")

        assert path.parent.is_dir()
        assert path.name.startswith("phonepe_statement_")
        assert path.suffix == ".csv"
