"""Tests for the line-window statement parser."""
import json

import pytest

from wallet_extractor.models import Parsed, Rejected, RejectionReason, TransactionType
from wallet_extractor.parsers import LineWindowParser

DATE = "Mar 08, 2025"
TIME = "2:30 PM"


def filler(start, stop):
    """Lines that match no field rule."""
    return [f"Footer text {n}" for n in range(start, stop)]


class TestEndToEnd:
    """Full blocks through parse()."""

    def test_single_block(self, parser, sample_lines, sample_record):
        """Test a complete block produces exactly one record."""
        result = parser.parse(sample_lines)

        assert isinstance(result, Parsed)
        assert result.success
        assert result.records == [sample_record]

    def test_single_block_dict(self, parser, sample_lines):
        """Test record serialisation of a complete block."""
        record = parser.parse(sample_lines).records[0]

        assert record.to_dict() == {
            "date": "Mar 08, 2025",
            "time": "2:30 PM",
            "details": "Paid to Nandini milk parlour",
            "type": "Debit",
            "transactionId": "T25030814064432917711",
            "utrNo": "841302199001",
            "accountReference": "Debited from XX5779",
            "amount": "14.00",
            "timestamp": "2025-03-08T14:30:00",
        }

    def test_text_input_matches_line_input(self, parser, sample_lines):
        """Test that a joined string and a line list parse the same."""
        assert parser.parse("\n".join(sample_lines)) == parser.parse(sample_lines)

    def test_statement_fixture(self, parser, fixtures_dir):
        """Test a multi-page statement against its expected output."""
        text = (fixtures_dir / "phonepe_statement.txt").read_text(encoding="utf-8")
        expected = json.loads(
            (fixtures_dir / "phonepe_statement.expected.json").read_text(encoding="utf-8")
        )

        result = parser.parse(text)

        assert result.success
        assert [r.to_dict() for r in result.records] == expected

    def test_idempotent(self, parser, fixtures_dir):
        """Test that parsing the same input twice gives equal results."""
        text = (fixtures_dir / "phonepe_statement.txt").read_text(encoding="utf-8")

        assert parser.parse(text) == parser.parse(text)

    def test_order_preserved(self, parser):
        """Test records come out in anchor order."""
        lines = ["Transaction Statement"]
        for n, day in enumerate(["10", "03", "21"]):
            lines += [f"Mar {day}, 2025", TIME, f"Paid to Shop {n}", "INR 1.00"]

        result = parser.parse(lines)

        assert [r.details for r in result.records] == ["Paid to Shop 0", "Paid to Shop 1", "Paid to Shop 2"]
        assert [r.date for r in result.records] == ["Mar 10, 2025", "Mar 03, 2025", "Mar 21, 2025"]


class TestValidationGate:
    """Validation runs before extraction."""

    def test_rejects_document_without_markers(self, parser):
        """Test a block-shaped document with no statement marker is rejected."""
        result = parser.parse([DATE, TIME, "Paid to Shop", "INR 5.00"])

        assert isinstance(result, Rejected)
        assert not result.success
        assert result.reason is RejectionReason.UNRECOGNISED_STATEMENT
        assert "PhonePe" in result.message

    def test_rejects_empty_document(self, parser):
        """Test empty and blank input."""
        assert parser.parse("").reason is RejectionReason.EMPTY_DOCUMENT
        assert parser.parse(["", "   "]).reason is RejectionReason.EMPTY_DOCUMENT

    def test_extract_not_called_on_rejection(self, parser, monkeypatch):
        """Test the extractor is never invoked for a rejected document."""
        calls = []
        monkeypatch.setattr(parser, "extract", lambda lines: calls.append(lines) or [])

        parser.parse("Hello, this is a grocery list")

        assert calls == []

    def test_recognised_statement_without_transactions(self, parser):
        """Test a real statement with no blocks is Parsed with no records."""
        result = parser.parse("Transaction Statement\nNo transactions in this period")

        assert result == Parsed(records=[])
        assert result.success


class TestAnchors:
    """Anchor handling during extraction."""

    def test_back_to_back_anchors_discarded(self, parser):
        """Test anchors with nothing between them produce no records."""
        assert parser.extract([DATE, TIME, "Mar 09, 2025", "3:00 PM"]) == []

    def test_date_without_time_opens_nothing(self, parser):
        """Test a lone date line is not an anchor."""
        assert parser.extract([DATE, "Paid to Shop", "INR 10.00"]) == []

    def test_lone_date_inside_block_does_not_truncate_fields(self, parser):
        """Test a stray date line inside a block is noise, not a block end."""
        lines = [DATE, TIME, "Statement period", "Feb 01, 2025", "Paid to Shop", "INR 5.00"]

        records = parser.extract(lines)

        assert len(records) == 1
        assert records[0].details == "Paid to Shop"
        assert records[0].amount == "5.00"
        assert records[0].date == DATE

    def test_preamble_ignored(self, parser):
        """Test field-like lines before the first anchor are not attributed."""
        lines = ["Paid to Someone Else", "INR 99.00", DATE, TIME, "Paid to Shop", "INR 5.00"]

        records = parser.extract(lines)

        assert len(records) == 1
        assert records[0].details == "Paid to Shop"
        assert records[0].amount == "5.00"

    def test_trailing_anchor_at_end(self, parser):
        """Test a date as the last line opens nothing."""
        records = parser.extract([DATE, TIME, "Paid to Shop", "INR 5.00", "Mar 09, 2025"])

        assert len(records) == 1

    def test_never_more_records_than_anchors(self, parser, fixtures_dir):
        """Test record count is bounded by anchor count."""
        text = (fixtures_dir / "phonepe_statement.txt").read_text(encoding="utf-8")
        lines = text.splitlines()
        anchors = sum(
            1 for a, b in zip(lines, lines[1:])
            if parser.anchor_detector.is_date(a) and parser.anchor_detector.is_time(b)
        )

        assert len(parser.extract(lines)) <= anchors


class TestDiscardPolicy:
    """Emit or discard decisions."""

    def test_account_reference_only_block_discarded(self, parser):
        """Test a block with only an account line is noise."""
        assert parser.extract([DATE, TIME, "Paid by XX5779"]) == []

    def test_amount_without_details_discarded_by_default(self, parser):
        """Test details are required by default."""
        assert parser.extract([DATE, TIME, "Debit INR 30.00"]) == []

    def test_amount_without_details_kept_when_details_optional(self, make_template):
        """Test the lenient policy keeps a block with only an amount."""
        parser = LineWindowParser(make_template(require_details=False))

        records = parser.extract([DATE, TIME, "Debit INR 30.00"])

        assert len(records) == 1
        assert records[0].details == ""
        assert records[0].amount == "30.00"
        assert records[0].transaction_type is TransactionType.DEBIT

    def test_lenient_policy_still_discards_empty_blocks(self, make_template):
        """Test a block with no details, amount or type is dropped."""
        parser = LineWindowParser(make_template(require_details=False))

        assert parser.extract([DATE, TIME, "UTR No : 12345", "Mar 09, 2025", "3:00 PM"]) == []

    def test_details_without_amount_emitted_with_defaults(self, parser):
        """Test missing fields take their defaults."""
        records = parser.extract([DATE, TIME, "Received from Bob"])

        assert len(records) == 1
        record = records[0]
        assert record.transaction_type is TransactionType.CREDIT
        assert record.amount == "0.00"
        assert record.transaction_id == ""
        assert record.utr_no == ""
        assert record.account_reference == ""


class TestLookaheadWindow:
    """Fields are only attributed near their anchor."""

    def test_field_at_window_edge_attributed(self, parser):
        """Test a line at offset 10 from the date line is used."""
        lines = [DATE, TIME, "Paid to Shop"] + filler(3, 10) + ["INR 14.00"]
        assert len(lines) == 11

        assert parser.extract(lines)[0].amount == "14.00"

    def test_field_past_window_ignored(self, parser):
        """Test a line at offset 11 from the date line is not used."""
        lines = [DATE, TIME, "Paid to Shop"] + filler(3, 11) + ["INR 14.00"]
        assert len(lines) == 12

        records = parser.extract(lines)

        assert len(records) == 1
        assert records[0].amount == "0.00"

    def test_anchor_past_window_still_detected(self, parser):
        """Test anchors are found after the window closes."""
        lines = (
            [DATE, TIME, "Paid to Shop"] + filler(3, 11) + ["INR 14.00"]
            + ["Mar 09, 2025", "3:00 PM", "Received from Bob", "INR 5.00"]
        )

        records = parser.extract(lines)

        assert len(records) == 2
        assert records[0].amount == "0.00"
        assert records[1].details == "Received from Bob"
        assert records[1].amount == "5.00"

    def test_split_amount_at_window_edge(self, parser):
        """Test a marker line at the edge may take the number line after it."""
        lines = [DATE, TIME, "Paid to Shop"] + filler(3, 10) + ["INR", "14.00"]

        assert parser.extract(lines)[0].amount == "14.00"

    def test_configured_window(self, make_template):
        """Test the window comes from the template."""
        parser = LineWindowParser(make_template(lookahead_window=3))

        records = parser.extract([DATE, TIME, "Paid to Shop", "Footer text", "INR 9.00"])

        assert records[0].amount == "0.00"


class TestFieldMerging:
    """How classified lines update the open block."""

    def test_details_first_wins(self, parser):
        """Test a second details line does not replace the first."""
        records = parser.extract([DATE, TIME, "Paid to Shop", "Received from Bob"])

        assert records[0].details == "Paid to Shop"
        assert records[0].transaction_type is TransactionType.DEBIT

    def test_details_type_beats_amount_direction(self, parser):
        """Test the details prefix decides direction over amount-line words."""
        records = parser.extract([DATE, TIME, "Paid to Grocer", "Credit INR 20.00"])

        assert records[0].transaction_type is TransactionType.DEBIT
        assert records[0].amount == "20.00"

    def test_details_type_overrides_earlier_inference(self, parser):
        """Test details seen after an amount line still set the type."""
        records = parser.extract([DATE, TIME, "Received INR 50.00", "Paid to Grocer"])

        assert records[0].transaction_type is TransactionType.DEBIT
        assert records[0].amount == "50.00"

    def test_type_label_does_not_override_details(self, parser):
        """Test a bare 'Credit' line keeps the details direction."""
        records = parser.extract([DATE, TIME, "Paid to Grocer", "Credit", "INR 20.00"])

        assert records[0].transaction_type is TransactionType.DEBIT

    def test_later_identifier_replaces_earlier(self, parser):
        """Test repeated identifier lines keep the last value."""
        records = parser.extract([
            DATE, TIME, "Paid to Shop",
            "Transaction ID : T1", "Transaction ID : T2",
            "UTR No : 111", "UTR No : 222",
        ])

        assert records[0].transaction_id == "T2"
        assert records[0].utr_no == "222"

    def test_split_amount(self, parser):
        """Test a marker line followed by a number line."""
        records = parser.extract([
            DATE, TIME, "Received from Bob", "₹", "1,250.00", "UTR No : 506612345678",
        ])

        assert records[0].amount == "1250.00"
        assert records[0].utr_no == "506612345678"

    def test_marker_without_number(self, parser):
        """Test an amount line with no usable number gives 0.00."""
        records = parser.extract([DATE, TIME, "Paid to Shop", "INR abc"])

        assert len(records) == 1
        assert records[0].amount == "0.00"

    def test_oversized_amount(self, parser):
        """Test a run of digits too long for Decimal precision gives 0.00."""
        records = parser.extract([DATE, TIME, "Paid to Shop", "INR " + "9" * 27 + ".00", "UTR No : 123"])

        assert len(records) == 1
        assert records[0].amount == "0.00"
        assert records[0].utr_no == "123"

    @pytest.mark.parametrize("amount_line,expected", [
        ("INR 1,234.5", "1234.50"),
        ("₹ 8000.00", "8000.00"),
        ("INR 2,00,000", "200000.00"),
        ("₹250", "250.00"),
    ])
    def test_amount_normalisation(self, parser, amount_line, expected):
        """Test amounts are normalised to two decimals."""
        records = parser.extract([DATE, TIME, "Paid to Shop", amount_line])

        assert records[0].amount == expected

    def test_paid_by_is_account_reference(self, parser):
        """Test 'Paid by' lines are account references, not details."""
        records = parser.extract([DATE, TIME, "Received from Bob", "Paid by XX1234"])

        assert records[0].details == "Received from Bob"
        assert records[0].account_reference == "Paid by XX1234"

    def test_short_window_warns(self, make_template, caplog):
        """Test a window too small for any field is reported."""
        with caplog.at_level("WARNING"):
            LineWindowParser(make_template(lookahead_window=1))

        assert "Lookahead window 1" in caplog.text
