"""Pytest configuration and fixtures."""
import pytest
import yaml
from pathlib import Path

from wallet_extractor.config import StatementTemplate, StatementTemplateLoader
from wallet_extractor.models import TransactionRecord, TransactionType, ExtractionResult, ExtractionStatus
from wallet_extractor.parsers import LineWindowParser


REPO_ROOT = Path(__file__).resolve().parents[1]
TEMPLATES_DIR = REPO_ROOT / "data" / "statement_templates"

# One block as printed on a PhonePe statement
SAMPLE_BLOCK = [
    "Mar 08, 2025",
    "2:30 PM",
    "Paid to Nandini milk parlour",
    "Transaction ID : T25030814064432917711",
    "UTR No : 841302199001",
    "Debited from XX5779",
    "INR 14.00",
]


@pytest.fixture(scope="session")
def templates_dir():
    """Directory holding the shipped statement templates."""
    return TEMPLATES_DIR


@pytest.fixture(scope="session")
def phonepe_config():
    """Raw PhonePe template dictionary from YAML."""
    with open(TEMPLATES_DIR / "phonepe.yaml", encoding="utf-8") as f:
        return yaml.safe_load(f)["phonepe"]


@pytest.fixture
def make_template(phonepe_config):
    """Build a PhonePe template with overridden settings."""
    def _make(**overrides):
        return StatementTemplate({**phonepe_config, **overrides}, "phonepe")
    return _make


@pytest.fixture
def phonepe_template(make_template):
    """PhonePe template exactly as shipped."""
    return make_template()


@pytest.fixture
def parser(phonepe_template):
    """Line-window parser for the PhonePe template."""
    return LineWindowParser(phonepe_template)


@pytest.fixture
def template_loader(templates_dir):
    """Loader reading the shipped templates."""
    return StatementTemplateLoader(templates_dir)


@pytest.fixture
def sample_lines():
    """One complete transaction block."""
    return list(SAMPLE_BLOCK)


@pytest.fixture
def sample_record():
    """Record expected from sample_lines."""
    return TransactionRecord(
        date="Mar 08, 2025",
        time="2:30 PM",
        details="Paid to Nandini milk parlour",
        transaction_type=TransactionType.DEBIT,
        transaction_id="T25030814064432917711",
        utr_no="841302199001",
        account_reference="Debited from XX5779",
        amount="14.00",
    )


@pytest.fixture
def sample_extraction_result(sample_record):
    """Parsed result with one debit and one credit."""
    credit = TransactionRecord(
        date="Mar 07, 2025",
        time="11:05 AM",
        details="Received from M K BUILDING MATERIALS",
        transaction_type=TransactionType.CREDIT,
        amount="8000.00",
    )
    return ExtractionResult(
        status=ExtractionStatus.PARSED,
        transactions=[sample_record, credit],
        template_name="phonepe",
        extraction_method="text",
        line_count=12,
        processing_time=0.5,
    )


@pytest.fixture
def fixtures_dir():
    """Get path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def temp_output_dir(tmp_path):
    """Create temporary output directory."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir
