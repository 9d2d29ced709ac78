"""Global settings and configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Directories
DATA_DIR = PROJECT_ROOT / "data"
STATEMENT_TEMPLATES_DIR = Path(
    os.getenv("STATEMENT_TEMPLATES_DIR", str(DATA_DIR / "statement_templates"))
)
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(PROJECT_ROOT / "output")))
LOGS_DIR = Path(os.getenv("LOGS_DIR", str(PROJECT_ROOT / "logs")))

# Template used when the caller does not name one
DEFAULT_TEMPLATE = os.getenv("DEFAULT_TEMPLATE", "phonepe")

# Processing settings
MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB", "10"))
DEFAULT_LOOKAHEAD_WINDOW = 10

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = LOGS_DIR / "extractor.log"

# Export settings
EXPORT_FORMATS = ["json", "csv", "xlsx"]
DEFAULT_EXPORT_FORMAT = os.getenv("EXPORT_FORMAT", "json")

# Currency settings
DEFAULT_CURRENCY = "INR"
CURRENCY_SYMBOLS = {
    "INR": "₹",
    "GBP": "£",
    "USD": "$",
    "EUR": "€"
}
