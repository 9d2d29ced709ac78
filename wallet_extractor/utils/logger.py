"""Logging setup for the extractor and its per-run audit trail.

Two outputs are configured:
- the package logger ("wallet_extractor"): console at LOG_LEVEL, plus a
  DEBUG file log under LOGS_DIR that keeps classifier traces;
- the audit logger ("wallet_extractor.audit"): one line per processed file,
  always at INFO, written to its own file next to the main log.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from ..config.settings import LOG_LEVEL, LOG_FILE

AUDIT_LOGGER_NAME = "wallet_extractor.audit"
AUDIT_LOG_FILENAME = "audit.log"

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s %(levelname)-8s %(name)s:%(lineno)d %(message)s'
AUDIT_FORMAT = '%(asctime)s %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def resolve_level(level: Union[str, int, None]) -> int:
    """Map a level name or number to a logging level, defaulting to INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level or "").upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logger(
    name: str = "wallet_extractor",
    level: Union[str, int, None] = None,
    log_file: Optional[Path] = LOG_FILE
) -> logging.Logger:
    """
    Configure the package logger once.

    Console output goes to stderr so it never mixes with the CLI's rich
    tables on stdout. The console honours `level` (LOG_LEVEL by default);
    the file log always records DEBUG.

    Args:
        name: Logger name
        level: Console level name or number (LOG_LEVEL if None)
        log_file: DEBUG log path, or None for console only

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    console_level = resolve_level(LOG_LEVEL if level is None else level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)
    logger.setLevel(console_level)

    if log_file is None:
        return logger

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
    except OSError as e:
        logger.warning(f"Could not set up file logging: {e}")
        return logger

    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)
    logger.setLevel(logging.DEBUG)

    attach_audit_log(log_file.parent / AUDIT_LOG_FILENAME)
    return logger


def attach_audit_log(audit_file: Path) -> logging.Logger:
    """
    Send audit lines to their own file, independent of LOG_LEVEL.

    Attaching the same path twice is a no-op.

    Args:
        audit_file: Audit log path

    Returns:
        The audit logger
    """
    audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
    audit_logger.setLevel(logging.INFO)

    target = str(Path(audit_file).resolve())
    for handler in audit_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return audit_logger

    try:
        handler = logging.FileHandler(audit_file, encoding='utf-8')
    except OSError as e:
        audit_logger.warning(f"Could not open audit log {audit_file}: {e}")
        return audit_logger

    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(AUDIT_FORMAT, datefmt=DATE_FORMAT))
    audit_logger.addHandler(handler)
    return audit_logger


def log_extraction_audit(file_path: Path, result) -> None:
    """
    Write one audit line for a processed file.

    Args:
        file_path: Path to the processed file
        result: ExtractionResult of the run
    """
    fields = {
        "file": Path(file_path).name,
        "status": result.status.value,
        "method": result.extraction_method,
        "template": result.template_name or "-",
        "lines": result.line_count,
        "transactions": result.transaction_count,
        "seconds": f"{result.processing_time:.2f}",
    }
    if result.error_message:
        fields["error"] = result.error_message

    logging.getLogger(AUDIT_LOGGER_NAME).info(
        "AUDIT: " + " | ".join(f"{k}={v}" for k, v in fields.items())
    )
