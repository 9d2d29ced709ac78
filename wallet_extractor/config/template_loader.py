"""Load and manage statement template configurations."""
import logging
from pathlib import Path
from typing import Dict, Optional, List
import yaml

from .settings import STATEMENT_TEMPLATES_DIR, DEFAULT_LOOKAHEAD_WINDOW, DEFAULT_CURRENCY

logger = logging.getLogger(__name__)


class StatementTemplate:
    """
    Represents one statement family's parsing tables.

    Every keyword, prefix and label the parser matches against comes from
    here, so a new wallet layout is a YAML file rather than a code change.
    """

    def __init__(self, config_dict: dict, name: str):
        """Initialize template from dictionary."""
        self.name = name
        self._config = config_dict

    @property
    def display_name(self) -> str:
        """Human readable name (e.g., 'PhonePe')."""
        return self._config.get('display_name', self.name)

    @property
    def parser(self) -> str:
        """Parser strategy used for this template."""
        return self._config.get('parser', 'line_window')

    @property
    def statement_keywords(self) -> List[str]:
        """Markers that identify a statement of this family."""
        return self._config.get('statement_keywords', [])

    @property
    def month_abbreviations(self) -> List[str]:
        """Month tokens accepted in anchor date lines."""
        return self._config.get('month_abbreviations', [])

    @property
    def meridiem_tokens(self) -> List[str]:
        """AM/PM tokens accepted in anchor time lines."""
        return self._config.get('meridiem_tokens', ['AM', 'PM'])

    @property
    def currency_markers(self) -> List[str]:
        """Currency codes or symbols that introduce an amount."""
        return self._config.get('currency_markers', [])

    @property
    def detail_prefixes(self) -> Dict[str, List[str]]:
        """Counterparty line prefixes keyed by direction ('credit'/'debit')."""
        return self._config.get('detail_prefixes', {})

    @property
    def transaction_id_labels(self) -> List[str]:
        """Labels preceding the external transaction identifier."""
        return self._config.get('transaction_id_labels', [])

    @property
    def utr_labels(self) -> List[str]:
        """Labels preceding the bank reference (UTR) number."""
        return self._config.get('utr_labels', [])

    @property
    def account_reference_phrases(self) -> List[str]:
        """Phrases preceding a masked account token."""
        return self._config.get('account_reference_phrases', [])

    @property
    def direction_keywords(self) -> Dict[str, List[str]]:
        """Keywords used to infer direction from an amount line."""
        return self._config.get('direction_keywords', {})

    @property
    def type_labels(self) -> Dict[str, List[str]]:
        """Standalone direction words (a 'Debit'/'Credit' column cell)."""
        return self._config.get('type_labels', {})

    @property
    def lookahead_window(self) -> int:
        """Maximum distance from an anchor at which fields are still attributed."""
        return int(self._config.get('lookahead_window', DEFAULT_LOOKAHEAD_WINDOW))

    @property
    def require_details(self) -> bool:
        """Whether a draft needs a details line to be emitted."""
        return bool(self._config.get('require_details', True))

    @property
    def currency(self) -> str:
        """Currency code (e.g., 'INR')."""
        return self._config.get('currency', DEFAULT_CURRENCY)


class StatementTemplateLoader:
    """Loads and manages statement templates."""

    def __init__(self, config_dir: Path = STATEMENT_TEMPLATES_DIR):
        """
        Initialize template loader.

        Args:
            config_dir: Directory containing template YAML files
        """
        self.config_dir = Path(config_dir)
        self._templates: Dict[str, StatementTemplate] = {}
        self._load_all_templates()

    def _load_all_templates(self) -> None:
        """Load all template files."""
        if not self.config_dir.exists():
            logger.warning(f"Statement template directory not found: {self.config_dir}")
            return

        yaml_files = sorted(self.config_dir.glob("*.yaml")) + sorted(self.config_dir.glob("*.yml"))

        if not yaml_files:
            logger.warning(f"No statement templates found in {self.config_dir}")
            return

        for yaml_file in yaml_files:
            try:
                self._load_template(yaml_file)
            except (OSError, yaml.YAMLError, AttributeError) as e:
                logger.error(f"Failed to load template {yaml_file}: {e}")

        logger.info(f"Loaded {len(self._templates)} statement templates")

    def _load_template(self, yaml_file: Path) -> None:
        """
        Load a single template file.

        Args:
            yaml_file: Path to YAML template file
        """
        with open(yaml_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        # Each YAML file has a top-level key with the template name
        # e.g., phonepe: {...}
        for name, config_dict in data.items():
            if isinstance(config_dict, dict):
                self._templates[name.lower()] = StatementTemplate(config_dict, name.lower())
                logger.debug(f"Loaded template {name}")

    def get_template(self, name: str) -> Optional[StatementTemplate]:
        """
        Get a template by name.

        Args:
            name: Template name (case-insensitive)

        Returns:
            StatementTemplate or None if not found
        """
        return self._templates.get(name.lower())

    def detect_template(self, text: str) -> Optional[StatementTemplate]:
        """
        Detect the statement family from its text using keywords.

        Args:
            text: Extracted text from statement

        Returns:
            StatementTemplate or None if no template matches
        """
        text_lower = text.lower()

        for name, template in self._templates.items():
            for keyword in template.statement_keywords:
                if keyword.lower() in text_lower:
                    logger.info(f"Detected statement template: {name}")
                    return template

        logger.warning("Could not detect statement template")
        return None

    def get_all_templates(self) -> List[str]:
        """Get list of all template names."""
        return list(self._templates.keys())

    @property
    def template_count(self) -> int:
        """Get count of loaded templates."""
        return len(self._templates)


# Singleton instance
_loader: Optional[StatementTemplateLoader] = None


def get_template_loader() -> StatementTemplateLoader:
    """Get singleton instance of StatementTemplateLoader."""
    global _loader
    if _loader is None:
        _loader = StatementTemplateLoader()
    return _loader
