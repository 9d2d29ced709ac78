"""Statement parser factory.

This module provides a facade that creates the parsing strategy named by a
statement template. Each strategy inherits from BaseStatementParser.

Design Pattern: Factory Method
- Encapsulates parser instantiation logic
- New layouts register a strategy name without touching callers
- Provides a single entry point for all parsing operations
"""

import logging
from typing import Dict, List, Sequence, Type, Union

from ..config import StatementTemplate
from ..models import RawLine, TransactionRecord, ParseResult
from .base_parser import BaseStatementParser
from .line_window_parser import LineWindowParser

logger = logging.getLogger(__name__)

PARSER_STRATEGIES: Dict[str, Type[BaseStatementParser]] = {
    'line_window': LineWindowParser,
}


class StatementParser:
    """
    Facade that routes to the parsing strategy configured for a template.

    Usage:
        parser = StatementParser(template)
        result = parser.parse(text)
        if result.success:
            records = result.records
    """

    def __init__(self, template: StatementTemplate):
        """
        Initialize parser with a statement template.

        Args:
            template: Statement template
        """
        self.template = template
        self._parser = self._create_parser()

    def _create_parser(self) -> BaseStatementParser:
        """
        Create the template's parsing strategy.

        Returns:
            BaseStatementParser instance

        Raises:
            ValueError: If the strategy is not supported
        """
        strategy = self.template.parser.lower()

        parser_class = PARSER_STRATEGIES.get(strategy)
        if not parser_class:
            supported = ', '.join(self.get_supported_strategies())
            raise ValueError(
                f"Unsupported parser strategy: {strategy}. "
                f"Supported strategies: {supported}"
            )

        logger.debug(f"Created {parser_class.__name__} for {self.template.name}")
        return parser_class(self.template)

    def parse(self, content: Union[str, Sequence[str]]) -> ParseResult:
        """
        Validate and parse statement text.

        Args:
            content: Full extracted text or its lines

        Returns:
            Parsed(records) or Rejected(reason, message)
        """
        return self._parser.parse(content)

    def extract(self, lines: Sequence[Union[RawLine, str]]) -> List[TransactionRecord]:
        """
        Run the extractor alone, without statement validation.

        Args:
            lines: Statement lines in reading order

        Returns:
            List of transaction records
        """
        return self._parser.extract(lines)

    @staticmethod
    def get_supported_strategies() -> List[str]:
        """Get list of supported parser strategy names."""
        return list(PARSER_STRATEGIES.keys())
