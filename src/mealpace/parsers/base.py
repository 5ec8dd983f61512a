"""Base parser class and registry for statement parsers."""

from abc import ABC, abstractmethod
from typing import ClassVar

from bs4 import BeautifulSoup

from mealpace.models import MealPlan


class StatementParser(ABC):
    """Abstract base class for meal plan statement parsers."""

    # Class attributes to be overridden by subclasses
    source_name: ClassVar[str] = "Unknown"
    page_markers: ClassVar[list[str]] = []  # Element ids that identify the page

    @classmethod
    def can_parse(cls, document: BeautifulSoup) -> bool:
        """
        Check if this parser can handle the given document.

        The default implementation looks for any of ``page_markers`` as an
        element id.
        """
        return any(document.find(id=marker) is not None for marker in cls.page_markers)

    @abstractmethod
    def parse(self, document: BeautifulSoup) -> list[MealPlan]:
        """
        Extract meal plans from a parsed statement page.

        Args:
            document: Parsed HTML document

        Returns:
            List of MealPlan objects; empty when nothing was recognised
        """
        pass


class ParserRegistry:
    """Registry for statement parsers with automatic detection."""

    _parsers: ClassVar[list[type[StatementParser]]] = []

    @classmethod
    def register(cls, parser_class: type[StatementParser]) -> type[StatementParser]:
        """
        Register a parser class. Can be used as a decorator.

        Example:
            @ParserRegistry.register
            class MyStatementParser(StatementParser):
                ...
        """
        if parser_class not in cls._parsers:
            cls._parsers.append(parser_class)
        return parser_class

    @classmethod
    def get_parser(cls, document: BeautifulSoup) -> StatementParser | None:
        """Return a parser instance for the document, or None if none match."""
        for parser_class in cls._parsers:
            if parser_class.can_parse(document):
                return parser_class()
        return None

    @classmethod
    def get_all_parsers(cls) -> list[type[StatementParser]]:
        """Get all registered parser classes."""
        return cls._parsers.copy()

    @classmethod
    def clear(cls) -> None:
        """Clear all registered parsers (mainly for testing)."""
        cls._parsers = []
