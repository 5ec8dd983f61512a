"""Statement parsers package."""

from mealpace.parsers.base import ParserRegistry, StatementParser
from mealpace.parsers.statement import (
    DiningStatementParser,
    extract_snapshot,
    parse_document,
)

__all__ = [
    "StatementParser",
    "ParserRegistry",
    "DiningStatementParser",
    "extract_snapshot",
    "parse_document",
]
