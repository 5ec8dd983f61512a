"""Utility functions for mealpace."""

from mealpace.utils.parsing import (
    fetch_url,
    parse_amount,
    parse_currency,
    parse_date,
    read_file,
)
from mealpace.utils.paths import app_dir

__all__ = [
    "app_dir",
    "parse_date",
    "parse_amount",
    "parse_currency",
    "read_file",
    "fetch_url",
]
