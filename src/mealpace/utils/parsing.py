"""Parsing utilities for statement pages and ledger values."""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

import requests


def parse_date(date_str: str) -> date | None:
    """
    Parse a calendar date string to a date object.

    Supported formats:
    - YYYY-MM-DD (2024-08-25)
    - MM/DD/YYYY (08/25/2024)
    - Month DD, YYYY (August 25, 2024 / Aug 25, 2024)

    Args:
        date_str: Date string to parse

    Returns:
        date object if successful, None otherwise
    """
    date_str = date_str.strip().strip('"').strip()

    if not date_str:
        return None

    formats = [
        "%Y-%m-%d",  # 2024-08-25
        "%m/%d/%Y",  # 08/25/2024
        "%B %d, %Y",  # August 25, 2024
        "%b %d, %Y",  # Aug 25, 2024
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def parse_amount(amount_str: str) -> Decimal | None:
    """
    Parse a currency string to Decimal.

    Handles:
    - Dollar signs and whitespace ($12.50, $ 12.50)
    - Thousands separators (commas)
    - Negative values (-$12.50, $-12.50 and ($12.50))

    Args:
        amount_str: Amount string to parse

    Returns:
        Decimal if successful, None otherwise
    """
    if not amount_str or not amount_str.strip():
        return None

    amount_str = amount_str.strip().strip('"').strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$\s]", "", amount_str)
    amount_str = amount_str.replace(",", "")

    if amount_str.startswith("-"):
        is_negative = True
        amount_str = amount_str[1:]

    if not amount_str:
        return None

    try:
        value = Decimal(amount_str)
    except InvalidOperation:
        return None

    if not value.is_finite():
        return None
    return -value if is_negative else value


def parse_currency(amount_str: str) -> Decimal:
    """Parse a currency string, treating anything unrecognisable as zero."""
    value = parse_amount(amount_str)
    return value if value is not None else Decimal("0")


def read_file(filepath: Path) -> str:
    """
    Read a saved statement or ledger export, trying common encodings.

    Args:
        filepath: Path to the file

    Returns:
        File content as string

    Raises:
        ValueError: If file cannot be read
    """
    if not filepath.exists():
        raise ValueError(f"File not found: {filepath}")

    encodings = ["utf-8-sig", "utf-8", "latin-1", "cp1252"]

    for encoding in encodings:
        try:
            with open(filepath, encoding=encoding) as f:
                return f.read()
        except UnicodeDecodeError:
            continue

    raise ValueError(f"Could not decode file {filepath} with any known encoding")


def fetch_url(url: str, timeout: float = 30.0) -> str:
    """
    Download a statement page.

    Args:
        url: http(s) URL of the page
        timeout: Seconds to wait for the server

    Returns:
        Response body as text

    Raises:
        ValueError: If the request fails or returns an error status
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ValueError(f"Could not fetch {url}: {e}") from e
    return response.text
