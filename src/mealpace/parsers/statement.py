"""Parser for the dining services meal plan statement page."""

from typing import ClassVar

from bs4 import BeautifulSoup
from bs4.element import Tag

from mealpace.models import MealPlan, Transaction
from mealpace.parsers.base import ParserRegistry, StatementParser

PLANS_ROWS = "#tbl-plans tr:not(.header-row)"
TRANSACTION_ROWS = "#tbl-trx tr:not(.header-row)"
SELECTED_PLAN = "#select-plan option[selected]"


def parse_document(html: str) -> BeautifulSoup:
    """Parse raw statement HTML into a document tree."""
    return BeautifulSoup(html, "html.parser")


def _cell_text(row: Tag, selector: str) -> str:
    cell = row.select_one(selector)
    if cell is None:
        return ""
    return cell.get_text().strip()


def extract_snapshot(document: BeautifulSoup) -> list[MealPlan]:
    """
    Extract meal plans and transactions from a statement page.

    The transactions table only ever shows the plan picked in the plan
    selector, so the whole table is attached to the plan whose name equals
    the selected option's text. Every other plan comes back with no
    transactions. Missing cells become empty strings.

    Args:
        document: Parsed statement page

    Returns:
        One MealPlan per plans-table row; empty if none were found
    """
    plans = [
        MealPlan(
            start_date=_cell_text(row, ".column0"),
            plan_name=_cell_text(row, ".column1"),
            current_balance=_cell_text(row, ".column2"),
        )
        for row in document.select(PLANS_ROWS)
    ]

    transactions = [
        Transaction(
            location=_cell_text(row, "th"),
            date_time=_cell_text(row, "td:nth-child(2)"),
            requested_amount=_cell_text(row, "td:nth-child(3)"),
            approved_amount=_cell_text(row, "td:nth-child(4)"),
        )
        for row in document.select(TRANSACTION_ROWS)
    ]

    selected = document.select_one(SELECTED_PLAN)
    if selected is None:
        return plans

    selected_name = selected.get_text().strip()
    # Only the first plan with the selected name receives the table
    for plan in plans:
        if plan.plan_name == selected_name:
            plan.transactions = transactions
            break

    return plans


@ParserRegistry.register
class DiningStatementParser(StatementParser):
    """Parser for the meal plan balance and transaction history page."""

    source_name: ClassVar[str] = "Dining Services"
    page_markers: ClassVar[list[str]] = ["tbl-plans", "tbl-trx"]

    def parse(self, document: BeautifulSoup) -> list[MealPlan]:
        """Parse plans and the selected plan's transactions."""
        return extract_snapshot(document)
