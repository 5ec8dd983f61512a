"""Tests for the dashboard read accessors."""

from collections.abc import Callable
from datetime import date

import pytest

from mealpace.dashboard import Dashboard
from mealpace.ledger import merge_snapshot
from mealpace.models import Ledger, MealOption, MealPlan, PlanKind
from mealpace.pacing import PaceStatus
from mealpace.parsers import extract_snapshot, parse_document


@pytest.fixture
def green_ledger(blocks_statement: str, flex_statement: str) -> Ledger:
    """Ledger built from both Green statements."""
    ledger = merge_snapshot(Ledger(), extract_snapshot(parse_document(blocks_statement)))
    return merge_snapshot(ledger, extract_snapshot(parse_document(flex_statement)))


class TestDashboard:
    """Tests for Dashboard."""

    def test_no_option(self) -> None:
        """Test nothing to report before any upload."""
        dashboard = Dashboard(Ledger(), today=date(2024, 9, 1))

        assert dashboard.get_current_meal_option() is None
        assert dashboard.get_pacing_report() is None
        assert dashboard.get_usage_series(PlanKind.BLOCK) is None

    def test_days(self, green_ledger: Ledger) -> None:
        """Test day counts come from the calendar."""
        dashboard = Dashboard(green_ledger, today=date(2024, 9, 1))

        assert dashboard.total_days == 99
        assert dashboard.day_index == 8

    def test_pacing_report(self, green_ledger: Ledger) -> None:
        """Test the report covers blocks and flex dollars."""
        dashboard = Dashboard(green_ledger, today=date(2024, 9, 1))

        report = dashboard.get_pacing_report()

        assert report is not None
        assert report.option is MealOption.GREEN
        assert report.day_index == 8
        assert report.blocks is not None
        assert report.blocks.remaining == 283
        assert report.blocks.status is PaceStatus.AHEAD
        assert report.flex is not None
        assert report.flex.remaining == pytest.approx(240.0)
        assert report.average_value_per_block == pytest.approx((11.0 + 9.5 + 10.25) / 3)

    def test_block_series(self, green_ledger: Ledger) -> None:
        """Test the block series uses the block plan."""
        dashboard = Dashboard(green_ledger, today=date(2024, 9, 1))

        series = dashboard.get_usage_series(PlanKind.BLOCK)

        assert series is not None
        assert series.ideal[0].y == 286.0
        assert series.ideal[-1].x == 99
        assert [p.y for p in series.actual[:4]] == [286.0, 285.0, 284.0, 283.0]
        assert series.actual[-1].x == 8

    def test_flex_series(self, green_ledger: Ledger) -> None:
        """Test the flex series uses approved amounts."""
        dashboard = Dashboard(green_ledger, today=date(2024, 9, 1))

        series = dashboard.get_usage_series(PlanKind.FLEX)

        assert series is not None
        assert series.actual[0].y == 270.0
        assert series.actual[3].y == pytest.approx(270.0 - 4.75 - 14.0 - 11.25)

    def test_guest_series_rejected(self, green_ledger: Ledger) -> None:
        """Test guest plans have no usage series."""
        dashboard = Dashboard(green_ledger, today=date(2024, 9, 1))

        with pytest.raises(ValueError):
            dashboard.get_usage_series(PlanKind.GUEST)

    def test_missing_flex_plan(self, make_plan: Callable[..., MealPlan]) -> None:
        """Test a missing plan gives an empty actual line."""
        ledger = merge_snapshot(Ledger(), [make_plan("Red Meal Blocks")])
        dashboard = Dashboard(ledger, today=date(2024, 9, 1))

        series = dashboard.get_usage_series(PlanKind.FLEX)

        assert series is not None
        assert series.actual == []
        assert series.ideal[0].y == 850.0
