"""Read-only view of the ledger for display layers."""

from collections.abc import Sequence
from datetime import date

from mealpace.models import Ledger, MealOption, PlanKind
from mealpace.pacing import (
    MEAL_OPTION_BUDGETS,
    MealOptionBudget,
    PacingReport,
    UsageSeries,
    build_usage_series,
    compute_pacing,
    select_block_plan,
    select_flex_plan,
)
from mealpace.semester import FALL_2024, Period, current_day_index, total_days


class Dashboard:
    """
    Derived figures for one ledger on one day.

    Usage:
        dashboard = Dashboard(store.ledger)
        report = dashboard.get_pacing_report()
        series = dashboard.get_usage_series(PlanKind.FLEX)
    """

    def __init__(
        self,
        ledger: Ledger,
        periods: Sequence[Period] = FALL_2024,
        budgets: dict[MealOption, MealOptionBudget] | None = None,
        today: date | None = None,
    ) -> None:
        """
        Initialize dashboard.

        Args:
            ledger: Ledger to report on
            periods: Enrollment periods of the semester
            budgets: Starting budgets per meal option
            today: Date to report for (defaults to today)
        """
        self.ledger = ledger
        self.periods = periods
        self.budgets = budgets or MEAL_OPTION_BUDGETS
        self.today = today or date.today()

    @property
    def total_days(self) -> int:
        return total_days(self.periods)

    @property
    def day_index(self) -> int:
        return current_day_index(self.periods, self.today)

    def get_current_meal_option(self) -> MealOption | None:
        """Meal option detected from the latest statement."""
        return self.ledger.current_meal_option

    def get_pacing_report(self) -> PacingReport | None:
        """Pacing for the current meal option, or None if none is known."""
        option = self.get_current_meal_option()
        if option is None:
            return None
        return compute_pacing(
            option,
            self.ledger.meal_plans,
            self.day_index,
            self.total_days,
            budgets=self.budgets,
        )

    def get_usage_series(self, kind: PlanKind) -> UsageSeries | None:
        """
        Chart data for blocks (PlanKind.BLOCK) or flex dollars (PlanKind.FLEX).

        Returns:
            UsageSeries, or None if no meal option is known

        Raises:
            ValueError: For plan kinds that have no budget
        """
        option = self.get_current_meal_option()
        if option is None:
            return None

        budget = self.budgets[option]
        if kind is PlanKind.BLOCK:
            plan = select_block_plan(self.ledger.meal_plans, option)
            start = float(budget.blocks)
        elif kind is PlanKind.FLEX:
            plan = select_flex_plan(self.ledger.meal_plans, option)
            start = budget.flex_dollars
        else:
            raise ValueError(f"No usage series for {kind.value} plans")

        return build_usage_series(
            plan,
            start,
            kind is PlanKind.BLOCK,
            self.day_index,
            self.total_days,
        )
