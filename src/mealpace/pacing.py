"""Pacing analytics: how fast blocks and flex dollars are being spent."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from mealpace.models import MealOption, MealPlan, PlanKind
from mealpace.utils import parse_currency


@dataclass(frozen=True)
class MealOptionBudget:
    """Blocks and flex dollars a meal option starts the semester with."""

    blocks: int
    flex_dollars: float


# 6 blocks are used up during orientation and already subtracted
MEAL_OPTION_BUDGETS: dict[MealOption, MealOptionBudget] = {
    MealOption.GREEN: MealOptionBudget(blocks=292 - 6, flex_dollars=270.0),
    MealOption.BLUE: MealOptionBudget(blocks=252 - 6, flex_dollars=520.0),
    MealOption.RED: MealOptionBudget(blocks=205 - 6, flex_dollars=850.0),
}


class PaceStatus(str, Enum):
    AHEAD = "Ahead"
    BEHIND = "Behind"


@dataclass(frozen=True)
class ResourcePacing:
    """
    Spending pace for one resource (blocks or flex dollars).

    Values are unrounded. Rates that cannot be computed are None:
    ``actual_per_day`` before the first day, ``projected_per_day`` once
    every day has elapsed, and ``ideal_per_day`` for an empty calendar.
    """

    budget: float
    remaining: float
    used: float
    ideal_per_day: float | None
    actual_per_day: float | None
    ideal_used: float
    status: PaceStatus
    delta: float
    projected_per_day: float | None


@dataclass(frozen=True)
class PacingReport:
    """Pacing for the current meal option at a given day."""

    option: MealOption
    day_index: int
    total_days: int
    blocks: ResourcePacing | None
    flex: ResourcePacing | None
    average_value_per_block: float | None
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SeriesPoint:
    x: int
    y: float


@dataclass(frozen=True)
class UsageSeries:
    """Ideal and actual remaining balance, for charting."""

    ideal: list[SeriesPoint]
    actual: list[SeriesPoint]


def _matching_plans(
    plans: Sequence[MealPlan], option: MealOption, kind: PlanKind
) -> list[MealPlan]:
    return [plan for plan in plans if plan.tag.tier is option and plan.tag.kind is kind]


def select_block_plan(plans: Sequence[MealPlan], option: MealOption) -> MealPlan | None:
    """First plan holding the option's meal blocks (not flex, not guest)."""
    matches = _matching_plans(plans, option, PlanKind.BLOCK)
    return matches[0] if matches else None


def select_flex_plan(plans: Sequence[MealPlan], option: MealOption) -> MealPlan | None:
    """First plan holding the option's flex dollars."""
    matches = _matching_plans(plans, option, PlanKind.FLEX)
    return matches[0] if matches else None


def _resource_pacing(
    budget: float, remaining: float, day_index: int, total_days: int
) -> ResourcePacing:
    used = budget - remaining

    if total_days > 0:
        ideal_per_day: float | None = budget / total_days
        ideal_used = budget - budget * (total_days - day_index) / total_days
    else:
        ideal_per_day = None
        ideal_used = 0.0

    actual_per_day = used / day_index if day_index > 0 else None
    days_left = total_days - day_index
    projected_per_day = remaining / days_left if days_left > 0 else None

    return ResourcePacing(
        budget=budget,
        remaining=remaining,
        used=used,
        ideal_per_day=ideal_per_day,
        actual_per_day=actual_per_day,
        ideal_used=ideal_used,
        status=PaceStatus.AHEAD if used < ideal_used else PaceStatus.BEHIND,
        delta=abs(used - ideal_used),
        projected_per_day=projected_per_day,
    )


def average_value_per_block(block_plan: MealPlan) -> float | None:
    """Mean approved amount per block swipe; None when nothing was swiped."""
    if not block_plan.transactions:
        return None
    total = sum(float(parse_currency(tx.approved_amount)) for tx in block_plan.transactions)
    return total / len(block_plan.transactions)


def compute_pacing(
    option: MealOption,
    plans: Sequence[MealPlan],
    day_index: int,
    total_days: int,
    budgets: dict[MealOption, MealOptionBudget] | None = None,
) -> PacingReport:
    """
    Compare actual spending against an even spread over the semester.

    Each block-plan transaction is one block. Remaining flex dollars come
    from the flex plan's reported balance rather than summing transactions.

    Args:
        option: Current meal option
        plans: Plans in the ledger
        day_index: Days on campus so far
        total_days: Days on campus in the semester
        budgets: Starting budgets per option (defaults to MEAL_OPTION_BUDGETS)

    Returns:
        PacingReport; a resource is None when its plan is missing
    """
    budget = (budgets or MEAL_OPTION_BUDGETS)[option]
    warnings: list[str] = []

    block_matches = _matching_plans(plans, option, PlanKind.BLOCK)
    flex_matches = _matching_plans(plans, option, PlanKind.FLEX)
    for label, matches in (("block", block_matches), ("flex", flex_matches)):
        if len(matches) > 1:
            names = ", ".join(f"{p.plan_name} ({p.start_date})" for p in matches)
            warnings.append(
                f"{len(matches)} {option.value} {label} plans found, using the first: {names}"
            )

    blocks = None
    average = None
    if block_matches:
        block_plan = block_matches[0]
        remaining_blocks = budget.blocks - len(block_plan.transactions)
        blocks = _resource_pacing(
            float(budget.blocks), float(remaining_blocks), day_index, total_days
        )
        average = average_value_per_block(block_plan)

    flex = None
    if flex_matches:
        remaining_flex = float(parse_currency(flex_matches[0].current_balance))
        flex = _resource_pacing(budget.flex_dollars, remaining_flex, day_index, total_days)

    return PacingReport(
        option=option,
        day_index=day_index,
        total_days=total_days,
        blocks=blocks,
        flex=flex,
        average_value_per_block=average,
        warnings=warnings,
    )


def build_usage_series(
    plan: MealPlan | None,
    budget: float,
    is_block_series: bool,
    day_index: int,
    total_days: int,
) -> UsageSeries:
    """
    Remaining balance over time, ideal and actual.

    The ideal line falls evenly from ``budget`` on day 0 to zero on the
    last day. The actual line starts at ``budget`` and steps once per
    transaction in ledger order: one block per block transaction, or the
    signed approved amount per flex transaction, so refunds step back up.
    Statement dates are not used for placement. When fewer steps than
    ``day_index`` were taken, the last value is held flat until
    ``day_index``.
    """
    if total_days > 0:
        ideal = [
            SeriesPoint(x=day, y=budget - day * (budget / total_days))
            for day in range(total_days + 1)
        ]
    else:
        ideal = [SeriesPoint(x=0, y=budget)]

    if plan is None:
        return UsageSeries(ideal=ideal, actual=[])

    remaining = budget
    actual = [SeriesPoint(x=0, y=remaining)]
    for step, tx in enumerate(plan.transactions, start=1):
        if is_block_series:
            remaining -= 1
        else:
            remaining -= float(parse_currency(tx.approved_amount))
        actual.append(SeriesPoint(x=step, y=remaining))

    if actual[-1].x < day_index:
        actual.append(SeriesPoint(x=day_index, y=remaining))

    return UsageSeries(ideal=ideal, actual=actual)
