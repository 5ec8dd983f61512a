"""Merging statement snapshots and backups into the ledger."""

import json
from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from mealpace.models import Ledger, MealOption, MealPlan, Transaction


def dedupe_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Drop repeated transactions, keeping the first occurrence of each key."""
    seen: set[tuple[str, str, str]] = set()
    unique: list[Transaction] = []

    for tx in transactions:
        if tx.key not in seen:
            seen.add(tx.key)
            unique.append(tx)

    return unique


def infer_meal_option(
    plans: Iterable[MealPlan], fallback: MealOption | None = None
) -> MealOption | None:
    """Return the tier of the last plan naming one, else the fallback."""
    detected = None
    for plan in plans:
        if plan.tag.tier is not None:
            detected = plan.tag.tier
    return detected or fallback


def merge_snapshot(ledger: Ledger, new_plans: Iterable[MealPlan]) -> Ledger:
    """
    Merge freshly extracted plans into a ledger.

    Plans already in the ledger (same start date and name) take the incoming
    balance and gain the incoming transactions; other plans are appended.
    Transactions are deduplicated on (date_time, location, approved_amount)
    so merging the same snapshot twice changes nothing.

    Args:
        ledger: Current ledger (left untouched)
        new_plans: Plans from a snapshot or backup

    Returns:
        The merged ledger
    """
    new_plans = list(new_plans)
    merged: list[MealPlan] = [
        replace(plan, transactions=list(plan.transactions)) for plan in ledger.meal_plans
    ]
    index = {plan.identity: i for i, plan in enumerate(merged)}

    for new_plan in new_plans:
        position = index.get(new_plan.identity)
        if position is None:
            index[new_plan.identity] = len(merged)
            merged.append(
                replace(new_plan, transactions=dedupe_transactions(new_plan.transactions))
            )
            continue

        existing = merged[position]
        merged[position] = replace(
            existing,
            current_balance=new_plan.current_balance,
            transactions=dedupe_transactions([*existing.transactions, *new_plan.transactions]),
        )

    return replace(
        ledger,
        meal_plans=merged,
        current_meal_option=infer_meal_option(new_plans, ledger.current_meal_option),
    )


def import_ledger(ledger: Ledger, data: Any) -> Ledger:
    """
    Merge an exported ledger document back in.

    The plans go through :func:`merge_snapshot`. An explicit
    ``currentMealOption`` in the document overrides the inferred tier.

    Raises:
        ValueError: If the document has no plan list
    """
    if not isinstance(data, dict):
        raise ValueError("Ledger import must be a JSON object")

    raw_plans = data.get("mealPlans")
    if not isinstance(raw_plans, list):
        raise ValueError("Ledger import has no 'mealPlans' list")

    plans = [MealPlan.from_dict(plan) for plan in raw_plans if isinstance(plan, dict)]
    merged = merge_snapshot(ledger, plans)

    option = MealOption.from_value(data.get("currentMealOption"))
    if option is not None:
        merged = replace(merged, current_meal_option=option)
    return merged


def clear_all(ledger: Ledger) -> Ledger:
    """Forget every plan and the inferred tier. Preferences are kept."""
    return replace(ledger, meal_plans=[], current_meal_option=None)


def export_ledger(ledger: Ledger) -> str:
    """Serialise plans and the current tier as indented JSON."""
    data = ledger.to_dict()
    del data["darkMode"]
    return json.dumps(data, indent=2)
