"""Data models for meal plan statements and the persisted ledger."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MealOption(str, Enum):
    """Meal option tier, each with a fixed block and flex-dollar budget."""

    GREEN = "Green"
    BLUE = "Blue"
    RED = "Red"

    @classmethod
    def from_value(cls, value: Any) -> "MealOption | None":
        """Return the tier named by value, or None if it is not a tier."""
        for option in cls:
            if value == option.value:
                return option
        return None


class PlanKind(str, Enum):
    """Kind of sub-account a plan row describes."""

    BLOCK = "Block"
    FLEX = "Flex"
    GUEST = "Guest"


@dataclass(frozen=True)
class PlanTag:
    """Tier and kind parsed from a plan name."""

    tier: MealOption | None
    kind: PlanKind

    @classmethod
    def from_plan_name(cls, plan_name: str) -> "PlanTag":
        """
        Parse a plan name such as "Green Flex Dollars" into a tag.

        The first tier (Green, Blue, Red) contained in the name wins.
        "Flex" takes precedence over "Guest" when both appear.
        """
        tier = None
        for option in MealOption:
            if option.value in plan_name:
                tier = option
                break

        if PlanKind.FLEX.value in plan_name:
            kind = PlanKind.FLEX
        elif PlanKind.GUEST.value in plan_name:
            kind = PlanKind.GUEST
        else:
            kind = PlanKind.BLOCK

        return cls(tier=tier, kind=kind)


@dataclass(frozen=True)
class Transaction:
    """One charge against a meal plan, as printed on the statement."""

    location: str
    date_time: str
    requested_amount: str
    approved_amount: str

    @property
    def key(self) -> tuple[str, str, str]:
        """Identity used to drop duplicates across merges."""
        return (self.date_time, self.location, self.approved_amount)

    def to_dict(self) -> dict[str, str]:
        """Convert to the camelCase export format."""
        return {
            "location": self.location,
            "dateTime": self.date_time,
            "requestedAmount": self.requested_amount,
            "approvedAmount": self.approved_amount,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """Build from the export format; missing fields become empty strings."""
        return cls(
            location=str(data.get("location") or ""),
            date_time=str(data.get("dateTime") or ""),
            requested_amount=str(data.get("requestedAmount") or ""),
            approved_amount=str(data.get("approvedAmount") or ""),
        )


@dataclass
class MealPlan:
    """A named sub-account on the statement with its transaction history."""

    start_date: str
    plan_name: str
    current_balance: str
    transactions: list[Transaction] = field(default_factory=list)
    tag: PlanTag = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.tag = PlanTag.from_plan_name(self.plan_name)

    @property
    def identity(self) -> tuple[str, str]:
        """Plans are unique by start date and name."""
        return (self.start_date, self.plan_name)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase export format."""
        return {
            "startDate": self.start_date,
            "planName": self.plan_name,
            "currentBalance": self.current_balance,
            "transactions": [tx.to_dict() for tx in self.transactions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MealPlan":
        """Build from the export format."""
        raw_transactions = data.get("transactions") or []
        if not isinstance(raw_transactions, list):
            raise ValueError("Plan 'transactions' must be a list")
        return cls(
            start_date=str(data.get("startDate") or ""),
            plan_name=str(data.get("planName") or ""),
            current_balance=str(data.get("currentBalance") or ""),
            transactions=[
                Transaction.from_dict(tx) for tx in raw_transactions if isinstance(tx, dict)
            ],
        )


@dataclass
class Ledger:
    """All meal plan history known to the tracker."""

    meal_plans: list[MealPlan] = field(default_factory=list)
    current_meal_option: MealOption | None = None
    dark_mode: bool = False

    def find_plan(self, identity: tuple[str, str]) -> MealPlan | None:
        """Return the plan with the given (start_date, plan_name), if any."""
        for plan in self.meal_plans:
            if plan.identity == identity:
                return plan
        return None

    def to_dict(self) -> dict[str, Any]:
        """Full persisted state, including the dark mode preference."""
        return {
            "darkMode": self.dark_mode,
            "mealPlans": [plan.to_dict() for plan in self.meal_plans],
            "currentMealOption": (
                self.current_meal_option.value if self.current_meal_option else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ledger":
        """Restore persisted state."""
        raw_plans = data.get("mealPlans") or []
        if not isinstance(raw_plans, list):
            raise ValueError("'mealPlans' must be a list")
        return cls(
            meal_plans=[
                MealPlan.from_dict(plan)
                for plan in raw_plans
                if isinstance(plan, dict)
            ],
            current_meal_option=MealOption.from_value(data.get("currentMealOption")),
            dark_mode=bool(data.get("darkMode", False)),
        )
