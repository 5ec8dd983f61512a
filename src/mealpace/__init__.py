"""mealpace - Track meal plan spending against the semester calendar."""

from mealpace.dashboard import Dashboard
from mealpace.models import Ledger, MealOption, MealPlan, Transaction
from mealpace.store import ImportStatus, JsonFileBackend, LedgerStore

__version__ = "0.1.0"
__all__ = [
    "Dashboard",
    "ImportStatus",
    "JsonFileBackend",
    "Ledger",
    "LedgerStore",
    "MealOption",
    "MealPlan",
    "Transaction",
]
