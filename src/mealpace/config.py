"""Configuration management for mealpace.

A config file is optional. It may move the storage file, replace the
enrollment calendar and override starting budgets per meal option. The
first ``config.json`` found in the working directory or the XDG config
directory is used.
"""

import json
from pathlib import Path
from typing import Any

from mealpace.models import MealOption
from mealpace.pacing import MEAL_OPTION_BUDGETS, MealOptionBudget
from mealpace.semester import FALL_2024, Period, validate_periods
from mealpace.store import get_default_storage_path
from mealpace.utils import app_dir, parse_date

CONFIG_FILENAME = "config.json"


def get_config_path() -> Path:
    """``config.json`` in the XDG config directory, where --init-config writes."""
    return app_dir("XDG_CONFIG_HOME", ".config") / CONFIG_FILENAME


def find_config_file() -> Path | None:
    """The working directory's config.json, else the XDG one, else None."""
    candidates = (Path(CONFIG_FILENAME), get_config_path())
    return next((path for path in candidates if path.is_file()), None)


def load_config(config_path: Path | None = None) -> dict[str, Any] | None:
    """
    Read the given config file, or the discovered one.

    Returns:
        The config object, or None when no path was given and none was found

    Raises:
        OSError: If the file cannot be read
        ValueError: If it is not a JSON object
    """
    path = config_path or find_config_file()
    if path is None:
        return None

    config = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(config, dict):
        raise ValueError(f"{path} must hold a JSON object")
    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> Path:
    """Write config as indented JSON, by default to the XDG location."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    return path


def get_storage_path(config: dict[str, Any] | None = None) -> Path:
    """Where the ledger is stored, from config or the XDG data directory."""
    if config and (storage_path := config.get("storage_path")):
        return Path(storage_path).expanduser()
    return get_default_storage_path()


def get_periods(config: dict[str, Any] | None = None) -> tuple[Period, ...]:
    """Get the enrollment calendar.

    Args:
        config: Loaded JSON config

    Returns:
        Periods from config, or the built-in fall 2024 calendar

    Raises:
        ValueError: If a configured period is malformed
    """
    if not config or not config.get("periods"):
        return FALL_2024

    periods = []
    for i, entry in enumerate(config["periods"], start=1):
        start = parse_date(str(entry.get("start", "")))
        end = parse_date(str(entry.get("end", "")))
        if start is None or end is None:
            raise ValueError(f"Period {i} needs valid 'start' and 'end' dates")
        periods.append(Period(name=entry.get("name", f"Period {i}"), start=start, end=end))

    validate_periods(periods)
    return tuple(periods)


def get_meal_option_budgets(
    config: dict[str, Any] | None = None,
) -> dict[MealOption, MealOptionBudget]:
    """Get starting budgets per meal option, with config overrides applied.

    Config entries may set ``blocks`` and/or ``flex_dollars`` for any of
    Green, Blue or Red; unknown option names are ignored.
    """
    budgets = dict(MEAL_OPTION_BUDGETS)
    if not config:
        return budgets

    for name, override in config.get("meal_options", {}).items():
        option = MealOption.from_value(name)
        if option is None:
            continue
        current = budgets[option]
        budgets[option] = MealOptionBudget(
            blocks=int(override.get("blocks", current.blocks)),
            flex_dollars=float(override.get("flex_dollars", current.flex_dollars)),
        )
    return budgets


def create_default_config() -> dict[str, Any]:
    """Create a default configuration mirroring the built-in calendar."""
    return {
        "storage_path": None,
        "periods": [
            {
                "name": period.name,
                "start": period.start.isoformat(),
                "end": period.end.isoformat(),
            }
            for period in FALL_2024
        ],
        "meal_options": {
            option.value: {"blocks": budget.blocks, "flex_dollars": budget.flex_dollars}
            for option, budget in MEAL_OPTION_BUDGETS.items()
        },
    }
