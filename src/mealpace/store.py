"""Persisted ledger state and the mutating operations front-ends call."""

import json
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from bs4 import BeautifulSoup

from mealpace import ledger as ledger_ops
from mealpace.models import Ledger
from mealpace.parsers.base import ParserRegistry
from mealpace.parsers.statement import parse_document
from mealpace.utils import app_dir

# Fixed key the state is stored under
STORAGE_KEY = "mealpace-storage"
STORAGE_VERSION = 0


class ImportStatus(str, Enum):
    """Outcome of feeding a statement or backup to the store."""

    SUCCESS = "success"
    NO_DATA = "noData"
    ERROR = "error"


class StorageBackend(Protocol):
    """Somewhere to keep the serialised ledger between runs."""

    def load(self) -> dict[str, Any] | None: ...

    def save(self, state: dict[str, Any]) -> None: ...


class MemoryBackend:
    """Keeps state in memory; used in tests and when embedding."""

    def __init__(self, state: dict[str, Any] | None = None) -> None:
        self.state = state
        self.saves = 0

    def load(self) -> dict[str, Any] | None:
        return self.state

    def save(self, state: dict[str, Any]) -> None:
        self.state = state
        self.saves += 1


def get_default_storage_path() -> Path:
    """Storage file in the XDG data directory."""
    return app_dir("XDG_DATA_HOME", ".local", "share") / f"{STORAGE_KEY}.json"


class JsonFileBackend:
    """Stores state as ``{"state": ..., "version": 0}`` in a JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or get_default_storage_path()

    def load(self) -> dict[str, Any] | None:
        """
        Read saved state.

        Returns:
            The state dict, or None if nothing has been saved yet

        Raises:
            ValueError: If the file exists but is not valid storage
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt storage file {self.path}: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("state"), dict):
            raise ValueError(f"Unrecognised storage file {self.path}")
        return payload["state"]  # type: ignore[no-any-return]

    def save(self, state: dict[str, Any]) -> None:
        """Write state, creating parent directories as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"state": state, "version": STORAGE_VERSION}, f, indent=2)
            f.write("\n")


class LedgerStore:
    """
    Owns the ledger for one user.

    The ledger is loaded from the backend on construction and written back
    after every mutation. Mutators that accept outside input report an
    ImportStatus and leave the ledger alone unless they succeed.

    Usage:
        store = LedgerStore(JsonFileBackend())
        status = store.merge_snapshot(html)
        print(store.export_ledger())
    """

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend
        state = backend.load()
        self._ledger = Ledger.from_dict(state) if state else Ledger()
        self.last_error: str | None = None

    @property
    def ledger(self) -> Ledger:
        """Current ledger."""
        return self._ledger

    def _commit(self, ledger: Ledger) -> None:
        self._ledger = ledger
        self.backend.save(ledger.to_dict())

    def merge_snapshot(self, document: str | BeautifulSoup) -> ImportStatus:
        """
        Merge a statement page into the ledger.

        Args:
            document: Raw HTML or an already parsed page

        Returns:
            SUCCESS, NO_DATA when no plans were found, or ERROR when the
            page could not be parsed
        """
        self.last_error = None
        try:
            if isinstance(document, str):
                document = parse_document(document)
            parser = ParserRegistry.get_parser(document)
            if parser is None:
                self.last_error = "No parser found for this page"
                return ImportStatus.NO_DATA
            plans = parser.parse(document)
        except Exception as e:
            self.last_error = f"Parse error: {e}"
            return ImportStatus.ERROR

        if not plans:
            self.last_error = "No meal plans found on this page"
            return ImportStatus.NO_DATA

        self._commit(ledger_ops.merge_snapshot(self._ledger, plans))
        return ImportStatus.SUCCESS

    def import_ledger(self, data: str | dict[str, Any]) -> ImportStatus:
        """
        Merge an exported ledger (JSON text or the decoded object).

        Returns:
            SUCCESS, NO_DATA when the export holds no plans, or ERROR when it
            is not a ledger export
        """
        self.last_error = None
        try:
            if isinstance(data, str):
                data = json.loads(data)
            merged = ledger_ops.import_ledger(self._ledger, data)
        except ValueError as e:
            self.last_error = f"Import error: {e}"
            return ImportStatus.ERROR

        if not any(isinstance(plan, dict) for plan in data["mealPlans"]):  # type: ignore[index]
            self.last_error = "No meal plans found in this export"
            return ImportStatus.NO_DATA

        self._commit(merged)
        return ImportStatus.SUCCESS

    def clear_all(self) -> None:
        """Remove all plans and the detected meal option."""
        self._commit(ledger_ops.clear_all(self._ledger))

    def toggle_dark_mode(self) -> bool:
        """Flip the dark mode preference and return the new value."""
        self._commit(replace(self._ledger, dark_mode=not self._ledger.dark_mode))
        return self._ledger.dark_mode

    def export_ledger(self) -> str:
        """Indented JSON export of the ledger."""
        return ledger_ops.export_ledger(self._ledger)
