"""
Onboarding State Store

Durable storage for the onboarding record. The whole record is written as one
blob so the step id and the schema version can never be observed out of step.
"""

import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path
from typing import Optional

from dayflow_onboarding.wizard.exceptions import PersistenceError
from dayflow_onboarding.wizard.logging_config import get_logger


logger = get_logger("store")


@dataclass(frozen=True)
class PersistedState:
    """The durable onboarding record."""
    step_id: int = 0
    schema_version: int = 0
    completed: bool = False
    selected_provider: Optional[str] = None
    started: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PersistedState":
        """Build a record from stored data. Missing or mistyped keys use defaults."""
        defaults = cls()
        values = {}
        for f in fields(cls):
            value = data.get(f.name, getattr(defaults, f.name))
            if f.name in ("step_id", "schema_version"):
                if isinstance(value, bool) or not isinstance(value, int):
                    value = 0
            elif f.name in ("completed", "started"):
                value = bool(value)
            elif value is not None and not isinstance(value, str):
                value = None
            values[f.name] = value
        return cls(**values)

    def evolve(self, **changes) -> "PersistedState":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)


class StateStore(ABC):
    """Key-value store for the onboarding record."""

    @abstractmethod
    def load(self) -> PersistedState:
        """Read the current record. Absent data reads as defaults."""

    @abstractmethod
    def save(self, state: PersistedState):
        """Write the full record atomically.

        Raises:
            PersistenceError: If the record could not be written
        """

    @abstractmethod
    def clear(self):
        """Forget all onboarding progress."""


class MemoryStore(StateStore):
    """In-process store, for embedding and tests."""

    def __init__(self, initial: Optional[PersistedState] = None):
        self._state = initial or PersistedState()
        self._lock = threading.Lock()
        self.writes = 0

    def load(self) -> PersistedState:
        with self._lock:
            return self._state

    def save(self, state: PersistedState):
        with self._lock:
            self._state = state
            self.writes += 1

    def clear(self):
        with self._lock:
            self._state = PersistedState()


class JsonFileStore(StateStore):
    """Stores the record as a JSON file, replaced atomically on every write."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> PersistedState:
        if not self.path.exists():
            return PersistedState()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable onboarding state %s: %s", self.path, e)
            return PersistedState()
        if not isinstance(data, dict):
            logger.warning("Ignoring onboarding state %s: not a JSON object", self.path)
            return PersistedState()
        return PersistedState.from_dict(data)

    def save(self, state: PersistedState):
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(state.to_dict(), f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(
                "Could not save onboarding progress",
                path=str(self.path),
                details=str(e)
            ) from e
        logger.debug("Saved onboarding state: %s", state)

    def clear(self):
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise PersistenceError(
                "Could not clear onboarding progress",
                path=str(self.path),
                details=str(e)
            ) from e
