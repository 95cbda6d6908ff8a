from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def read(self) -> Dict[str, Any] | None: ...

    def write(self, values: Mapping[str, Any]) -> None: ...


class MemoryStore:
    """In-process store; keeps a private copy of the last written mapping."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: Dict[str, Any] | None = copy.deepcopy(dict(values)) if values is not None else None
        self.writes = 0

    def read(self) -> Dict[str, Any] | None:
        return copy.deepcopy(self._values) if self._values is not None else None

    def write(self, values: Mapping[str, Any]) -> None:
        self._values = copy.deepcopy(dict(values))
        self.writes += 1


class JsonFileStore:
    """Keeps the game keys in a single JSON document on disk."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> Dict[str, Any] | None:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return None
        # ValueError covers JSONDecodeError and UnicodeDecodeError.
        except (ValueError, RecursionError, OSError) as e:
            logger.warning("Could not load game state from %s: %s", self._path, e)
            return None
        if not isinstance(payload, dict):
            logger.warning("Ignoring game state in %s: expected a JSON object", self._path)
            return None
        return payload

    def write(self, values: Mapping[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as handle:
                json.dump(dict(values), handle, indent=2)
        except OSError as e:
            logger.warning("Could not save game state to %s: %s", self._path, e)
