"""Asynchronous key-value storage backends.

The settings core never touches disk directly: it talks to a ``Storage``
with three operations modelled on the extension's local storage area.

- ``get(keys)`` returns the stored values for the keys that exist
- ``set(items)`` writes every item in a single atomic step
- ``clear()`` erases the whole namespace

Two backends are provided: ``MemoryStorage`` for tests and embedding, and
``JsonFileStorage`` which keeps the namespace in one JSON document.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage backend cannot read or write its data."""

    pass


class Storage(ABC):
    """Abstract asynchronous key-value namespace."""

    @abstractmethod
    async def get(self, keys: Iterable[str]) -> dict[str, Any]:
        """Fetch values for ``keys``; absent keys are omitted from the result."""

    @abstractmethod
    async def set(self, items: dict[str, Any]) -> None:
        """Persist all ``items`` in one atomic write."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every key in the namespace."""


class MemoryStorage(Storage):
    """In-process storage. Values are deep-copied on the way in and out."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.write_count = 0

    async def get(self, keys: Iterable[str]) -> dict[str, Any]:
        return {k: copy.deepcopy(self._data[k]) for k in keys if k in self._data}

    async def set(self, items: dict[str, Any]) -> None:
        self._data.update(copy.deepcopy(items))
        self.write_count += 1

    async def clear(self) -> None:
        self._data.clear()
        self.write_count += 1

    def snapshot(self) -> dict[str, Any]:
        """Copy of the whole namespace, for inspection."""
        return copy.deepcopy(self._data)


class JsonFileStorage(Storage):
    """Storage backed by a single JSON file.

    Writes go to a temporary file in the same directory which then replaces
    the target, so readers never see a half-written document. A lock
    serializes the read-modify-write cycle within one process.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt storage file {self.path}: {e}")
        except OSError as e:
            raise StorageError(f"Failed to read storage file {self.path}: {e}")

        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} does not hold a JSON object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", dir=self.path.parent, delete=False, suffix=".tmp", encoding="utf-8"
            ) as tf:
                json.dump(data, tf, indent=2, ensure_ascii=False)
                temp_name = tf.name

            Path(temp_name).replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write storage file {self.path}: {e}")

    async def get(self, keys: Iterable[str]) -> dict[str, Any]:
        keys = list(keys)
        async with self._lock:
            data = await asyncio.to_thread(self._read)
        return {k: data[k] for k in keys if k in data}

    async def set(self, items: dict[str, Any]) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            data.update(items)
            await asyncio.to_thread(self._write, data)
        logger.debug(f"Wrote keys {sorted(items)} to {self.path}")

    async def clear(self) -> None:
        async with self._lock:
            await asyncio.to_thread(self._write, {})
        logger.debug(f"Cleared storage file {self.path}")
