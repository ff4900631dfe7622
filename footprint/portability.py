"""Export, full reset and wipe of everything the extension stores.

Export reads the settings, the user categories and the records produced by
the analysis engines (``events`` and ``contentAnalyses``) and assembles
them into a dated JSON artifact. It never writes to storage.

Clearing is irreversible, so ``clear_all`` only runs after the caller's
confirmation callback agrees.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable

from footprint.categories import CategoryStore
from footprint.models import (
    CONTENT_ANALYSES_KEY,
    EVENTS_KEY,
    SETTINGS_KEY,
    USER_CATEGORIES_KEY,
    ExportSnapshot,
    OperationResult,
    Settings,
    StatusMessage,
)
from footprint.settings_store import SettingsStore
from footprint.storage import Storage
from footprint.utils.logging import LogContext

logger = logging.getLogger(__name__)


class DataPortability:
    """Snapshot export and destructive reset operations.

    Attributes:
        storage: Backend holding the whole namespace.
        settings: Store for the settings record.
        categories: Store for the user category map.
    """

    def __init__(
        self,
        storage: Storage,
        settings: SettingsStore | None = None,
        categories: CategoryStore | None = None,
    ) -> None:
        self.storage = storage
        self.settings = settings or SettingsStore(storage)
        self.categories = categories or CategoryStore(storage)

    async def export_snapshot(self) -> ExportSnapshot:
        """Assemble the current state into an export snapshot.

        Returns:
            Snapshot with analysis records copied as stored (empty lists
            when absent), settings with defaults filled in, and the time of
            export.
        """
        external = await self.storage.get([EVENTS_KEY, CONTENT_ANALYSES_KEY])
        settings = await self.settings.load()
        categories = await self.categories.load()

        snapshot = ExportSnapshot(
            events=external.get(EVENTS_KEY) or [],
            content_analyses=external.get(CONTENT_ANALYSES_KEY) or [],
            settings=settings,
            user_categories=categories,
        )
        logger.debug(
            f"Snapshot assembled: {len(snapshot.events)} events, "
            f"{len(snapshot.content_analyses)} analyses, "
            f"{len(snapshot.user_categories)} categories"
        )
        return snapshot

    async def export_to_file(self, directory: Path) -> Path:
        """Write the export snapshot as a dated JSON file.

        Args:
            directory: Directory to write into; created if missing.

        Returns:
            Path of the written file.
        """
        with LogContext("Exporting data", logger=logger):
            snapshot = await self.export_snapshot()
            directory = Path(directory)
            directory.mkdir(parents=True, exist_ok=True)
            path = directory / snapshot.filename
            await asyncio.to_thread(path.write_text, snapshot.to_json(), encoding="utf-8")

        logger.info(f"{StatusMessage.DATA_EXPORTED}: {path}")
        return path

    async def reset_all(self) -> OperationResult:
        """Restore default settings and drop all user categories.

        Both records are written in one storage call.
        """
        await self.storage.set(
            {
                SETTINGS_KEY: Settings().to_storage(),
                USER_CATEGORIES_KEY: {},
            }
        )
        logger.info("Settings and user categories reset to defaults")
        return OperationResult.success(StatusMessage.SETTINGS_RESET)

    async def clear_all(self, confirm: Callable[[], bool]) -> OperationResult:
        """Erase the whole storage namespace once the caller confirms.

        This removes settings, user categories and every analysis record.
        The caller should reload its state afterwards.

        Args:
            confirm: Called once before anything is erased; returning False
                cancels the operation.

        Returns:
            Success when cleared, or ``ok=False`` when the user declined.
        """
        if not confirm():
            logger.info("Clear all data cancelled by user")
            return OperationResult.failure(None, StatusMessage.CLEAR_CANCELLED)

        await self.storage.clear()
        logger.warning("All stored data cleared")
        return OperationResult.success(StatusMessage.ALL_DATA_CLEARED)
