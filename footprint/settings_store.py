"""Settings persistence with default backfilling.

``SettingsStore`` owns the single ``settings`` record in storage. Every
read fills in fields missing from the stored document; every write stores
the complete record under one key.
"""

from __future__ import annotations

import logging
from typing import Any

from footprint import exclude_list
from footprint.models import SETTINGS_KEY, Settings
from footprint.storage import Storage

logger = logging.getLogger(__name__)


class UnknownSettingError(Exception):
    """Raised when an update names a field that Settings does not have."""

    pass


class SettingsStore:
    """Load, update and reset the extension settings.

    Attributes:
        storage: Backend holding the ``settings`` key.
    """

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def load(self) -> Settings:
        """Read the stored settings, using defaults for missing fields.

        Returns:
            Complete Settings record.
        """
        data = await self.storage.get([SETTINGS_KEY])
        stored = data.get(SETTINGS_KEY) or {}
        settings = Settings.model_validate(stored)
        logger.debug(f"Loaded settings ({len(stored)} stored fields)")
        return settings

    async def update(self, key: str, value: Any) -> Settings:
        """Replace one field and persist the whole record.

        The new value must already have the field's declared type; nothing
        is coerced. A ``scanInterval`` outside the offered choices is stored
        as given. Stored keys that Settings does not define are kept.

        Args:
            key: Field name, camelCase (``scanInterval``) or snake_case.
            value: New value for the field.

        Returns:
            The saved Settings record.

        Raises:
            UnknownSettingError: If ``key`` is not a Settings field.
            pydantic.ValidationError: If ``value`` has the wrong type.
        """
        field_name = Settings.field_name_for(key)
        if field_name is None:
            raise UnknownSettingError(f"Unknown setting: {key}")

        current = await self.load()
        data = current.model_dump()
        data[field_name] = value
        updated = Settings.model_validate(data, strict=True)

        await self.storage.set({SETTINGS_KEY: updated.to_storage()})
        logger.info(f"Setting '{field_name}' updated")
        return updated

    async def reset_to_defaults(self) -> Settings:
        """Persist the default settings record.

        User categories are left as they are.
        """
        defaults = Settings()
        await self.storage.set({SETTINGS_KEY: defaults.to_storage()})
        logger.info("Settings reset to defaults")
        return defaults

    async def save_exclude_list(self, text: str) -> Settings:
        """Store the exclude list from newline-separated text."""
        return await self.update("excludeList", exclude_list.decode(text))

    async def exclude_text(self) -> str:
        """Current exclude list as newline-separated text."""
        settings = await self.load()
        return exclude_list.encode(settings.exclude_list)
