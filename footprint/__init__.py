"""Digital Footprint - settings and site-category store for the tracking extension.

Holds the feature flags, the scan exclude list and the user's site
categories, and exports or resets everything the extension stores.

Quick Start:
    >>> import asyncio
    >>> from footprint import CategoryStore, MemoryStorage
    >>> store = CategoryStore(MemoryStorage())
    >>> asyncio.run(store.add_domain("productivity", "https://github.com")).message
    'Added github.com to productivity category'

CLI Usage:
    $ footprint settings show
    $ footprint categories add productivity github.com
    $ footprint export -o ./exports
"""

__version__ = "0.1.0"

from footprint.categories import CategoryStore
from footprint.domain import normalize_domain
from footprint.models import (
    Category,
    ErrorKind,
    ExportSnapshot,
    OperationResult,
    ScanInterval,
    Settings,
    StatusMessage,
)
from footprint.portability import DataPortability
from footprint.settings_store import SettingsStore, UnknownSettingError
from footprint.storage import JsonFileStorage, MemoryStorage, Storage, StorageError

__all__ = [
    # Version
    "__version__",
    # Models
    "Settings",
    "ScanInterval",
    "Category",
    "ErrorKind",
    "ExportSnapshot",
    "OperationResult",
    "StatusMessage",
    # Stores
    "SettingsStore",
    "UnknownSettingError",
    "CategoryStore",
    "DataPortability",
    "normalize_domain",
    # Storage
    "Storage",
    "MemoryStorage",
    "JsonFileStorage",
    "StorageError",
]
