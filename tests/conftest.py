"""Central Pytest Fixtures for the Digital Footprint settings core.

Fixtures included:
- Storage: memory_storage, json_storage, populated_storage
- Stores: settings_store, category_store, portability
- Sample data: sample_events, sample_content_analyses
"""

from pathlib import Path
from typing import Any

import pytest

from footprint.categories import CategoryStore
from footprint.portability import DataPortability
from footprint.settings_store import SettingsStore
from footprint.storage import JsonFileStorage, MemoryStorage


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def sample_events() -> list[dict[str, Any]]:
    """Activity events as the tracking engine stores them."""
    return [
        {"type": "visit", "url": "https://github.com/", "ts": 1760870400000},
        {"type": "visit", "url": "https://news.ycombinator.com/", "ts": 1760870460000},
    ]


@pytest.fixture
def sample_content_analyses() -> list[dict[str, Any]]:
    """Content analysis records as the analysis engine stores them."""
    return [
        {"url": "https://news.ycombinator.com/", "sentiment": 0.2, "bias": None},
    ]


# =============================================================================
# Storage
# =============================================================================


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def json_storage(tmp_path: Path) -> JsonFileStorage:
    """JSON file storage in a temporary directory."""
    return JsonFileStorage(tmp_path / "storage.json")


@pytest.fixture
def populated_storage(
    sample_events: list[dict[str, Any]],
    sample_content_analyses: list[dict[str, Any]],
) -> MemoryStorage:
    """Storage holding partial settings, categories and analysis records."""
    return MemoryStorage(
        {
            "settings": {"biasDetection": False, "excludeList": ["bank.example"]},
            "userCategories": {
                "productivity": ["github.com"],
                "news": ["news.ycombinator.com", "github.com"],
            },
            "events": sample_events,
            "contentAnalyses": sample_content_analyses,
        }
    )


# =============================================================================
# Stores
# =============================================================================


@pytest.fixture
def settings_store(memory_storage: MemoryStorage) -> SettingsStore:
    return SettingsStore(memory_storage)


@pytest.fixture
def category_store(memory_storage: MemoryStorage) -> CategoryStore:
    return CategoryStore(memory_storage)


@pytest.fixture
def portability(memory_storage: MemoryStorage) -> DataPortability:
    return DataPortability(memory_storage)
