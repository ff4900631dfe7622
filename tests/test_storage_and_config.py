"""Tests for storage backends and application configuration."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from footprint.categories import CategoryStore
from footprint.config import AppConfig, ConfigurationError, get_app_dir, get_config
from footprint.settings_store import SettingsStore
from footprint.storage import JsonFileStorage, MemoryStorage, StorageError

# =============================================================================
# Memory Storage Tests
# =============================================================================


class TestMemoryStorage:
    """Tests for MemoryStorage."""

    def test_get_omits_missing_keys(self) -> None:
        storage = MemoryStorage({"a": 1})
        assert asyncio.run(storage.get(["a", "b"])) == {"a": 1}

    def test_values_are_copied(self) -> None:
        storage = MemoryStorage()
        value = {"list": [1]}
        asyncio.run(storage.set({"k": value}))
        value["list"].append(2)

        fetched = asyncio.run(storage.get(["k"]))
        fetched["k"]["list"].append(3)

        assert storage.snapshot() == {"k": {"list": [1]}}

    def test_clear(self) -> None:
        storage = MemoryStorage({"a": 1, "b": 2})
        asyncio.run(storage.clear())
        assert storage.snapshot() == {}


# =============================================================================
# JSON File Storage Tests
# =============================================================================


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_missing_file_reads_empty(self, json_storage: JsonFileStorage) -> None:
        assert asyncio.run(json_storage.get(["settings"])) == {}

    def test_set_merges_keys(self, json_storage: JsonFileStorage) -> None:
        asyncio.run(json_storage.set({"settings": {"scanInterval": 15000}}))
        asyncio.run(json_storage.set({"userCategories": {"news": ["bbc.co.uk"]}}))

        data = json.loads(json_storage.path.read_text(encoding="utf-8"))
        assert data == {
            "settings": {"scanInterval": 15000},
            "userCategories": {"news": ["bbc.co.uk"]},
        }

    def test_no_temp_files_left(self, json_storage: JsonFileStorage) -> None:
        asyncio.run(json_storage.set({"a": 1}))
        assert [p.name for p in json_storage.path.parent.iterdir()] == ["storage.json"]

    def test_clear(self, json_storage: JsonFileStorage) -> None:
        asyncio.run(json_storage.set({"a": 1}))
        asyncio.run(json_storage.clear())
        assert asyncio.run(json_storage.get(["a"])) == {}

    def test_corrupt_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            asyncio.run(JsonFileStorage(path).get(["settings"]))

    def test_non_object_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(StorageError):
            asyncio.run(JsonFileStorage(path).get(["settings"]))

    def test_stores_work_over_file(self, json_storage: JsonFileStorage) -> None:
        """Test settings and categories persist across store instances."""
        asyncio.run(SettingsStore(json_storage).update("scanInterval", 60000))
        asyncio.run(CategoryStore(json_storage).add_domain("news", "https://bbc.co.uk"))

        reopened = JsonFileStorage(json_storage.path)
        assert asyncio.run(SettingsStore(reopened).load()).scan_interval == 60000
        assert asyncio.run(CategoryStore(reopened).load()) == {"news": ["bbc.co.uk"]}


# =============================================================================
# Configuration Tests
# =============================================================================


class TestAppConfig:
    """Tests for AppConfig loading and saving."""

    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.log_level == "WARNING"
        assert config.data_file is None
        assert config.resolve_data_file() == get_app_dir() / "storage.json"

    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg" / "config.yaml"
        config = AppConfig(data_file=tmp_path / "data.json", log_level="DEBUG")
        config.save_to_yaml(path)

        loaded = AppConfig.load_from_yaml(path)
        assert loaded.data_file == tmp_path / "data.json"
        assert loaded.log_level == "DEBUG"
        assert loaded.resolve_data_file() == tmp_path / "data.json"

    def test_empty_yaml_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert AppConfig.load_from_yaml(path) == AppConfig()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            AppConfig.load_from_yaml(tmp_path / "nope.yaml")

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("log_level: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            AppConfig.load_from_yaml(path)

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("log_level: LOUD\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            AppConfig.load_from_yaml(path)

    def test_get_config_falls_back_on_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        assert get_config(path) == AppConfig()

    def test_get_config_missing_file(self, tmp_path: Path) -> None:
        assert get_config(tmp_path / "absent.yaml") == AppConfig()

    def test_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("footprint.config.platform.system", lambda: "Linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert AppConfig.get_default_config_path() == tmp_path / "digital-footprint" / "config.yaml"
