"""
Tests for persistence — config.json and cache.json.
"""

import json
from pathlib import Path

import pytest

from ux4tools.core.errors import ConfigError
from ux4tools.core.persistence.settings_file import (
    ToolCache,
    ToolConfig,
    coerce_value,
    default_config_dir,
    write_json_atomic,
)


class TestToolConfig:
    def test_creates_empty_document(self, tmp_path: Path):
        config = ToolConfig.open(tmp_path)
        assert config.list() == {}
        assert json.loads((tmp_path / "config.json").read_text()) == {}

    def test_set_persists_immediately(self, tmp_path: Path):
        config = ToolConfig.open(tmp_path)
        config.set("address", "builds.example")
        config.set("fromDir", True)

        on_disk = json.loads((tmp_path / "config.json").read_text())
        assert on_disk == {"address": "builds.example", "fromDir": True}
        assert ToolConfig.open(tmp_path).get("address") == "builds.example"

    def test_delete(self, tmp_path: Path):
        config = ToolConfig.open(tmp_path)
        config.set("user", "alice")
        assert config.delete("user") is True
        assert config.delete("user") is False
        assert "user" not in config

    def test_corrupt_config_is_fatal(self, tmp_path: Path):
        (tmp_path / "config.json").write_text("{not json")
        with pytest.raises(ConfigError, match="Failed to read config"):
            ToolConfig.open(tmp_path)

    def test_non_object_config_is_fatal(self, tmp_path: Path):
        (tmp_path / "config.json").write_text("[1, 2]")
        with pytest.raises(ConfigError):
            ToolConfig.open(tmp_path)


class TestToolCache:
    def test_corrupt_cache_is_reset(self, tmp_path: Path):
        (tmp_path / "cache.json").write_text("garbage")
        cache = ToolCache.open(tmp_path)
        assert cache.list() == {}
        assert json.loads((tmp_path / "cache.json").read_text()) == {}

    def test_typed_accessors(self, tmp_path: Path):
        cache = ToolCache.open(tmp_path)
        assert cache.last_update_check == 0
        assert cache.latest_version_available is None

        cache.set("lastUpdateCheck", 86_400_000)
        cache.set("latestVersionAvailable", "3.0.0")
        assert cache.last_update_check == 86_400_000
        assert cache.latest_version_available == "3.0.0"


class TestHelpers:
    def test_atomic_write_leaves_no_temp_files(self, tmp_path: Path):
        path = tmp_path / "deep" / "doc.json"
        write_json_atomic({"a": 1}, path)
        write_json_atomic({"a": 2}, path)
        assert json.loads(path.read_text()) == {"a": 2}
        assert [p.name for p in path.parent.iterdir()] == ["doc.json"]

    def test_coerce_value(self):
        assert coerce_value("true") is True
        assert coerce_value("false") is False
        assert coerce_value("True") == "True"
        assert coerce_value("42") == "42"

    def test_config_dir_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("UX4_CONFIG_DIR", str(tmp_path / "ux4"))
        assert default_config_dir() == tmp_path / "ux4"
