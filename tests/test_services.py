"""
Tests for the supporting services — console relay, results, scaffolding,
automation library, updates and registration.
"""

import json
from datetime import datetime
from pathlib import Path

import pytest

from ux4tools.adapters.mock import MockTransport
from ux4tools.core.errors import (
    ConfigurationMissing,
    DeploymentError,
    RegistrationFailure,
    ToolError,
    UpdateCheckFailed,
)
from ux4tools.core.models.app_config import AppConfig
from ux4tools.core.models.manifest import TestManifest
from ux4tools.core.models.report import TestReport
from ux4tools.core.persistence.settings_file import ToolCache
from ux4tools.core.services import registration, updates
from ux4tools.core.services.automation_lib import ensure_automation_library, install_library_into
from ux4tools.core.services.console_relay import flatten_console_args
from ux4tools.core.services.results import save_results
from ux4tools.core.services.test_scaffold import init_manifest, init_test_set

DAY = 86_400_000


# ── Console relay ───────────────────────────────────────────────


class TestConsoleRelay:
    def test_flattening(self):
        lines = flatten_console_args(["%cPassed", "color: #0a0; font-weight: bold", {"a": [1]}, 3, None, True])
        assert lines[0] == "Passed"
        assert json.loads(lines[1]) == {"a": [1]}
        assert lines[2:] == ["3", "null", "true"]

    def test_plain_text_with_colon_kept(self):
        assert flatten_console_args(["Step: open page"]) == ["Step: open page"]


# ── Results ─────────────────────────────────────────────────────


class TestSaveResults:
    def _report(self) -> TestReport:
        return TestReport(json_report={"passed": 1, "failed": 0}, html_report="<p/>", console_output=["hi"])

    def test_latest_replaced(self, tmp_path: Path):
        manifest = TestManifest(url="u", entry_point="e", save_results_to="out", store_only_latest_results=True)
        (tmp_path / "out" / "latest").mkdir(parents=True)
        (tmp_path / "out" / "latest" / "stale.txt").write_text("old")

        folders = save_results(self._report(), manifest, tmp_path)

        assert folders == [tmp_path / "out" / "latest"]
        assert not (tmp_path / "out" / "latest" / "stale.txt").exists()
        assert (tmp_path / "out" / "latest" / "consoleoutput.txt").read_text() == "hi"

    def test_timestamp_folder(self, tmp_path: Path):
        manifest = TestManifest(url="u", entry_point="e", save_results_to="out")
        folders = save_results(self._report(), manifest, tmp_path, datetime(2023, 12, 31, 23, 59, 1))
        assert [f.name for f in folders] == ["20231231235901", "latest"]

    def test_nothing_without_location(self, tmp_path: Path):
        manifest = TestManifest(url="u", entry_point="e")
        assert save_results(self._report(), manifest, tmp_path) == []
        assert list(tmp_path.iterdir()) == []

    def test_unremovable_latest(self, tmp_path: Path, monkeypatch):
        manifest = TestManifest(url="u", entry_point="e", save_results_to="out", store_only_latest_results=True)
        (tmp_path / "out" / "latest").mkdir(parents=True)

        def locked(path, *args, **kwargs):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr("ux4tools.core.services.results.shutil.rmtree", locked)
        with pytest.raises(DeploymentError, match="Cannot replace previous results"):
            save_results(self._report(), manifest, tmp_path)


# ── Scaffolding ─────────────────────────────────────────────────


class TestScaffold:
    def test_init_manifest_in_folder(self, tmp_path: Path):
        path = init_manifest(tmp_path)
        assert path == tmp_path / "test-manifest.json"
        data = json.loads(path.read_text())
        assert data["entryPoint"] == "testrunner.js"
        assert data["copyTo"] == ".tests"

    def test_init_manifest_refuses_overwrite(self, tmp_path: Path):
        init_manifest(tmp_path)
        with pytest.raises(ToolError, match="already exists"):
            init_manifest(tmp_path)
        init_manifest(tmp_path, force=True)

    def test_init_test_set_adds_runner(self, tmp_path: Path):
        path = init_test_set(tmp_path, "login.js")
        assert path == tmp_path / "login.js"
        assert 'name: "login"' in path.read_text()
        assert "Tests.start" not in path.read_text()
        assert "start: async function" in (tmp_path / "testrunner.js").read_text()

    def test_invalid_set_name(self, tmp_path: Path):
        with pytest.raises(ToolError):
            init_test_set(tmp_path, "../escape")


# ── Automation library ──────────────────────────────────────────


class TestAutomationLibrary:
    def test_cached_library_needs_no_network(self, app_dir, config_dir, make_context):
        lib = config_dir / "ux4automation" / "2.1.0"
        lib.mkdir(parents=True)
        transport = MockTransport()

        path, downloaded = ensure_automation_library(make_context(app_dir), transport, catalog=lambda: 1 / 0)

        assert path == lib
        assert downloaded is False
        assert transport.call_count == 0

    def test_missing_address(self, app_dir, make_context):
        with pytest.raises(ConfigurationMissing):
            ensure_automation_library(make_context(app_dir), MockTransport(), catalog=lambda: ["2.1.0"])

    def test_failed_download_leaves_no_cache(self, app_dir, config_dir, make_context):
        ctx = make_context(app_dir, overrides={"address": "b"})
        transport = MockTransport()
        transport.add("2.1.0", "resources/ux4automation", b"not a zip")

        with pytest.raises(ToolError):
            ensure_automation_library(ctx, transport, catalog=lambda: ["2.1.0"])

        assert not (config_dir / "ux4automation" / "2.1.0").exists()

    def test_install_into_project(self, tmp_path: Path):
        lib = tmp_path / "lib"
        lib.mkdir()
        (lib / "ux4.automation.js").write_text("//")
        dest = install_library_into(lib, tmp_path / "project")
        assert (dest / "ux4.automation.js").is_file()
        assert dest.name == "UX4Automation"


# ── Updates ─────────────────────────────────────────────────────


class TestUpdates:
    def test_auto_check_once_per_day(self, tmp_path: Path):
        cache = ToolCache.open(tmp_path)
        assert updates.auto_update_due(cache, now_ms=10 * DAY + 5000) is True
        assert cache.last_update_check == 10 * DAY
        assert updates.auto_update_due(cache, now_ms=10 * DAY + 9000) is False
        assert updates.auto_update_due(cache, now_ms=11 * DAY + 1) is True

    def test_check_stores_latest(self, tmp_path: Path):
        cache = ToolCache.open(tmp_path)
        assert updates.check_for_update(cache, lambda: "9.9.9") == "9.9.9"
        assert ToolCache.open(tmp_path).latest_version_available == "9.9.9"

    def test_notice(self, tmp_path: Path):
        cache = ToolCache.open(tmp_path)
        assert updates.update_notice("2.1.0", cache) is None
        cache.set("latestVersionAvailable", "2.2.0")
        notice = updates.update_notice("2.1.0", cache)
        assert "Latest: 2.2.0" in notice
        assert not updates.is_up_to_date("2.1.0", cache)
        assert updates.is_up_to_date("2.2.0", cache)

    def test_query_rejects_odd_output(self, monkeypatch):
        class _Result:
            stdout = "npm ERR! 404\n"
            stderr = ""

        monkeypatch.setattr(updates.subprocess, "run", lambda *a, **k: _Result())
        with pytest.raises(UpdateCheckFailed):
            updates.query_latest_version()

    def test_query_without_npm(self, monkeypatch):
        def missing(*args, **kwargs):
            raise FileNotFoundError("npm")

        monkeypatch.setattr(updates.subprocess, "run", missing)
        with pytest.raises(UpdateCheckFailed):
            updates.query_latest_version()


# ── Registration ────────────────────────────────────────────────


class TestRegistration:
    APP = AppConfig.model_validate({"ux4version": "2.1.0", "name": "a", "displayName": "A", "version": "1.0.0"})

    def test_record(self):
        assert registration.build_record(self.APP, "alice") == {
            "userID": "alice",
            "ux4Version": "2.1.0",
            "appVersion": "1.0.0",
            "appName": "a",
            "appDisplayName": "A",
        }

    def test_no_endpoint(self):
        with pytest.raises(RegistrationFailure):
            registration.register_install(None, self.APP, "alice")

    def test_posts_json(self, monkeypatch):
        sent = {}

        class _Response:
            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def getcode(self):
                return 201

        def fake_urlopen(req, timeout):
            sent["url"] = req.full_url
            sent["method"] = req.get_method()
            sent["body"] = json.loads(req.data)
            return _Response()

        monkeypatch.setattr(registration.urllib.request, "urlopen", fake_urlopen)
        registration.register_install("db.example/installs", self.APP, None)

        assert sent["url"] == "http://db.example/installs"
        assert sent["method"] == "POST"
        assert sent["body"]["userID"] == ""

    def test_network_failure(self, monkeypatch):
        def fake_urlopen(req, timeout):
            raise OSError("unreachable")

        monkeypatch.setattr(registration.urllib.request, "urlopen", fake_urlopen)
        with pytest.raises(RegistrationFailure):
            registration.register_install("db.example", self.APP, "alice")

    def test_malformed_endpoint(self):
        with pytest.raises(RegistrationFailure):
            registration.register_install("http://localhost:abc/", self.APP, "alice")
