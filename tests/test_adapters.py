"""
Tests for adapters — framework hooks, browser options and mocks.
"""

import subprocess
from pathlib import Path

import pytest

from ux4tools.adapters.browser.playwright import translate_launch_options
from ux4tools.adapters.mock import MockBrowserSession, MockTransport
from ux4tools.adapters.shell import hooks as hooks_module
from ux4tools.adapters.shell.hooks import NodeFrameworkHooks
from ux4tools.core.errors import BuildNotFound, HookFailed


class TestNodeFrameworkHooks:
    def test_missing_node(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr(hooks_module.shutil, "which", lambda name: None)
        with pytest.raises(HookFailed, match="Node.js is required"):
            NodeFrameworkHooks().run_install_hook(tmp_path / "install", tmp_path)

    def test_runs_script_with_args(self, tmp_path: Path, monkeypatch):
        seen = {}

        def fake_run(cmd, cwd, check):
            seen["cmd"] = cmd
            seen["cwd"] = cwd
            return subprocess.CompletedProcess(cmd, 4)

        monkeypatch.setattr(hooks_module.shutil, "which", lambda name: "/usr/bin/node")
        monkeypatch.setattr(hooks_module.subprocess, "run", fake_run)

        code = NodeFrameworkHooks().run_build_hook(tmp_path / "build.js", tmp_path, ["--prod"])

        assert code == 4
        assert seen["cmd"] == ["/usr/bin/node", str(tmp_path / "build.js"), "--prod"]
        assert seen["cwd"] == tmp_path


class TestLaunchOptions:
    def test_headless_by_default(self):
        assert translate_launch_options(None) == {"headless": True}

    def test_camel_case_names(self):
        kwargs = translate_launch_options({"headless": False, "slowMo": 50, "args": ["--x"], "bogus": 1})
        assert kwargs == {"headless": False, "slow_mo": 50, "args": ["--x"]}


class TestMocks:
    def test_transport_records_calls(self):
        transport = MockTransport({("1.0.0", "ux4"): b"data"})
        assert transport.fetch("src", "1.0.0", "ux4") == b"data"
        with pytest.raises(BuildNotFound):
            transport.fetch("src", "2.0.0", "ux4")
        assert transport.call_count == 2

    def test_session_repeats_last_outcome(self):
        session = MockBrowserSession(["a", "b"])
        assert [session.evaluate("x") for _ in range(3)] == ["a", "b", "b"]
