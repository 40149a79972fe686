"""Shared test fixtures."""

import pytest


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Reset process-wide console state and env overrides between tests."""
    from flow_exec import log

    monkeypatch.setitem(log._state, "indent", 0)
    monkeypatch.setitem(log._state, "verbose", False)
    monkeypatch.delenv("FLOW_EXEC_VERBOSE", raising=False)
    monkeypatch.delenv("FLOW_EXEC_CONFIG", raising=False)
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)


@pytest.fixture
def warnings():
    """Collects failure reports from a CommandRunner's warn channel."""
    return []


@pytest.fixture
def make_runner(warnings):
    from flow_exec.process import CommandRunner

    def _make(**kwargs):
        kwargs.setdefault("verbose", False)
        kwargs.setdefault("warn", warnings.append)
        return CommandRunner(**kwargs)

    return _make


@pytest.fixture
def bin_dir(tmp_path):
    """A directory of executable shell scripts, for PATH manipulation."""
    path = tmp_path / "bin"
    path.mkdir()

    def _script(name, body):
        script = path / name
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(0o755)
        return script

    return type("BinDir", (), {"path": path, "script": staticmethod(_script)})()
