"""Tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from terminaltask import __version__, cli


class TestVersion:
    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main(["--version"]) == 0

        assert capsys.readouterr().out.strip() == f"terminaltask v{__version__}"

    def test_version_skips_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom(*args, **kwargs):
            raise AssertionError("config must not be loaded")

        monkeypatch.setattr(cli, "load_config", boom)

        assert cli.main(["--version"]) == 0


class TestMain:
    def test_config_error(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        def fail():
            raise cli.ConfigError("no home")

        monkeypatch.setattr(cli, "load_config", fail)

        assert cli.main([]) == 1
        assert "no home" in capsys.readouterr().err

    def test_runs_app_with_tasks_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        import terminaltask.app

        calls = []
        monkeypatch.setenv("TERMINALTASK_CONFIG_DIR", str(tmp_path))
        monkeypatch.setattr(cli, "setup_logging", lambda *a, **k: None)
        monkeypatch.setattr(terminaltask.app, "run", calls.append)

        assert cli.main(["--tasks-file", str(tmp_path / "mine.json")]) == 0
        assert calls == [tmp_path / "mine.json"]

    def test_default_tasks_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        import terminaltask.app

        calls = []
        monkeypatch.setenv("TERMINALTASK_CONFIG_DIR", str(tmp_path))
        monkeypatch.delenv("TERMINALTASK_TASKS_FILE", raising=False)
        monkeypatch.setattr(cli, "setup_logging", lambda *a, **k: None)
        monkeypatch.setattr(terminaltask.app, "run", calls.append)

        cli.main([])

        assert calls == [tmp_path / "tasks.json"]
