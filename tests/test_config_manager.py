"""Tests for epic_csv_report.services.config_manager."""

from __future__ import annotations

import json
from pathlib import Path

from epic_csv_report.services.config_manager import ConfigManager


def _make_manager(tmp_path: Path) -> ConfigManager:
    """Create a ConfigManager pointing at *tmp_path* for isolation."""
    mgr = ConfigManager()
    mgr._dir = tmp_path
    mgr._path = tmp_path / "config.json"
    mgr.reset()
    return mgr


class TestDefaults:
    """Config should ship with sensible defaults."""

    def test_project_key(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        assert mgr.data["project_key"] == "CENPRO"

    def test_time_frame(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        assert mgr.data["time_frame_expression"] == "startOfYear(-1)"

    def test_username_empty(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        assert mgr.data["jira_username"] == ""

    def test_no_password_key(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        assert "jira_password" not in mgr.data


class TestUpdate:
    """Updated values should persist and be retrievable."""

    def test_update_single(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        mgr.update({"project_key": "ACME"})
        assert mgr.data["project_key"] == "ACME"

    def test_update_bulk(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        mgr.update({"jira_url": "https://jira.example.com", "jira_username": "alice"})
        assert mgr.data["jira_url"] == "https://jira.example.com"
        assert mgr.data["jira_username"] == "alice"

    def test_data_property_returns_copy(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        data = mgr.data
        data["project_key"] = "ACME"
        assert mgr.data["project_key"] == "CENPRO"  # original unchanged


class TestPersistence:
    """Config should persist to and load from disk."""

    def test_round_trip(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        mgr.update({"project_key": "ACME", "jira_url": "https://jira.example.com"})

        # Create a fresh manager reading from the same file
        mgr2 = ConfigManager()
        mgr2._dir = tmp_path
        mgr2._path = tmp_path / "config.json"
        mgr2._data = {}
        mgr2._load()
        assert mgr2.data["project_key"] == "ACME"
        assert mgr2.data["jira_url"] == "https://jira.example.com"

    def test_reset_restores_defaults(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        mgr.update({"project_key": "ACME"})
        mgr.reset()
        assert mgr.data["project_key"] == "CENPRO"

    def test_corrupt_file_does_not_crash(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text("NOT JSON {{{", encoding="utf-8")

        mgr = ConfigManager()
        mgr._dir = tmp_path
        mgr._path = config_path
        mgr._data = {"project_key": "CENPRO"}
        mgr._load()
        # Should not raise; data stays at prior state
        assert mgr.data["project_key"] == "CENPRO"

    def test_int_values_persist(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        mgr.update({"max_pages": 25})

        raw = json.loads((tmp_path / "config.json").read_text())
        assert raw["max_pages"] == 25


class TestReportConfig:
    """Stored values and overrides combine into a ReportConfig."""

    def test_from_defaults(self, tmp_path: Path) -> None:
        cfg = _make_manager(tmp_path).report_config()
        assert cfg.project_key == "CENPRO"
        assert cfg.output_path == Path("output") / "epics.csv"
        assert cfg.page_size == 250
        assert cfg.jira_password == ""

    def test_stored_values_used(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        mgr.update({"jira_url": "https://jira.example.com/", "max_pages": "7"})
        cfg = mgr.report_config()
        assert cfg.jira_url == "https://jira.example.com"
        assert cfg.max_pages == 7

    def test_overrides_win_and_none_ignored(self, tmp_path: Path) -> None:
        mgr = _make_manager(tmp_path)
        mgr.update({"project_key": "ACME"})
        cfg = mgr.report_config({
            "project_key": None,
            "time_frame_expression": "-30d",
            "output_path": "out/report.csv",
        })
        assert cfg.project_key == "ACME"
        assert cfg.time_frame_expression == "-30d"
        assert cfg.output_path == Path("out/report.csv")
