"""JSON-based configuration persistence via platformdirs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from epic_csv_report.core.data_models import (
    DEFAULT_EPIC_LINK_FIELD,
    DEFAULT_JIRA_URL,
    DEFAULT_MAX_PAGES,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PROJECT_KEY,
    DEFAULT_SVP_FIELD,
    DEFAULT_TIME_FRAME,
    ReportConfig,
)

logger = logging.getLogger(__name__)

APP_NAME = "epic-csv-report"
CONFIG_FILENAME = "config.json"

# Non-secret settings only; the password lives in the OS keyring.
_DEFAULTS: dict[str, Any] = {
    "jira_url": DEFAULT_JIRA_URL,
    "jira_username": "",
    "project_key": DEFAULT_PROJECT_KEY,
    "time_frame_expression": DEFAULT_TIME_FRAME,
    "output_path": str(DEFAULT_OUTPUT_PATH),
    "epic_link_field": DEFAULT_EPIC_LINK_FIELD,
    "svp_field": DEFAULT_SVP_FIELD,
    "page_size": DEFAULT_PAGE_SIZE,
    "max_pages": DEFAULT_MAX_PAGES,
}


class ConfigManager:
    """Read/write JSON configuration stored in the platform config directory."""

    def __init__(self) -> None:
        self._dir = Path(user_config_dir(APP_NAME, appauthor=False))
        self._path = self._dir / CONFIG_FILENAME
        self._data: dict[str, Any] = dict(_DEFAULTS)
        self._load()
        logger.debug("Config loaded from %s", self._path)

    # -- public API -----------------------------------------------------------

    def update(self, values: dict[str, Any]) -> None:
        """Bulk-update config values and persist."""
        self._data.update(values)
        self._save()

    def reset(self) -> None:
        """Reset all values to defaults and persist."""
        logger.info("Resetting config to defaults")
        self._data = dict(_DEFAULTS)
        self._save()

    @property
    def data(self) -> dict[str, Any]:
        """Return a shallow copy of all configuration."""
        return dict(self._data)

    def report_config(self, overrides: dict[str, Any] | None = None) -> ReportConfig:
        """Build a :class:`ReportConfig` from stored values.

        Entries of *overrides* that are not ``None`` take precedence over
        the stored values.  The password is never read from here.
        """
        values = dict(self._data)
        values.update({k: v for k, v in (overrides or {}).items() if v is not None})
        return ReportConfig(
            jira_url=str(values["jira_url"]).rstrip("/"),
            jira_username=str(values["jira_username"]),
            jira_password=str(values.get("jira_password") or ""),
            time_frame_expression=str(values["time_frame_expression"]),
            output_path=Path(values["output_path"]),
            project_key=str(values["project_key"]),
            epic_link_field=str(values["epic_link_field"]),
            svp_field=str(values["svp_field"]),
            page_size=int(values["page_size"]),
            max_pages=int(values["max_pages"]),
        )

    # -- internals ------------------------------------------------------------

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path, encoding="utf-8") as fh:
                stored = json.load(fh)
            if isinstance(stored, dict):
                self._data.update(stored)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to load config from %s: %s", self._path, exc)

    def _save(self) -> None:
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as fh:
                json.dump(self._data, fh, indent=2, default=str)
        except OSError as exc:
            logger.warning("Failed to save config to %s: %s", self._path, exc)
