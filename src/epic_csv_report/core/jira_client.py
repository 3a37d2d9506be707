"""Jira Server API client using the ``jira`` library."""

from __future__ import annotations

import json
import logging
from typing import Any

from jira import JIRA, JIRAError

from epic_csv_report.core.data_models import ReportConfig, Ticket
from epic_csv_report.core.normalizer import normalize_ticket

logger = logging.getLogger(__name__)

_BASE_FIELDS = (
    "id",
    "reporter",
    "summary",
    "created",
    "resolutiondate",
    "status",
    "issuelinks",
    "labels",
    "resolution",
)


class PaginationLimitError(RuntimeError):
    """Raised when a search keeps returning pages past the configured limit."""


class JiraClient:
    """Paginated JQL search returning normalized tickets."""

    def __init__(self, config: ReportConfig) -> None:
        self._config = config
        self._jira: JIRA | None = None

    # -- connection -----------------------------------------------------------

    def connect(self) -> None:
        """Connect using the credentials held by the report config."""
        self.connect_basic(
            self._config.jira_url,
            self._config.jira_username,
            self._config.jira_password,
        )

    def connect_basic(self, url: str, username: str, password: str) -> None:
        """Open a basic-auth session against *url*.

        Retries are disabled on the underlying session.  A lightweight
        ``myself()`` call validates the credentials; any failure propagates.
        """
        logger.debug("Connecting to Jira at %s (basic auth)", url)
        try:
            jira = JIRA(
                server=url,
                basic_auth=(username, password),
                max_retries=0,
                get_server_info=False,
            )
            jira.myself()
        except JIRAError as exc:
            logger.error("Failed to connect to Jira: %s", exc)
            self._jira = None
            raise
        self._jira = jira
        logger.info("Connected to Jira as %s (%s)", username, url)

    @property
    def connected(self) -> bool:
        """Return True when the Jira session is active."""
        return self._jira is not None

    @property
    def fields(self) -> list[str]:
        """Field selection sent with every search request."""
        base = list(_BASE_FIELDS)
        base[2:2] = [self._config.epic_link_field, self._config.svp_field]
        return base

    # -- searching ------------------------------------------------------------

    def fetch_tickets(self, jql: str) -> list[Ticket]:
        """Run *jql* to exhaustion and normalize every result."""
        raw_issues = self.search_all(jql)
        return [
            normalize_ticket(
                raw,
                epic_link_field=self._config.epic_link_field,
                svp_field=self._config.svp_field,
                epic_prefix=self._config.project_key,
            )
            for raw in raw_issues
        ]

    def search_all(self, jql: str) -> list[dict[str, Any]]:
        """Return every raw issue matching *jql*.

        Pages are requested one after another, starting at offset 0 and
        advancing by the page size, until a page comes back empty.  More
        than ``max_pages`` non-empty pages raises :class:`PaginationLimitError`.
        """
        page_size = self._config.page_size
        max_pages = self._config.max_pages
        issues: list[dict[str, Any]] = []
        start = 0
        pages = 0

        while True:
            page = self._search_page(jql, start_at=start, max_results=page_size)
            if not page:
                break
            pages += 1
            if pages > max_pages:
                raise PaginationLimitError(
                    f"Search returned more than {max_pages} pages of {page_size}; "
                    f"giving up at startAt={start}"
                )
            issues.extend(page)
            logger.debug("Fetched page %d (%d issues, startAt=%d)", pages, len(page), start)
            start += page_size

        logger.info("Fetched %d issues in %d page(s)", len(issues), pages)
        return issues

    # -- internals ------------------------------------------------------------

    def _search_page(
        self, jql: str, *, start_at: int, max_results: int
    ) -> list[dict[str, Any]]:
        """POST one page of a JQL search and return its ``issues`` list."""
        if self._jira is None:
            raise RuntimeError("call connect() first")
        payload = {
            "jql": jql,
            "fields": self.fields,
            "startAt": start_at,
            "maxResults": max_results,
        }
        response = self._jira._session.post(
            self._jira._get_url("search"), data=json.dumps(payload)
        )
        response.raise_for_status()
        body = response.json() or {}
        return body.get("issues") or []
