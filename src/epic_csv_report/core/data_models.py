"""Data models for the Epic CSV report."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_JIRA_URL = "https://jira.devfactory.com"
DEFAULT_PROJECT_KEY = "CENPRO"
DEFAULT_TIME_FRAME = "startOfYear(-1)"
DEFAULT_OUTPUT_PATH = Path("output") / "epics.csv"
DEFAULT_EPIC_LINK_FIELD = "customfield_10002"
DEFAULT_SVP_FIELD = "customfield_28100"
DEFAULT_PAGE_SIZE = 250
DEFAULT_MAX_PAGES = 400


@dataclass
class Ticket:
    """A normalized Jira ticket, independent of its query category."""

    key: str
    summary: str
    status: str
    epic: str | None = None
    created: str | None = None  # ISO-8601 as received
    resolved: str | None = None
    svp: str | None = None
    reporter: str | None = None


@dataclass
class GenericIssue:
    """Report-ready projection of a ticket with date-only timestamps."""

    key: str
    title: str
    status: str
    created: str | None
    resolved: str | None = None


@dataclass
class Story(GenericIssue):
    """A story attached to an Epic."""


@dataclass
class Scr(GenericIssue):
    """A Spec Clarification Request attached to an Epic."""

    reporter: str | None = None


@dataclass
class Epic(GenericIssue):
    """An Epic with the stories and SCRs linked to it."""

    svp: str | None = None
    stories: list[Story] = field(default_factory=list)
    scrs: list[Scr] = field(default_factory=list)


@dataclass
class ReportRow:
    """One line of the flattened report."""

    epic: Epic
    type: str  # "Story" or "SCR"
    child: Story | Scr


@dataclass
class ReportConfig:
    """Configuration for a report run."""

    jira_url: str = DEFAULT_JIRA_URL
    jira_username: str = ""
    jira_password: str = field(default="", repr=False)
    time_frame_expression: str = DEFAULT_TIME_FRAME
    output_path: Path = DEFAULT_OUTPUT_PATH
    project_key: str = DEFAULT_PROJECT_KEY
    epic_link_field: str = DEFAULT_EPIC_LINK_FIELD
    svp_field: str = DEFAULT_SVP_FIELD
    page_size: int = DEFAULT_PAGE_SIZE
    max_pages: int = DEFAULT_MAX_PAGES

    @property
    def has_credentials(self) -> bool:
        """Return True when both username and password are set."""
        return bool(self.jira_username) and bool(self.jira_password)
