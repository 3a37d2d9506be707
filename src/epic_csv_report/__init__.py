"""Export Jira epics with their stories and SCRs to CSV."""

__version__ = "0.1.0"
