"""Report pipeline: fetch, aggregate, flatten and write."""

from __future__ import annotations

import logging

from epic_csv_report.core.aggregator import build_epic_map
from epic_csv_report.core.csv_writer import write_csv
from epic_csv_report.core.data_models import ReportConfig, ReportRow
from epic_csv_report.core.flattener import flatten_epics
from epic_csv_report.core.jira_client import JiraClient
from epic_csv_report.core.queries import QuerySet

logger = logging.getLogger(__name__)


def collect_rows(client: JiraClient, config: ReportConfig) -> list[ReportRow]:
    """Fetch all three ticket categories and return the flattened rows.

    Each query runs to completion before the next one starts.
    """
    queries = QuerySet.build(config.project_key, config.time_frame_expression)

    logger.info("Fetching spec clarification requests")
    scrs = client.fetch_tickets(queries.scrs)
    logger.info("Fetching stories")
    stories = client.fetch_tickets(queries.stories)
    logger.info("Fetching epics")
    epics = client.fetch_tickets(queries.epics)
    logger.info(
        "Fetched %d SCRs, %d stories, %d epics", len(scrs), len(stories), len(epics),
    )

    epic_map = build_epic_map(epics, stories, scrs)
    return flatten_epics(epic_map)


def run_report(config: ReportConfig, client: JiraClient | None = None) -> int:
    """Generate the CSV report described by *config*.

    Returns the number of rows written.  Nothing is written when fetching
    fails.
    """
    if client is None:
        client = JiraClient(config)
    if not client.connected:
        client.connect()

    rows = collect_rows(client, config)
    return write_csv(rows, config.output_path)
