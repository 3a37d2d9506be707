"""Entry point for ``python -m epic_csv_report``."""

from __future__ import annotations

import argparse
import getpass
import logging
import os
from collections.abc import Mapping, Sequence
from typing import Any

import requests
from jira import JIRAError
from keyring.errors import KeyringError

from epic_csv_report.core.data_models import ReportConfig
from epic_csv_report.core.jira_client import PaginationLimitError
from epic_csv_report.services.config_manager import ConfigManager
from epic_csv_report.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

ENV_USERNAME = "JIRA_USERNAME"
ENV_PASSWORD = "JIRA_PASSWORD"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_CREDENTIALS = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="epic-csv-report",
        description="Export Jira epics with their stories and SCRs to CSV.",
    )
    parser.add_argument("--jira-url", help="Jira server base URL.")
    parser.add_argument(
        "--username", help=f"Jira username (default: ${ENV_USERNAME} or saved config).",
    )
    parser.add_argument("--project", dest="project_key", help="Jira project key.")
    parser.add_argument(
        "--time-frame",
        dest="time_frame_expression",
        help='JQL date expression for the report window, e.g. "startOfYear(-1)".',
    )
    parser.add_argument("--output", dest="output_path", help="CSV file to write.")
    parser.add_argument(
        "--max-pages", type=int, help="Abort a search after this many pages.",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist the given options as defaults for later runs.",
    )
    parser.add_argument(
        "--reset-defaults",
        action="store_true",
        help="Restore the built-in defaults before applying other options.",
    )
    parser.add_argument(
        "--show-defaults",
        action="store_true",
        help="Print the saved defaults and exit.",
    )
    parser.add_argument(
        "--store-password",
        action="store_true",
        help="Prompt for the Jira password and save it in the OS keyring.",
    )
    parser.add_argument(
        "--forget-password",
        action="store_true",
        help="Remove the saved Jira password from the OS keyring.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging.",
    )
    return parser


def resolve_config(
    args: argparse.Namespace,
    config: ConfigManager,
    credentials: CredentialStore,
    environ: Mapping[str, str] | None = None,
) -> ReportConfig:
    """Combine CLI flags, environment, keyring and saved config.

    Flags beat environment variables, which beat saved values.  The
    password comes from ``$JIRA_PASSWORD`` or else the keyring.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {
        "jira_url": args.jira_url,
        "jira_username": args.username or env.get(ENV_USERNAME) or None,
        "project_key": args.project_key,
        "time_frame_expression": args.time_frame_expression,
        "output_path": args.output_path,
        "max_pages": args.max_pages,
    }
    report = config.report_config(overrides)
    report.jira_password = (
        env.get(ENV_PASSWORD) or credentials.get_password(report.jira_username) or ""
    )
    return report


def main(argv: Sequence[str] | None = None) -> int:
    """Run the report and return the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = ConfigManager()
    if args.reset_defaults:
        config.reset()
    if args.show_defaults:
        for key, value in sorted(config.data.items()):
            print(f"{key} = {value}")
        return EXIT_OK

    credentials = CredentialStore()
    report = resolve_config(args, config, credentials)

    if args.save_defaults:
        config.update({
            "jira_url": report.jira_url,
            "jira_username": report.jira_username,
            "project_key": report.project_key,
            "time_frame_expression": report.time_frame_expression,
            "output_path": str(report.output_path),
            "max_pages": report.max_pages,
        })
        logger.info("Saved defaults")

    if args.forget_password or args.store_password:
        return _manage_password(args, report, credentials)

    if not report.has_credentials:
        logger.error(
            "Missing Jira credentials; set %s/%s or use --username with --store-password",
            ENV_USERNAME, ENV_PASSWORD,
        )
        return EXIT_NO_CREDENTIALS

    from epic_csv_report.app import run_report

    logger.info(
        "Generating report for %s since %s", report.project_key, report.time_frame_expression,
    )
    try:
        rows = run_report(report)
    except (JIRAError, requests.RequestException, PaginationLimitError, OSError) as exc:
        logger.error("Report generation failed: %s", exc)
        return EXIT_FAILED

    logger.info("Report complete: %d rows in %s", rows, report.output_path)
    return EXIT_OK


def _manage_password(
    args: argparse.Namespace, report: ReportConfig, credentials: CredentialStore,
) -> int:
    if not report.jira_username:
        logger.error("A username is required to manage a stored password")
        return EXIT_NO_CREDENTIALS
    try:
        if args.forget_password:
            credentials.delete_password(report.jira_username)
        else:
            password = getpass.getpass(f"Jira password for {report.jira_username}: ")
            credentials.set_password(report.jira_username, password)
    except KeyringError as exc:
        logger.error("Keyring unavailable: %s", exc)
        return EXIT_FAILED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
