"""Jira password storage in the OS keyring."""

from __future__ import annotations

import logging

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)

KEYRING_SERVICE = "epic-csv-report"


class CredentialStore:
    """Store and retrieve Jira passwords keyed by username.

    Only the secret goes to the keyring.  Usernames and other settings are
    kept by :class:`~epic_csv_report.services.config_manager.ConfigManager`.
    """

    def __init__(self, service: str = KEYRING_SERVICE) -> None:
        self._service = service

    def set_password(self, username: str, password: str) -> None:
        """Save *password* for *username*."""
        keyring.set_password(self._service, username, password)
        logger.info("Password stored in keyring for %s", username)

    def get_password(self, username: str) -> str | None:
        """Return the stored password for *username*, or None.

        An unavailable keyring backend is treated as "no password stored".
        """
        if not username:
            return None
        try:
            return keyring.get_password(self._service, username)
        except KeyringError as exc:
            logger.warning("Keyring lookup failed for %s: %s", username, exc)
            return None

    def delete_password(self, username: str) -> None:
        """Remove the stored password for *username*, if any."""
        try:
            keyring.delete_password(self._service, username)
            logger.info("Password removed from keyring for %s", username)
        except PasswordDeleteError:
            logger.debug("No stored password for %s", username)
