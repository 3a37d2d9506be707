"""Map raw Jira search results onto :class:`Ticket` records."""

from __future__ import annotations

from typing import Any

from epic_csv_report.core.data_models import (
    DEFAULT_EPIC_LINK_FIELD,
    DEFAULT_PROJECT_KEY,
    DEFAULT_SVP_FIELD,
    Ticket,
)

DONE = "Done"
REJECTED = "Rejected"
EXEC_REJECT_LABEL = "ExecReject"
RELATES_LINK = "Relates"


def normalize_ticket(
    raw: dict[str, Any],
    *,
    epic_link_field: str = DEFAULT_EPIC_LINK_FIELD,
    svp_field: str = DEFAULT_SVP_FIELD,
    epic_prefix: str = DEFAULT_PROJECT_KEY,
) -> Ticket:
    """Build a :class:`Ticket` from one entry of a search response's ``issues``.

    Only ``key`` is required.  Every nested structure under ``fields`` may be
    missing, in which case the matching attribute is left as ``None``.
    """
    fields = _as_dict(raw.get("fields"))
    return Ticket(
        key=raw["key"],
        summary=fields.get("summary") or "",
        status=derive_status(fields),
        epic=resolve_epic(fields, epic_link_field=epic_link_field, epic_prefix=epic_prefix),
        created=fields.get("created"),
        resolved=fields.get("resolutiondate"),
        svp=_display_name(fields.get(svp_field)),
        reporter=_display_name(fields.get("reporter")),
    )


def resolve_epic(
    fields: dict[str, Any],
    *,
    epic_link_field: str = DEFAULT_EPIC_LINK_FIELD,
    epic_prefix: str = DEFAULT_PROJECT_KEY,
) -> str | None:
    """Return the parent epic key for a ticket's *fields*.

    The epic-link field wins when it is set.  Otherwise the first "Relates"
    link, in link order, whose outward issue key starts with *epic_prefix*
    is used.
    """
    epic_link = fields.get(epic_link_field)
    if epic_link:
        return str(epic_link)

    for raw_link in fields.get("issuelinks") or []:
        link = _as_dict(raw_link)
        link_type = _as_dict(link.get("type"))
        if link_type.get("name") != RELATES_LINK:
            continue
        outward = _as_dict(link.get("outwardIssue"))
        key = outward.get("key")
        if key and key.startswith(epic_prefix):
            return key
    return None


def derive_status(fields: dict[str, Any]) -> str:
    """Classify a ticket's status.

    A "Done" ticket is reported as "Rejected" when it carries the
    ``ExecReject`` label or was resolved with anything other than "Done".
    Any other status name passes through unchanged.
    """
    name = _as_dict(fields.get("status")).get("name")
    if name is None:
        return ""
    if name != DONE:
        return name

    labels = fields.get("labels") or []
    resolution = _as_dict(fields.get("resolution")).get("name")
    if EXEC_REJECT_LABEL in labels:
        return REJECTED
    if resolution != DONE:
        return REJECTED
    return DONE


# -- helpers ------------------------------------------------------------------


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _display_name(obj: Any) -> str | None:
    if obj is None:
        return None
    if isinstance(obj, str):
        return obj
    return _as_dict(obj).get("displayName")
