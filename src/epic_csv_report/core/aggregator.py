"""Join stories and SCRs onto the epics they belong to."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import asdict

from epic_csv_report.core.data_models import Epic, GenericIssue, Scr, Story, Ticket

logger = logging.getLogger(__name__)

_DATE_LEN = 10  # "YYYY-MM-DD"


def to_generic_issue(ticket: Ticket) -> GenericIssue:
    """Project *ticket* onto the report shape with date-only timestamps."""
    return GenericIssue(
        key=ticket.key,
        title=ticket.summary,
        status=ticket.status,
        created=_date_only(ticket.created),
        resolved=_date_only(ticket.resolved),
    )


def build_epic_map(
    epics: Iterable[Ticket],
    stories: Iterable[Ticket],
    scrs: Iterable[Ticket],
) -> dict[str, Epic]:
    """Return epics keyed by issue key, each with its children attached.

    Epics keep the order they were given in.  Stories and SCRs are appended
    in encounter order; children whose epic is not in the map are dropped.
    """
    consolidated: dict[str, Epic] = {}
    for epic in epics:
        consolidated[epic.key] = Epic(**asdict(to_generic_issue(epic)), svp=epic.svp)

    dropped = 0
    for story in stories:
        parent = consolidated.get(story.epic) if story.epic else None
        if parent is None:
            dropped += 1
            continue
        parent.stories.append(Story(**asdict(to_generic_issue(story))))

    for scr in scrs:
        parent = consolidated.get(scr.epic) if scr.epic else None
        if parent is None:
            dropped += 1
            continue
        parent.scrs.append(Scr(**asdict(to_generic_issue(scr)), reporter=scr.reporter))

    logger.debug(
        "Aggregated %d epics; dropped %d children without a known epic",
        len(consolidated), dropped,
    )
    return consolidated


def _date_only(value: str | None) -> str | None:
    if not value:
        return None
    return value[:_DATE_LEN]
