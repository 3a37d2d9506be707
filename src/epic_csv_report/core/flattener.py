"""Flatten the epic hierarchy into report rows."""

from __future__ import annotations

from collections.abc import Mapping

from epic_csv_report.core.data_models import Epic, ReportRow

STORY = "Story"
SCR = "SCR"


def flatten_epics(epic_map: Mapping[str, Epic]) -> list[ReportRow]:
    """Return one row per (epic, child) pair.

    All story rows come first, then all SCR rows.  Within each group epics
    follow the mapping order and children their append order.  Epics
    without children contribute nothing.
    """
    epics = list(epic_map.values())
    rows = [
        ReportRow(epic=epic, type=STORY, child=story)
        for epic in epics
        for story in epic.stories
    ]
    rows.extend(
        ReportRow(epic=epic, type=SCR, child=scr)
        for epic in epics
        for scr in epic.scrs
    )
    return rows
