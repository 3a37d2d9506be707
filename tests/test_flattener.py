"""Tests for epic_csv_report.core.flattener."""

from __future__ import annotations

from epic_csv_report.core.data_models import Epic, Scr, Story
from epic_csv_report.core.flattener import flatten_epics


def _epic(key: str, stories: tuple[str, ...] = (), scrs: tuple[str, ...] = ()) -> Epic:
    return Epic(
        key=key, title=f"Epic {key}", status="Done", created="2023-01-01",
        stories=[Story(key=k, title=k, status="Done", created="2023-02-01") for k in stories],
        scrs=[Scr(key=k, title=k, status="Open", created="2023-03-01") for k in scrs],
    )


class TestFlattenEpics:
    def test_empty_map(self) -> None:
        assert flatten_epics({}) == []

    def test_childless_epic_omitted(self) -> None:
        assert flatten_epics({"E-1": _epic("E-1")}) == []

    def test_stories_before_scrs(self) -> None:
        epics = {
            "E-1": _epic("E-1", stories=("S-1",), scrs=("C-1",)),
            "E-2": _epic("E-2", stories=("S-2",), scrs=("C-2",)),
        }
        rows = flatten_epics(epics)

        assert [(r.epic.key, r.type, r.child.key) for r in rows] == [
            ("E-1", "Story", "S-1"),
            ("E-2", "Story", "S-2"),
            ("E-1", "SCR", "C-1"),
            ("E-2", "SCR", "C-2"),
        ]

    def test_epic_order_follows_mapping(self) -> None:
        epics = {
            "E-9": _epic("E-9", stories=("S-9a", "S-9b")),
            "E-1": _epic("E-1", stories=("S-1",)),
        }
        rows = flatten_epics(epics)
        assert [r.child.key for r in rows] == ["S-9a", "S-9b", "S-1"]

    def test_rows_reference_parent_epic(self) -> None:
        epic = _epic("E-1", scrs=("C-1",))
        rows = flatten_epics({"E-1": epic})
        assert rows[0].epic is epic
        assert rows[0].child is epic.scrs[0]
