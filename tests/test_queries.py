"""Tests for epic_csv_report.core.queries."""

from __future__ import annotations

import dataclasses

import pytest

from epic_csv_report.core.queries import QuerySet


class TestQuerySet:
    def test_scr_query(self) -> None:
        q = QuerySet.build("CENPRO", "startOfYear(-1)")
        assert q.scrs == (
            'project = CENPRO AND type = "Spec Clarification Request" '
            "AND created >= startOfYear(-1)"
        )

    def test_story_and_epic_queries(self) -> None:
        q = QuerySet.build("CENPRO", "startOfYear(-1)")
        assert q.stories == (
            'project = CENPRO AND type = Story AND status changed to "Done" '
            'AFTER startOfYear(-1) AND "Spec Type" IN (Rebuild, Change, New)'
        )
        assert q.epics == q.stories.replace("type = Story", "type = Epic")

    def test_parameters_substituted(self) -> None:
        q = QuerySet.build("ACME", "-30d")
        for jql in (q.scrs, q.stories, q.epics):
            assert jql.startswith("project = ACME ")
            assert "-30d" in jql

    def test_frozen(self) -> None:
        q = QuerySet.build("CENPRO", "startOfYear(-1)")
        with pytest.raises(dataclasses.FrozenInstanceError):
            q.scrs = "x"  # type: ignore[misc]
