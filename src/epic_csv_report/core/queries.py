"""JQL filters for the three ticket categories in the report."""

from __future__ import annotations

from dataclasses import dataclass

SCR_ISSUE_TYPE = '"Spec Clarification Request"'
SPEC_TYPES = "(Rebuild, Change, New)"


@dataclass(frozen=True)
class QuerySet:
    """The SCR, story and epic filters for one report run."""

    scrs: str
    stories: str
    epics: str

    @classmethod
    def build(cls, project_key: str, time_frame: str) -> QuerySet:
        """Return the filters for *project_key* scoped to *time_frame*.

        *time_frame* is a JQL date expression such as ``startOfYear(-1)``.
        SCRs are selected by creation date; stories and epics by the date
        they moved to "Done".
        """
        return cls(
            scrs=(
                f"project = {project_key} AND type = {SCR_ISSUE_TYPE} "
                f"AND created >= {time_frame}"
            ),
            stories=_completed(project_key, "Story", time_frame),
            epics=_completed(project_key, "Epic", time_frame),
        )


def _completed(project_key: str, issue_type: str, time_frame: str) -> str:
    return (
        f"project = {project_key} AND type = {issue_type} "
        f'AND status changed to "Done" AFTER {time_frame} '
        f'AND "Spec Type" IN {SPEC_TYPES}'
    )
