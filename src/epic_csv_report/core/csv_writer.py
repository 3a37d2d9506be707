"""CSV export of flattened report rows."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from epic_csv_report.core.data_models import ReportRow

logger = logging.getLogger(__name__)

FIELD_DELIMITER = "."

# (field id, header title); ids address nested attributes with FIELD_DELIMITER
COLUMNS: list[tuple[str, str]] = [
    ("epic.key", "Epic Key"),
    ("epic.title", "Epic Title"),
    ("epic.svp", "SVP Owner"),
    ("type", "Type"),
    ("child.key", "Key"),
    ("child.title", "Title"),
    ("child.reporter", "Reporter"),
    ("child.status", "Status"),
    ("child.created", "Created"),
    ("child.resolved", "Resolved"),
]


def write_csv(rows: Iterable[ReportRow], path: Path | str) -> int:
    """Write *rows* to *path*, replacing any existing file.

    The parent directory must already exist.  Returns the number of data
    rows written.
    """
    path = Path(path)
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, lineterminator="\n")
        writer.writerow([title for _, title in COLUMNS])
        for row in rows:
            writer.writerow([_cell(row, field_id) for field_id, _ in COLUMNS])
            count += 1
    logger.info("Wrote %d rows to %s", count, path)
    return count


def _cell(row: ReportRow, field_id: str) -> str:
    """Resolve a dotted *field_id* against *row*; missing values are blank."""
    value: Any = row
    for part in field_id.split(FIELD_DELIMITER):
        value = getattr(value, part, None)
        if value is None:
            return ""
    return str(value)
