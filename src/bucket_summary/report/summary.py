"""Extraction of the header totals from a parsed report."""

from dataclasses import dataclass
from typing import Sequence

from bucket_summary.core.exceptions import StructuralMismatchError

from .parser import ReportRow, TotalObjectsRow, TotalSizeRow


@dataclass(frozen=True)
class ReportSummary:
    """Totals declared by a report's trailer rows."""

    total_objects: int
    total_size: int


def extract_summary(rows: Sequence[ReportRow]) -> ReportSummary:
    """Locate the total-objects and total-size rows by type.

    Both rows must be present exactly once; their position in the sequence
    does not matter.

    Raises:
        StructuralMismatchError: If fewer than two rows are given, or either
            header row is missing or repeated
    """
    if len(rows) < 2:
        raise StructuralMismatchError(
            f"Report has {len(rows)} row(s); at least the two total rows are required"
        )

    objects_rows = [row for row in rows if isinstance(row, TotalObjectsRow)]
    size_rows = [row for row in rows if isinstance(row, TotalSizeRow)]

    for name, found in (("Total Objects", objects_rows), ("Total Size", size_rows)):
        if len(found) != 1:
            raise StructuralMismatchError(
                f"Expected exactly one '{name}' row, found {len(found)}"
            )

    return ReportSummary(
        total_objects=objects_rows[0].value,
        total_size=size_rows[0].value,
    )
