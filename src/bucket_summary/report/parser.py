"""Report parsing for ``aws s3 ls --recursive --summarize`` style output.

A report is a listing of objects, one per line::

    2023-01-15 10:00:00       1024 raw/2023/01/15/file1.bin

followed by two trailer lines carrying the totals::

    Total Objects: 2
       Total Size: 3072

Each non-empty line becomes one typed row. Row order follows the source text.
"""

from dataclasses import dataclass
from typing import Iterable, Union

from bucket_summary.core import get_logger
from bucket_summary.core.exceptions import MalformedReportError

logger = get_logger(__name__)

TOTAL_OBJECTS_MARKER = "Total Objects"
TOTAL_SIZE_MARKER = "Total Size"


@dataclass(frozen=True)
class TotalObjectsRow:
    """Trailer row holding the number of objects under the prefix."""

    value: int


@dataclass(frozen=True)
class TotalSizeRow:
    """Trailer row holding the total size in bytes under the prefix."""

    value: int


@dataclass(frozen=True)
class ContentRow:
    """A single object listing line.

    Attributes:
        date: Last-modified date as printed by the report
        time: Last-modified time as printed by the report
        size: Object size in bytes
        file_name: Object key, internal spaces preserved
    """

    date: str
    time: str
    size: int
    file_name: str


ReportRow = Union[TotalObjectsRow, TotalSizeRow, ContentRow]


def _parse_non_negative_int(raw: str, line: str) -> int:
    # Plain ASCII digits only; int() would also take "+5", "1_000" or "-1"
    digits = raw.strip()
    if not (digits.isascii() and digits.isdigit()):
        raise MalformedReportError(
            f"Expected a non-negative integer in report line: {line!r}"
        )
    return int(digits, 10)


def _parse_header_value(line: str) -> int:
    _, separator, data = line.partition(":")
    if not separator:
        raise MalformedReportError(f"Header line missing ':' separator: {line!r}")
    return _parse_non_negative_int(data, line)


def _parse_content_row(line: str) -> ContentRow:
    fields = line.split(None, 3)
    if len(fields) < 4:
        raise MalformedReportError(
            f"Expected 'date time size name' in report line, got: {line!r}"
        )

    date, time, size, file_name = fields
    return ContentRow(
        date=date,
        time=time,
        size=_parse_non_negative_int(size, line),
        file_name=file_name,
    )


def parse_report_line(line: str) -> ReportRow:
    """Classify and parse a single stripped, non-empty report line.

    Raises:
        MalformedReportError: If the line fits neither a header nor a content row
    """
    if line.startswith(TOTAL_OBJECTS_MARKER):
        return TotalObjectsRow(value=_parse_header_value(line))
    if line.startswith(TOTAL_SIZE_MARKER):
        return TotalSizeRow(value=_parse_header_value(line))
    return _parse_content_row(line)


def parse_report(report: Union[str, Iterable[str]]) -> list[ReportRow]:
    """Parse a full report into an ordered list of rows.

    Args:
        report: The report text, or the chunks it was delivered in. Chunks are
            concatenated before splitting into lines, so a line may span chunks.
            Lines end at newlines only, since object keys may contain other
            line-break characters such as form feeds.

    Returns:
        One row per non-blank line, in source order

    Raises:
        MalformedReportError: On the first line that cannot be parsed
    """
    text = report if isinstance(report, str) else "".join(report)

    rows: list[ReportRow] = []
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        rows.append(parse_report_line(line))

    logger.debug("Report parsed", row_count=len(rows))
    return rows
