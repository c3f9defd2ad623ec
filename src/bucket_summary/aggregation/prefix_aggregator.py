"""Aggregation of a single prefix's report into summary statistics."""

from dataclasses import dataclass, field
from typing import Any, Callable

from bucket_summary.core import get_logger, get_tracer
from bucket_summary.core.exceptions import DivisionByZeroError, ValidationError
from bucket_summary.report import extract_summary, parse_report
from bucket_summary.units import format_megabytes

logger = get_logger(__name__)
tracer = get_tracer(__name__)

PREFIX_SEPARATOR = "/"


@dataclass(frozen=True)
class PrefixSummary:
    """Aggregate statistics for the objects under one prefix.

    Attributes:
        count: Number of objects
        size: Total size in bytes
        avg: Average object size in bytes, floored
        size_mb: ``size`` rendered in megabytes
        avg_mb: ``avg`` rendered in megabytes
        prefix: Prefix the summary was computed for
        label: Output key derived from ``prefix``
    """

    count: int
    size: int
    avg: int
    size_mb: str
    avg_mb: str
    prefix: str = field(default="", compare=False)
    label: str = field(default="", compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used by the OUTPUT.json artifact."""
        return {
            "count": self.count,
            "size": self.size,
            "avg": self.avg,
            "size_mb": self.size_mb,
            "avg_mb": self.avg_mb,
        }


def derive_label(prefix: str) -> str:
    """Return the last non-empty path segment of a prefix.

    ``"raw/2023/01/15/"`` becomes ``"15"``.

    Raises:
        ValidationError: If the prefix has no non-empty segment
    """
    segments = [segment for segment in prefix.split(PREFIX_SEPARATOR) if segment]
    if not segments:
        raise ValidationError(f"Cannot derive a label from prefix: {prefix!r}")
    return segments[-1]


class PrefixAggregator:
    """Fetches, parses and summarizes the report for one prefix at a time."""

    def __init__(self, fetch_report: Callable[[str], str]):
        """Initialize prefix aggregator.

        Args:
            fetch_report: Callable producing the raw report text for a prefix,
                typically ``ReportSource.fetch_report``
        """
        self.fetch_report = fetch_report

    def aggregate(self, prefix: str) -> PrefixSummary:
        """Build the summary for ``prefix``.

        Raises:
            ValidationError: If no label can be derived from the prefix
            TransportError: If the report cannot be fetched
            MalformedReportError: If a report line cannot be parsed
            StructuralMismatchError: If the report totals are missing
            DivisionByZeroError: If the report declares zero objects
        """
        label = derive_label(prefix)

        with tracer.start_as_current_span("aggregate_prefix") as span:
            span.set_attribute("prefix", prefix)
            logger.info("Aggregating prefix", prefix=prefix, label=label)

            rows = parse_report(self.fetch_report(prefix))
            report_summary = extract_summary(rows)

            count = report_summary.total_objects
            size = report_summary.total_size
            if count == 0:
                raise DivisionByZeroError(
                    f"Prefix '{prefix}' reports zero objects; average is undefined"
                )
            avg = size // count

            summary = PrefixSummary(
                count=count,
                size=size,
                avg=avg,
                size_mb=format_megabytes(size),
                avg_mb=format_megabytes(avg),
                prefix=prefix,
                label=label,
            )

            span.set_attribute("object_count", count)
            span.set_attribute("total_bytes", size)
            logger.info(
                "Prefix aggregated",
                prefix=prefix,
                label=label,
                count=count,
                size=size,
                avg=avg,
            )
            return summary
