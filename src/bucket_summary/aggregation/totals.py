"""Grand totals across all prefix summaries."""

from dataclasses import dataclass
from typing import Any, Mapping

from bucket_summary.units import format_megabytes

from .prefix_aggregator import PrefixSummary


@dataclass(frozen=True)
class GrandTotals:
    """Totals over every summarized prefix."""

    total_count: int
    total_size: int
    total_size_mb: str

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used by the TOTAL.json artifact."""
        return {
            "total_count": self.total_count,
            "total_size": self.total_size,
            "total_size_mb": self.total_size_mb,
        }


def reduce_totals(summaries: Mapping[str, PrefixSummary]) -> GrandTotals:
    """Sum counts and sizes over all summaries."""
    total_count = sum(summary.count for summary in summaries.values())
    total_size = sum(summary.size for summary in summaries.values())
    return GrandTotals(
        total_count=total_count,
        total_size=total_size,
        total_size_mb=format_megabytes(total_size),
    )
