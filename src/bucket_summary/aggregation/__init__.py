"""Per-prefix aggregation, bounded fan-out and grand totals."""

from .pipeline import ConcurrentPipeline, FailurePolicy, PrefixOutcome
from .prefix_aggregator import PrefixAggregator, PrefixSummary, derive_label
from .totals import GrandTotals, reduce_totals

__all__ = [
    "ConcurrentPipeline",
    "FailurePolicy",
    "PrefixOutcome",
    "PrefixAggregator",
    "PrefixSummary",
    "derive_label",
    "GrandTotals",
    "reduce_totals",
]
