"""Per-prefix object statistics for S3 buckets.

This package lists the date-stamped prefixes of a bucket, fetches an
``aws s3 ls --summarize`` style report for each one on a bounded thread pool,
parses the reports, and aggregates object counts, sizes and average object
sizes per prefix and for the whole bucket.

Key Features:
    - Report parsing into typed rows
    - Bounded-concurrency aggregation with an explicit failure policy
    - Command-line and boto3 report sources
    - JSON artifacts and a date CSV export
    - CLI interface

Recommended Usage:

    >>> from bucket_summary import CommandSourceConfig, build_source, run_inventory
    >>> source = build_source(CommandSourceConfig(bucket="my-bucket"))
    >>> result = run_inventory(source, output_dir="output")
"""

__version__ = "0.1.0"

from .aggregation import (
    ConcurrentPipeline,
    FailurePolicy,
    GrandTotals,
    PrefixAggregator,
    PrefixOutcome,
    PrefixSummary,
    derive_label,
    reduce_totals,
)
from .artifacts import build_csv, load_summaries
from .inventory import InventoryRun, build_source, run_inventory
from .report import (
    ContentRow,
    ReportSummary,
    TotalObjectsRow,
    TotalSizeRow,
    extract_summary,
    parse_report,
)
from .schemas import CommandSourceConfig, S3SourceConfig, SourceConfig
from .sources import CommandReportSource, ReportSource, S3ReportSource
from .units import format_megabytes

__all__ = [
    # Source configurations
    "CommandSourceConfig",
    "S3SourceConfig",
    "SourceConfig",
    # Run interface
    "InventoryRun",
    "build_source",
    "run_inventory",
    # Report parsing
    "ContentRow",
    "ReportSummary",
    "TotalObjectsRow",
    "TotalSizeRow",
    "extract_summary",
    "parse_report",
    # Aggregation
    "ConcurrentPipeline",
    "FailurePolicy",
    "GrandTotals",
    "PrefixAggregator",
    "PrefixOutcome",
    "PrefixSummary",
    "derive_label",
    "reduce_totals",
    "format_megabytes",
    # Sources and artifacts
    "CommandReportSource",
    "ReportSource",
    "S3ReportSource",
    "build_csv",
    "load_summaries",
]
