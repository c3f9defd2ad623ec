"""End-to-end inventory run: list, back up, aggregate, total, persist."""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from bucket_summary.aggregation import (
    ConcurrentPipeline,
    FailurePolicy,
    GrandTotals,
    PrefixAggregator,
    PrefixSummary,
    reduce_totals,
)
from bucket_summary.aggregation.pipeline import DEFAULT_MAX_CONCURRENCY
from bucket_summary.artifacts import (
    PREFIX_LIST_FILENAME,
    SUMMARIES_FILENAME,
    TOTALS_FILENAME,
    write_prefix_list,
    write_summaries,
    write_totals,
)
from bucket_summary.core import get_logger
from bucket_summary.schemas import CommandSourceConfig, S3SourceConfig, SourceConfig
from bucket_summary.sources import (
    CommandReportSource,
    ReportSource,
    S3ClientConfig,
    S3ReportSource,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class InventoryRun:
    """Everything a completed run produced."""

    prefixes: list[str]
    summaries: dict[str, PrefixSummary]
    totals: GrandTotals
    prefix_list_path: Path
    summaries_path: Path
    totals_path: Path


def build_source(config: SourceConfig) -> ReportSource:
    """Create the report source described by ``config``."""
    if isinstance(config, S3SourceConfig):
        client_config = S3ClientConfig(
            access_key_id=config.access_key_id,
            secret_access_key=config.secret_access_key,
            session_token=config.session_token,
            region_name=config.region_name or "us-east-1",
            endpoint_url=config.endpoint_url,
            aws_profile=config.aws_profile,
        )
        return S3ReportSource(
            bucket=config.bucket,
            client_config=client_config,
            root_prefix=config.root_prefix,
            depth=config.depth,
        )

    assert isinstance(config, CommandSourceConfig)
    return CommandReportSource(
        bucket=config.bucket,
        list_command=config.list_command,
        report_command=config.report_command,
        timeout=config.timeout,
    )


def run_inventory(
    source: ReportSource,
    output_dir: Union[str, Path],
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    failure_policy: FailurePolicy = FailurePolicy.fail_fast,
) -> InventoryRun:
    """Summarize every prefix of ``source`` and write the run artifacts.

    The prefix list is written first so it survives as a partial record if
    aggregation fails; the summary and totals files are only written once the
    pipeline succeeds.
    """
    output_path = Path(output_dir)
    logger.info("Starting inventory run", bucket=source.bucket, output_dir=str(output_path))

    prefixes = source.list_prefixes()
    prefix_list_path = write_prefix_list(output_path / PREFIX_LIST_FILENAME, prefixes)

    pipeline = ConcurrentPipeline(
        PrefixAggregator(source.fetch_report),
        max_concurrency=max_concurrency,
        failure_policy=failure_policy,
    )
    summaries = pipeline.run(prefixes)
    totals = reduce_totals(summaries)

    summaries_path = write_summaries(output_path / SUMMARIES_FILENAME, summaries)
    totals_path = write_totals(output_path / TOTALS_FILENAME, totals)

    logger.info(
        "Inventory run completed",
        bucket=source.bucket,
        prefix_count=len(prefixes),
        total_count=totals.total_count,
        total_size=totals.total_size,
    )
    return InventoryRun(
        prefixes=prefixes,
        summaries=summaries,
        totals=totals,
        prefix_list_path=prefix_list_path,
        summaries_path=summaries_path,
        totals_path=totals_path,
    )
