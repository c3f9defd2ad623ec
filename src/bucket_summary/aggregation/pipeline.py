"""Bounded-concurrency fan-out of prefix aggregation.

Every prefix is aggregated on a fixed-size thread pool. At most
``max_concurrency`` report fetches are in flight at once; as soon as one
finishes the next pending prefix is dispatched. Results are keyed by the label
derived from each prefix, and labels are checked for uniqueness before any work
is dispatched.
"""

import contextvars
from collections import Counter
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from bucket_summary.core import get_logger, get_tracer
from bucket_summary.core.exceptions import LabelCollisionError, ValidationError

from .prefix_aggregator import PrefixAggregator, PrefixSummary, derive_label

logger = get_logger(__name__)
tracer = get_tracer(__name__)

DEFAULT_MAX_CONCURRENCY = 10


class FailurePolicy(str, Enum):
    """What a failed prefix does to the rest of the run."""

    fail_fast = "fail-fast"
    skip_failed = "skip-failed"


@dataclass(frozen=True)
class PrefixOutcome:
    """Result of aggregating one prefix: a summary or the error raised."""

    prefix: str
    label: str
    summary: Optional[PrefixSummary] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def check_unique_labels(prefixes: Sequence[str]) -> dict[str, str]:
    """Map each prefix to its label, rejecting label collisions.

    Raises:
        ValidationError: If a prefix yields no label
        LabelCollisionError: If two prefixes yield the same label
    """
    labels = {prefix: derive_label(prefix) for prefix in prefixes}

    duplicates = sorted(
        label for label, seen in Counter(labels.values()).items() if seen > 1
    )
    if duplicates:
        clashing = {
            label: [prefix for prefix, value in labels.items() if value == label]
            for label in duplicates
        }
        raise LabelCollisionError(f"Prefixes derive duplicate labels: {clashing}")

    if len(labels) != len(prefixes):
        repeated = sorted(p for p, seen in Counter(prefixes).items() if seen > 1)
        raise LabelCollisionError(f"Prefixes listed more than once: {repeated}")

    return labels


class ConcurrentPipeline:
    """Runs a PrefixAggregator over many prefixes with a concurrency ceiling."""

    def __init__(
        self,
        aggregator: PrefixAggregator,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        failure_policy: FailurePolicy = FailurePolicy.fail_fast,
    ):
        """Initialize the pipeline.

        Args:
            aggregator: Aggregator invoked once per prefix
            max_concurrency: Maximum number of aggregations in flight
            failure_policy: Whether one failure aborts the run or is skipped
        """
        if max_concurrency < 1:
            raise ValidationError(
                f"max_concurrency must be at least 1, got: {max_concurrency}"
            )
        self.aggregator = aggregator
        self.max_concurrency = max_concurrency
        self.failure_policy = FailurePolicy(failure_policy)

    def collect(
        self, prefixes: Sequence[str], stop_on_error: bool = False
    ) -> list[PrefixOutcome]:
        """Aggregate every prefix and return outcomes in completion order.

        Args:
            prefixes: Prefixes to aggregate, each attempted at most once
            stop_on_error: Stop dispatching new prefixes after the first
                failure. Aggregations already running are left to finish.

        Raises:
            LabelCollisionError: If labels are not unique; nothing is dispatched
        """
        labels = check_unique_labels(prefixes)
        outcomes: list[PrefixOutcome] = []
        pending = iter(prefixes)
        stopping = False

        logger.info(
            "Dispatching prefixes",
            prefix_count=len(prefixes),
            max_concurrency=self.max_concurrency,
        )

        with ThreadPoolExecutor(
            max_workers=self.max_concurrency, thread_name_prefix="prefix-aggregate"
        ) as executor:
            in_flight: dict[Future[PrefixSummary], str] = {}

            def dispatch_next() -> None:
                prefix = next(pending, None)
                if prefix is not None:
                    # Worker threads inherit the caller's context so spans nest
                    context = contextvars.copy_context()
                    future = executor.submit(
                        context.run, self.aggregator.aggregate, prefix
                    )
                    in_flight[future] = prefix

            for _ in range(self.max_concurrency):
                dispatch_next()

            while in_flight:
                done, _ = wait(in_flight, return_when=FIRST_COMPLETED)
                for future in done:
                    prefix = in_flight.pop(future)
                    try:
                        summary = future.result()
                    except Exception as e:
                        logger.error(
                            "Prefix aggregation failed",
                            prefix=prefix,
                            error=str(e),
                            error_type=type(e).__name__,
                        )
                        outcomes.append(
                            PrefixOutcome(prefix=prefix, label=labels[prefix], error=e)
                        )
                        if stop_on_error and not stopping:
                            stopping = True
                            logger.warning(
                                "Aborting remaining prefixes",
                                prefix=prefix,
                                in_flight=len(in_flight),
                            )
                    else:
                        outcomes.append(
                            PrefixOutcome(
                                prefix=prefix, label=labels[prefix], summary=summary
                            )
                        )

                    # A finished call frees a slot for the next pending prefix
                    if not stopping:
                        dispatch_next()

        return outcomes

    def run(self, prefixes: Sequence[str]) -> dict[str, PrefixSummary]:
        """Aggregate all prefixes into a mapping of label to summary.

        Under ``fail_fast`` the first failure is re-raised and no mapping is
        returned. Under ``skip_failed`` failed prefixes are left out.
        """
        fail_fast = self.failure_policy is FailurePolicy.fail_fast

        with tracer.start_as_current_span("pipeline_run") as span:
            span.set_attribute("prefix_count", len(prefixes))
            span.set_attribute("failure_policy", self.failure_policy.value)

            outcomes = self.collect(prefixes, stop_on_error=fail_fast)
            failures = [outcome for outcome in outcomes if not outcome.ok]

            if failures and fail_fast:
                first = failures[0]
                assert first.error is not None
                raise first.error

            summaries = {
                outcome.label: outcome.summary
                for outcome in outcomes
                if outcome.summary is not None
            }

            if failures:
                logger.warning(
                    "Skipped failed prefixes",
                    failed=[outcome.prefix for outcome in failures],
                )
            logger.info(
                "Pipeline completed",
                succeeded=len(summaries),
                failed=len(failures),
            )
            return summaries
