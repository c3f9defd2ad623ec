"""Persistence of run artifacts and the date CSV export.

A run produces three JSON files:

- ``FULL.json``: the raw prefix list, written before aggregation starts
- ``OUTPUT.json``: label -> {count, size, avg, size_mb, avg_mb}
- ``TOTAL.json``: {total_count, total_size, total_size_mb}

``OUTPUT.json`` can later be reshaped into a ``date,<field>`` CSV for
charting, with ``YYYYMMDD`` labels rendered as ISO dates.
"""

import csv
import io
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Sequence, Union

from bucket_summary.aggregation import GrandTotals, PrefixSummary
from bucket_summary.core import get_logger
from bucket_summary.core.exceptions import ValidationError

logger = get_logger(__name__)

PREFIX_LIST_FILENAME = "FULL.json"
SUMMARIES_FILENAME = "OUTPUT.json"
TOTALS_FILENAME = "TOTAL.json"

CSV_FIELDS = ("count", "size", "avg")
LABEL_DATE_FORMAT = "%Y%m%d"

PathLike = Union[str, Path]


def _write_json(path: PathLike, payload: Any) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload), encoding="utf-8")
    logger.info("Artifact written", path=str(target))
    return target


def write_prefix_list(path: PathLike, prefixes: Sequence[str]) -> Path:
    """Persist the raw prefix list verbatim."""
    return _write_json(path, list(prefixes))


def write_summaries(path: PathLike, summaries: Mapping[str, PrefixSummary]) -> Path:
    """Persist the per-label summaries."""
    return _write_json(
        path, {label: summary.to_dict() for label, summary in summaries.items()}
    )


def write_totals(path: PathLike, totals: GrandTotals) -> Path:
    """Persist the grand totals."""
    return _write_json(path, totals.to_dict())


def load_summaries(path: PathLike) -> dict[str, dict[str, Any]]:
    """Read an OUTPUT.json artifact back into plain dictionaries."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        error_msg = f"Failed to read summaries from '{path}': {e}"
        logger.error(error_msg, error=str(e))
        raise ValidationError(error_msg)

    if not isinstance(data, dict):
        raise ValidationError(f"Summaries file '{path}' must hold a JSON object")
    return data


def label_to_iso_date(label: str) -> str:
    """Turn a ``YYYYMMDD`` label into ``YYYY-MM-DD``."""
    try:
        return datetime.strptime(label, LABEL_DATE_FORMAT).date().isoformat()
    except ValueError:
        raise ValidationError(f"Label is not a YYYYMMDD date: {label!r}")


def build_csv(summaries: Mapping[str, Mapping[str, Any]], field: str = "count") -> str:
    """Build a ``date,<field>`` CSV with one row per label.

    Raises:
        ValidationError: If ``field`` is unsupported, a label is not a date,
            or an entry lacks ``field``
    """
    if field not in CSV_FIELDS:
        raise ValidationError(f"field must be one of {CSV_FIELDS}, got: {field}")

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["date", field])

    for label, summary in summaries.items():
        if field not in summary:
            raise ValidationError(f"Summary for '{label}' has no '{field}' value")
        writer.writerow([label_to_iso_date(label), summary[field]])

    return buffer.getvalue()
