"""Parsing of per-prefix textual inventory reports."""

from .parser import (
    ContentRow,
    ReportRow,
    TotalObjectsRow,
    TotalSizeRow,
    parse_report,
    parse_report_line,
)
from .summary import ReportSummary, extract_summary

__all__ = [
    "ContentRow",
    "ReportRow",
    "TotalObjectsRow",
    "TotalSizeRow",
    "parse_report",
    "parse_report_line",
    "ReportSummary",
    "extract_summary",
]
