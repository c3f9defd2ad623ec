"""Tests for header total extraction."""

import pytest

from bucket_summary.core.exceptions import StructuralMismatchError
from bucket_summary.report import (
    ContentRow,
    ReportSummary,
    TotalObjectsRow,
    TotalSizeRow,
    extract_summary,
    parse_report,
)

CONTENT = ContentRow(date="2023-01-15", time="10:00:00", size=1, file_name="a")


class TestExtractSummary:
    """Test extraction of totals from parsed rows."""

    def test_recovers_header_values(self, sample_report):
        summary = extract_summary(parse_report(sample_report))
        assert summary == ReportSummary(total_objects=2, total_size=3072)

    def test_headers_only(self):
        rows = [TotalObjectsRow(value=0), TotalSizeRow(value=0)]
        assert extract_summary(rows) == ReportSummary(total_objects=0, total_size=0)

    def test_headers_in_any_position(self):
        rows = [TotalSizeRow(value=7), CONTENT, TotalObjectsRow(value=1)]
        assert extract_summary(rows) == ReportSummary(total_objects=1, total_size=7)

    @pytest.mark.parametrize("rows", [[], [TotalObjectsRow(value=1)]])
    def test_too_few_rows(self, rows):
        with pytest.raises(StructuralMismatchError, match="at least"):
            extract_summary(rows)

    def test_missing_size_row(self):
        with pytest.raises(StructuralMismatchError, match="Total Size"):
            extract_summary([CONTENT, TotalObjectsRow(value=1)])

    def test_missing_objects_row(self):
        with pytest.raises(StructuralMismatchError, match="Total Objects"):
            extract_summary([CONTENT, CONTENT, TotalSizeRow(value=2)])

    def test_duplicate_header_row(self):
        rows = [TotalObjectsRow(value=1), TotalObjectsRow(value=2), TotalSizeRow(value=3)]
        with pytest.raises(StructuralMismatchError, match="found 2"):
            extract_summary(rows)
