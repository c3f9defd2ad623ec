"""Tests for single-prefix aggregation."""

from unittest.mock import Mock

import pytest

from bucket_summary.aggregation import PrefixAggregator, PrefixSummary, derive_label
from bucket_summary.core.exceptions import (
    DivisionByZeroError,
    MalformedReportError,
    StructuralMismatchError,
    TransportError,
    ValidationError,
)


class TestDeriveLabel:
    """Test label derivation from prefixes."""

    @pytest.mark.parametrize(
        "prefix, label",
        [
            ("raw/2023/01/15/", "15"),
            ("20230115/", "20230115"),
            ("logs//20230115", "20230115"),
            ("/a/b/", "b"),
        ],
    )
    def test_last_non_empty_segment(self, prefix, label):
        assert derive_label(prefix) == label

    @pytest.mark.parametrize("prefix", ["", "/", "///"])
    def test_no_segment(self, prefix):
        with pytest.raises(ValidationError):
            derive_label(prefix)


class TestPrefixAggregator:
    """Test fetch, parse and summarize for one prefix."""

    def test_worked_example(self, sample_report):
        fetch = Mock(return_value=sample_report)
        summary = PrefixAggregator(fetch).aggregate("raw/2023/01/15/")

        assert summary.label == "15"
        assert summary.prefix == "raw/2023/01/15/"
        assert summary.to_dict() == {
            "count": 2,
            "size": 3072,
            "avg": 1536,
            "size_mb": "0 MB",
            "avg_mb": "0 MB",
        }
        fetch.assert_called_once_with("raw/2023/01/15/")

    def test_average_is_floored(self):
        report = "a b 1 x\na b 1 y\na b 2 z\nTotal Objects: 3\nTotal Size: 4\n"
        summary = PrefixAggregator(lambda prefix: report).aggregate("p/")
        assert summary.avg == 1

    def test_megabyte_fields(self):
        report = "Total Objects: 2\nTotal Size: 3145728\n"
        summary = PrefixAggregator(lambda prefix: report).aggregate("p/")
        assert summary.size_mb == "3 MB"
        assert summary.avg_mb == "1.5 MB"

    def test_summary_is_immutable(self, sample_report):
        summary = PrefixAggregator(lambda prefix: sample_report).aggregate("p/")
        with pytest.raises(AttributeError):
            summary.count = 10

    def test_zero_objects_fails(self):
        fetch = Mock(return_value="Total Objects: 0\nTotal Size: 0\n")
        with pytest.raises(DivisionByZeroError, match="zero objects"):
            PrefixAggregator(fetch).aggregate("raw/20230115/")

    def test_transport_error_propagates(self):
        fetch = Mock(side_effect=TransportError("exit 255"))
        with pytest.raises(TransportError):
            PrefixAggregator(fetch).aggregate("raw/20230115/")

    def test_malformed_report_propagates(self):
        fetch = Mock(return_value="nonsense\nTotal Objects: 1\nTotal Size: 1\n")
        with pytest.raises(MalformedReportError):
            PrefixAggregator(fetch).aggregate("raw/20230115/")

    def test_missing_totals(self):
        fetch = Mock(return_value="2023-01-15 10:00:00 1 a\n")
        with pytest.raises(StructuralMismatchError):
            PrefixAggregator(fetch).aggregate("raw/20230115/")

    def test_invalid_prefix_is_not_fetched(self):
        fetch = Mock()
        with pytest.raises(ValidationError):
            PrefixAggregator(fetch).aggregate("//")
        fetch.assert_not_called()

    def test_equality_ignores_origin(self):
        first = PrefixSummary(1, 2, 2, "0 MB", "0 MB", prefix="a/", label="a")
        second = PrefixSummary(1, 2, 2, "0 MB", "0 MB", prefix="b/", label="b")
        assert first == second
