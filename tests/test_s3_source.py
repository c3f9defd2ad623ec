"""Tests for the boto3 report source."""

from unittest.mock import patch

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from bucket_summary.aggregation import PrefixAggregator
from bucket_summary.core.exceptions import TransportError, ValidationError
from bucket_summary.report import ContentRow, parse_report
from bucket_summary.sources import S3ClientConfig, S3ReportSource

CLIENT_CONFIG = S3ClientConfig(
    access_key_id="test_key",
    secret_access_key="test_secret",
    region_name="us-east-1",
)


@mock_aws
class TestS3ReportSource:
    """Test S3 prefix listing and report rendering with mocked S3."""

    def setup_method(self, method):
        """Set up test environment."""

        self.s3_client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        self.s3_client.create_bucket(Bucket="test-bucket")

        self.s3_client.put_object(
            Bucket="test-bucket", Key="raw/20230115/file1.bin", Body=b"a" * 1024
        )
        self.s3_client.put_object(
            Bucket="test-bucket", Key="raw/20230115/file2.bin", Body=b"b" * 2048
        )
        self.s3_client.put_object(
            Bucket="test-bucket",
            Key="raw/20230116/nested/my file.bin",
            Body=b"c" * 10,
        )
        self.s3_client.put_object(
            Bucket="test-bucket", Key="raw/2023/01/17/file3.bin", Body=b"d"
        )

    def test_list_prefixes_one_level(self):
        source = S3ReportSource("test-bucket", CLIENT_CONFIG, root_prefix="raw")

        prefixes = source.list_prefixes()

        assert sorted(prefixes) == ["raw/2023/", "raw/20230115/", "raw/20230116/"]

    def test_list_prefixes_nested(self):
        source = S3ReportSource(
            "test-bucket", CLIENT_CONFIG, root_prefix="raw/2023/", depth=2
        )
        assert source.list_prefixes() == ["raw/2023/01/17/"]

    def test_list_prefixes_bucket_root(self):
        source = S3ReportSource("test-bucket", CLIENT_CONFIG)
        assert source.list_prefixes() == ["raw/"]

    def test_report_parses(self):
        source = S3ReportSource("test-bucket", CLIENT_CONFIG)

        rows = parse_report(source.fetch_report("raw/20230115/"))

        content = [row for row in rows if isinstance(row, ContentRow)]
        assert [row.file_name for row in content] == [
            "raw/20230115/file1.bin",
            "raw/20230115/file2.bin",
        ]
        assert [row.size for row in content] == [1024, 2048]

    def test_report_aggregates(self):
        source = S3ReportSource("test-bucket", CLIENT_CONFIG)

        summary = PrefixAggregator(source.fetch_report).aggregate("raw/20230115/")

        assert summary.label == "20230115"
        assert summary.count == 2
        assert summary.size == 3072
        assert summary.avg == 1536

    def test_report_keeps_spaces_in_keys(self):
        source = S3ReportSource("test-bucket", CLIENT_CONFIG)

        rows = parse_report(source.fetch_report("raw/20230116/"))

        assert rows[0].file_name == "raw/20230116/nested/my file.bin"

    def test_empty_prefix_reports_zero_objects(self):
        source = S3ReportSource("test-bucket", CLIENT_CONFIG)

        report = source.fetch_report("missing/")

        assert "Total Objects: 0" in report
        assert "Total Size: 0" in report

    def test_missing_bucket(self):
        source = S3ReportSource("no-such-bucket", CLIENT_CONFIG)
        with pytest.raises(TransportError, match="no-such-bucket"):
            source.list_prefixes()


class TestS3ReportSourceValidation:
    """Test construction-time validation."""

    def test_depth_must_be_positive(self):
        with pytest.raises(ValidationError):
            S3ReportSource("test-bucket", CLIENT_CONFIG, depth=0)

    def test_root_prefix_gets_delimiter(self):
        source = S3ReportSource("test-bucket", CLIENT_CONFIG, root_prefix="raw")
        assert source.root_prefix == "raw/"

    def test_client_error_wrapped(self):
        source = S3ReportSource("test-bucket", CLIENT_CONFIG)
        error = ClientError({"Error": {"Code": "AccessDenied"}}, "ListObjectsV2")

        with patch.object(source.client_manager, "_create_client") as create:
            create.return_value.get_paginator.return_value.paginate.side_effect = error
            with pytest.raises(TransportError, match="AccessDenied"):
                source.fetch_report("raw/20230115/")
