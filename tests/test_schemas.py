"""Tests for report source configuration schemas."""

import pytest
from pydantic import ValidationError

from bucket_summary.core import settings
from bucket_summary.schemas import CommandSourceConfig, S3SourceConfig
from bucket_summary.sources import S3ClientConfig


class TestCommandSourceConfig:
    """Test command source configuration."""

    def test_defaults_from_settings(self):
        config = CommandSourceConfig(bucket="my-bucket")
        assert config.type == "command"
        assert config.list_command == settings.list_command
        assert config.report_command == settings.report_command
        assert config.timeout == settings.timeout

    def test_bucket_required(self):
        with pytest.raises(ValidationError):
            CommandSourceConfig()


class TestS3SourceConfig:
    """Test S3 source configuration."""

    def test_defaults(self):
        config = S3SourceConfig(bucket="my-bucket")
        assert config.type == "s3"
        assert config.root_prefix == ""
        assert config.depth == 1
        assert config.access_key_id is None
        assert config.aws_profile is None

    def test_depth_must_be_positive(self):
        with pytest.raises(ValidationError):
            S3SourceConfig(bucket="my-bucket", depth=0)


class TestS3ClientConfig:
    """Test S3 client configuration."""

    def test_defaults(self):
        config = S3ClientConfig()
        assert config.region_name == "us-east-1"
        assert config.endpoint_url is None

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            S3ClientConfig(bucket="nope")


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        assert settings.max_concurrency == 10
        assert settings.timeout == 300
        assert "{prefix}" in settings.report_command
