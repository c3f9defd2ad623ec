"""Report sources: where prefix lists and per-prefix reports come from."""

from .base import ReportSource
from .command_source import CommandReportSource
from .s3_client import S3ClientConfig, S3ClientManager
from .s3_source import S3ReportSource

__all__ = [
    "ReportSource",
    "CommandReportSource",
    "S3ClientConfig",
    "S3ClientManager",
    "S3ReportSource",
]
