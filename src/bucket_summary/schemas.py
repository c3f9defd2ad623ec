"""Report source configuration schemas for bucket-summary."""

from typing import Literal, Union

from pydantic import BaseModel, Field

from .core import settings


class CommandSourceConfig(BaseModel):
    """Configuration for prefix listing and reports via external commands."""
    type: Literal["command"] = "command"
    bucket: str = Field(..., description="Bucket name")
    list_command: str = Field(
        default=settings.list_command,
        description="Command template printing a JSON array of prefixes",
    )
    report_command: str = Field(
        default=settings.report_command,
        description="Command template printing the report for {prefix}",
    )
    timeout: int = Field(default=settings.timeout, description="Command timeout")


class S3SourceConfig(BaseModel):
    """Configuration for prefix listing and reports via the S3 API."""
    type: Literal["s3"] = "s3"
    bucket: str = Field(..., description="Bucket name")
    root_prefix: str = Field(default="", description="Prefix holding date folders")
    depth: int = Field(default=1, ge=1, description="Folder levels per prefix")
    access_key_id: str | None = Field(default=None, description="AWS access key ID")
    secret_access_key: str | None = Field(
        default=None, description="AWS secret access key"
    )
    session_token: str | None = Field(default=None, description="AWS session token")
    region_name: str | None = Field(default=None, description="AWS region")
    endpoint_url: str | None = Field(default=None, description="Custom S3 endpoint URL")
    aws_profile: str | None = Field(default=None, description="AWS profile name")


# Discriminated union for report source configurations
SourceConfig = Union[CommandSourceConfig, S3SourceConfig]
