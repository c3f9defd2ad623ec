"""S3 client configuration and management.

The S3ClientManager hides boto3 client creation behind a lazily built client,
choosing between an AWS CLI profile, explicit credentials, or the default
credential chain. A custom ``endpoint_url`` allows S3-compatible services such
as MinIO.
"""

from typing import Any, Dict, Optional

import boto3
from pydantic import BaseModel, ConfigDict, Field

from bucket_summary.core import get_logger

logger = get_logger(__name__)


class S3ClientConfig(BaseModel):
    """Configuration for S3 client connections.

    Authentication Priority:
        1. If aws_profile is provided, use profile-based authentication
        2. If explicit credentials are provided, use them
        3. Otherwise, fall back to default AWS credential chain
    """

    model_config = ConfigDict(extra="forbid")

    access_key_id: Optional[str] = Field(None, description="AWS access key ID")
    secret_access_key: Optional[str] = Field(None, description="AWS secret access key")
    session_token: Optional[str] = Field(
        None, description="AWS session token for temporary credentials"
    )
    region_name: str = Field("us-east-1", description="AWS region name")
    endpoint_url: Optional[str] = Field(
        None, description="Custom S3 endpoint URL for S3-compatible services"
    )
    aws_profile: Optional[str] = Field(
        None, description="AWS CLI profile name to use for credentials"
    )


class S3ClientManager:
    """Owns a lazily created boto3 S3 client."""

    def __init__(self, config: S3ClientConfig):
        self.config = config
        self._client = None

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        kwargs: Dict[str, Any] = {"region_name": self.config.region_name}

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        if self.config.aws_profile:
            session = boto3.Session(profile_name=self.config.aws_profile)
            logger.info(
                "S3 client created with profile", profile=self.config.aws_profile
            )
            return session.client("s3", **kwargs)

        if self.config.access_key_id and self.config.secret_access_key:
            kwargs["aws_access_key_id"] = self.config.access_key_id
            kwargs["aws_secret_access_key"] = self.config.secret_access_key
            if self.config.session_token:
                kwargs["aws_session_token"] = self.config.session_token
            logger.info("S3 client created with explicit credentials")
        else:
            logger.info("S3 client created with default credential chain")

        return boto3.client("s3", **kwargs)
