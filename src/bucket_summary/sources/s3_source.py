"""Report source that talks to S3 directly through boto3.

Reports are rendered in the same layout the AWS CLI prints for
``aws s3 ls --recursive --summarize`` so they go through the regular parser.
"""

from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from bucket_summary.core import get_logger
from bucket_summary.core.exceptions import TransportError, ValidationError

from .s3_client import S3ClientConfig, S3ClientManager

logger = get_logger(__name__)

DELIMITER = "/"


def format_report_line(last_modified, size: int, key: str) -> str:
    """Render one object as a listing line."""
    stamp = last_modified.strftime("%Y-%m-%d %H:%M:%S")
    return f"{stamp} {size:>10} {key}"


class S3ReportSource:
    """Lists date prefixes and renders per-prefix reports from S3 listings."""

    def __init__(
        self,
        bucket: str,
        client_config: Optional[S3ClientConfig] = None,
        root_prefix: str = "",
        depth: int = 1,
    ):
        """Initialize S3 report source.

        Args:
            bucket: Bucket to summarize
            client_config: S3 client configuration
            root_prefix: Prefix under which the date folders live
            depth: Number of folder levels below ``root_prefix`` that form one
                summarized prefix, e.g. 3 for ``raw/2023/01/15/``
        """
        if depth < 1:
            raise ValidationError(f"depth must be at least 1, got: {depth}")

        self.bucket = bucket
        self.client_manager = S3ClientManager(client_config or S3ClientConfig())
        self.root_prefix = root_prefix
        if self.root_prefix and not self.root_prefix.endswith(DELIMITER):
            self.root_prefix += DELIMITER
        self.depth = depth

    def _common_prefixes(self, prefix: str) -> list[str]:
        paginator = self.client_manager.client.get_paginator("list_objects_v2")
        page_iterator = paginator.paginate(
            Bucket=self.bucket, Prefix=prefix, Delimiter=DELIMITER
        )

        found = []
        for page in page_iterator:
            for prefix_info in page.get("CommonPrefixes", []):
                found.append(prefix_info["Prefix"])
        return found

    def list_prefixes(self) -> list[str]:
        """Walk common prefixes ``depth`` levels below the root prefix."""
        logger.info(
            "Listing S3 prefixes",
            bucket=self.bucket,
            root_prefix=self.root_prefix,
            depth=self.depth,
        )

        try:
            level = [self.root_prefix]
            for _ in range(self.depth):
                level = [
                    child for parent in level for child in self._common_prefixes(parent)
                ]
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to list prefixes in bucket '{self.bucket}': {e}"
            logger.error(error_msg, error=str(e))
            raise TransportError(error_msg)

        logger.info("S3 prefixes listed", bucket=self.bucket, prefix_count=len(level))
        return level

    def fetch_report(self, prefix: str) -> str:
        """List every object under ``prefix`` and render the summary report."""
        lines = []
        total_objects = 0
        total_size = 0

        try:
            paginator = self.client_manager.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    size = obj.get("Size", 0)
                    lines.append(
                        format_report_line(obj["LastModified"], size, obj["Key"])
                    )
                    total_objects += 1
                    total_size += size
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to list objects under 's3://{self.bucket}/{prefix}': {e}"
            logger.error(error_msg, error=str(e))
            raise TransportError(error_msg)

        lines.append("")
        lines.append(f"Total Objects: {total_objects}")
        lines.append(f"   Total Size: {total_size}")
        return "\n".join(lines) + "\n"
