"""Report source backed by external commands.

The prefix list and each per-prefix report are produced by child processes,
by default the AWS CLI. Command templates are plain strings split with shell
rules; ``{bucket}`` and ``{prefix}`` placeholders are substituted per token,
so values are never re-interpreted by a shell.
"""

import json
import shlex
import subprocess
from typing import Optional

from bucket_summary.command_executor import CommandExecutor, LocalCommandExecutor
from bucket_summary.core import get_logger
from bucket_summary.core.exceptions import TransportError

logger = get_logger(__name__)


def render_command(template: str, **values: str) -> list[str]:
    """Split a command template and substitute placeholders in each token."""
    return [token.format(**values) for token in shlex.split(template)]


class CommandReportSource:
    """Lists prefixes and fetches reports by running external commands."""

    def __init__(
        self,
        bucket: str,
        list_command: str,
        report_command: str,
        timeout: int = 300,
        executor: Optional[CommandExecutor] = None,
    ):
        """Initialize command report source.

        Args:
            bucket: Bucket name substituted for ``{bucket}``
            list_command: Template printing a JSON array of prefixes
            report_command: Template printing the report for ``{prefix}``
            timeout: Per-command timeout in seconds
            executor: Command executor, local subprocesses by default
        """
        self.bucket = bucket
        self.list_command = list_command
        self.report_command = report_command
        self.timeout = timeout
        self.executor = executor or LocalCommandExecutor()

    def _run(self, argv: list[str]) -> str:
        """Run a command, treating any exit code or stderr output as failure."""
        logger.debug("Running command", argv=argv, timeout=self.timeout)

        try:
            result = self.executor.execute_command(argv, self.timeout)
        except subprocess.TimeoutExpired:
            error_msg = f"Command timed out after {self.timeout} seconds: {argv[0]}"
            logger.error(error_msg, argv=argv)
            raise TransportError(error_msg)
        except OSError as e:
            error_msg = f"Failed to start command '{argv[0]}': {e}"
            logger.error(error_msg, error=str(e))
            raise TransportError(error_msg)

        stderr = (result.stderr or "").strip()
        if result.returncode != 0 or stderr:
            error_msg = (
                f"Command '{argv[0]}' failed with exit code {result.returncode}: "
                f"{stderr or 'no error output'}"
            )
            logger.error(error_msg, argv=argv, returncode=result.returncode)
            raise TransportError(error_msg)

        return result.stdout

    def list_prefixes(self) -> list[str]:
        """Run the list command and decode its JSON array of prefixes.

        Raises:
            TransportError: If the command fails or does not print a JSON
                array of strings
        """
        argv = render_command(self.list_command, bucket=self.bucket)
        logger.info("Listing prefixes", bucket=self.bucket)

        output = self._run(argv)
        try:
            prefixes = json.loads(output.replace("\n", ""))
        except json.JSONDecodeError as e:
            error_msg = f"Prefix list is not valid JSON: {e}"
            logger.error(error_msg, error=str(e))
            raise TransportError(error_msg)

        # The AWS CLI prints null when a bucket has no common prefixes
        if prefixes is None:
            prefixes = []

        if not isinstance(prefixes, list) or not all(
            isinstance(prefix, str) for prefix in prefixes
        ):
            raise TransportError(
                f"Prefix list must be a JSON array of strings, got: {output[:200]!r}"
            )

        logger.info("Prefixes listed", bucket=self.bucket, prefix_count=len(prefixes))
        return prefixes

    def fetch_report(self, prefix: str) -> str:
        """Run the report command for one prefix and return its output."""
        argv = render_command(self.report_command, bucket=self.bucket, prefix=prefix)
        return self._run(argv)
