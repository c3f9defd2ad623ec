import subprocess
from typing import Protocol, Sequence


class CommandExecutor(Protocol):
    """Protocol for executing the external listing and report commands."""

    def execute_command(
        self, argv: Sequence[str], timeout: int
    ) -> subprocess.CompletedProcess[str]:
        """Execute the command and return the result."""
        ...


class LocalCommandExecutor(CommandExecutor):
    """Executes commands as local child processes."""

    def execute_command(
        self, argv: Sequence[str], timeout: int
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            list(argv), capture_output=True, text=True, timeout=timeout
        )
