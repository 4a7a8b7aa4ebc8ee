"""
Runs external commands for the downloader.
"""

import logging
import subprocess
from typing import List, Optional, Sequence

from remotetheme.remotetheme_exceptions import ExecutionError, ExecutionErrorKind
from remotetheme.remotetheme_logger import RemoteThemeLogger

# Exit status used by coreutils `timeout` when the command was killed
TIMEOUT_EXIT_STATUS = 124


class CommandExecutor:
    """
    Runs an argument vector (never through a shell) and raises
    ExecutionError unless it exits with status 0.

    An optional ``timeout_command`` (e.g. ``["timeout", "60"]``) is prefixed
    to every command, and ``timeout`` bounds the process from Python's side.
    """

    def __init__(
        self,
        logger: RemoteThemeLogger,
        timeout_command: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
    ):
        self.logger = logger
        self.timeout_command: List[str] = list(timeout_command or [])
        self.timeout = timeout

    def run_command(self, *cmds: str) -> subprocess.CompletedProcess:
        """
        Run ``cmds`` and return the completed process.

        Raises:
            ExecutionError: TIMED_OUT if the process was stopped for running
                too long, NON_ZERO_EXIT for any other failure
        """
        command = [*self.timeout_command, *cmds]
        self.logger.log(f"Running command: {' '.join(command)}", logging.DEBUG)

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ExecutionError(
                ExecutionErrorKind.TIMED_OUT,
                command,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr),
            ) from e
        except OSError as e:
            # Executable missing or not runnable, reported like a shell would
            raise ExecutionError(
                ExecutionErrorKind.NON_ZERO_EXIT,
                command,
                exit_code=127,
                stderr=str(e),
            ) from e

        self.logger.log(
            f"Command exited with status {result.returncode}", logging.DEBUG
        )

        if result.returncode == 0:
            return result

        if self.timeout_command and result.returncode == TIMEOUT_EXIT_STATUS:
            raise ExecutionError(
                ExecutionErrorKind.TIMED_OUT,
                command,
                exit_code=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        raise ExecutionError(
            ExecutionErrorKind.NON_ZERO_EXIT,
            command,
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )


def _as_text(output) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
