"""Exceptions raised by proclaunch."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Failure


class ProcessExecutionError(Exception):
    """Raised when an external command fails.

    Covers a non-zero exit code, data on the error stream, and any exception
    raised while launching or reading from the process.

    Attributes:
        message: Formatted message including timestamp, command and details.
        cause: The wrapped launch exception, if any.
        failure: The failure record the error was built from, if any.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        failure: Failure | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.failure = failure


class ExecutionCancelledError(Exception):
    """Raised when the caller stops waiting on an async execution.

    The child process is not terminated and keeps running.
    """
