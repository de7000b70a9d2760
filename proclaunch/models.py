"""Value types for command execution.

Types:
- CommandInvocation: Executable plus the raw argument string
- ExitCodeFailure: Process exited with a non-zero code
- ErrorStreamFailure: Process wrote to its error stream
- LaunchFailure: Starting, waiting on, or reading from the process raised
- ExecutionResult: Captured stdout or the failure that replaced it
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .errors import ProcessExecutionError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

ERROR_TEXT_TEMPLATE = '{timestamp} :: Command "{executable} {arguments}" raised error:\n {text}'
EXIT_CODE_TEMPLATE = (
    '{timestamp} :: Command "{executable} {arguments}" exited with exit code: \'{code}\''
)


def _now() -> datetime:
    return datetime.now()


def _format_error_text(
    invocation: CommandInvocation, text: str, timestamp: datetime
) -> str:
    return ERROR_TEXT_TEMPLATE.format(
        timestamp=timestamp.strftime(TIMESTAMP_FORMAT),
        executable=invocation.executable,
        arguments=invocation.arguments,
        text=text,
    )


@dataclass(frozen=True)
class CommandInvocation:
    """A single command to launch.

    Attributes:
        executable: Path or name of the executable. Not validated; a bad
            value surfaces as a LaunchFailure.
        arguments: Raw argument string as given by the caller.
    """

    executable: str
    arguments: str = ""

    @property
    def escaped_arguments(self) -> str:
        """Arguments with every double quote preceded by a backslash."""
        return self.arguments.replace('"', '\\"')


@dataclass(frozen=True)
class ExitCodeFailure:
    """The process terminated with a non-zero exit code."""

    invocation: CommandInvocation
    exit_code: int
    timestamp: datetime = field(default_factory=_now)

    @property
    def message(self) -> str:
        return EXIT_CODE_TEMPLATE.format(
            timestamp=self.timestamp.strftime(TIMESTAMP_FORMAT),
            executable=self.invocation.executable,
            arguments=self.invocation.arguments,
            code=self.exit_code,
        )


@dataclass(frozen=True)
class ErrorStreamFailure:
    """The process wrote data to its error stream."""

    invocation: CommandInvocation
    error_text: str
    timestamp: datetime = field(default_factory=_now)

    @property
    def message(self) -> str:
        return _format_error_text(self.invocation, self.error_text, self.timestamp)


@dataclass(frozen=True)
class LaunchFailure:
    """An exception was raised while starting or talking to the process."""

    invocation: CommandInvocation
    error_text: str
    cause: BaseException | None = None
    timestamp: datetime = field(default_factory=_now)

    @property
    def message(self) -> str:
        return _format_error_text(self.invocation, self.error_text, self.timestamp)


Failure = ExitCodeFailure | ErrorStreamFailure | LaunchFailure


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one command execution.

    Exactly one of stdout (on success) or failure is meaningful. Output
    captured before a failure is not kept.
    """

    invocation: CommandInvocation
    stdout: str = ""
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        """Whether the process exited 0 without writing to its error stream."""
        return self.failure is None

    def unwrap(self) -> str:
        """Return captured stdout, or raise ProcessExecutionError on failure."""
        if self.failure is None:
            return self.stdout
        cause = self.failure.cause if isinstance(self.failure, LaunchFailure) else None
        error = ProcessExecutionError(
            self.failure.message, cause=cause, failure=self.failure
        )
        if cause is not None:
            raise error from cause
        raise error
