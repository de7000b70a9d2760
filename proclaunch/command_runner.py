"""Run external commands and turn their failures into one error type.

Provides:
- ProcessLauncher: launches a command, captures stdout, classifies failures
- execute(): synchronous convenience wrapper
- execute_async(): runs execute() on a worker thread with optional cancellation

A run fails when the child writes to its error stream, exits with a non-zero
code, or cannot be started or read from. Error-stream data takes precedence
over the exit code; both are decided after the process has exited and its
error stream has been fully drained.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
import sys
import threading
from functools import partial
from typing import TYPE_CHECKING, cast

from .config import LauncherConfig
from .errors import ExecutionCancelledError
from .models import (
    CommandInvocation,
    ErrorStreamFailure,
    ExecutionResult,
    ExitCodeFailure,
    LaunchFailure,
)

if TYPE_CHECKING:
    from typing import IO

logger = logging.getLogger(__name__)

# Exceptions that mean the process could not be started, waited on, or read.
# UnicodeDecodeError is a ValueError.
LAUNCH_ERRORS = (OSError, ValueError, subprocess.SubprocessError)


class _ErrorStreamListener(threading.Thread):
    """Drains a child's error stream, recording every line read."""

    def __init__(self, stream: IO[str], invocation: CommandInvocation) -> None:
        super().__init__(name=f"stderr-{invocation.executable}", daemon=True)
        self._stream = stream
        self._invocation = invocation
        self.chunks: list[str] = []
        self.error: BaseException | None = None

    def run(self) -> None:
        try:
            for line in self._stream:
                logger.debug(
                    "stderr: executable=%s chunk=%r", self._invocation.executable, line
                )
                self.chunks.append(line)
        except LAUNCH_ERRORS as e:
            self.error = e
            # Stop reading; closing lets a child blocked on stderr fail fast
            self._stream.close()


def _log_abandoned(invocation: CommandInvocation, future: asyncio.Future[str]) -> None:
    """Consume the outcome of a run nobody is waiting on anymore."""
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.debug(
            "Abandoned run failed: executable=%s error=%s", invocation.executable, exc
        )
    else:
        logger.debug("Abandoned run finished: executable=%s", invocation.executable)


class ProcessLauncher:
    """Launches external commands and captures their standard output.

    Holds no per-call state, so one launcher can serve concurrent calls.

    Example:
        launcher = ProcessLauncher()
        output = launcher.execute("git", "rev-parse HEAD")
        result = launcher.run("false")
        if not result.ok:
            print(result.failure.message)
    """

    def __init__(self, config: LauncherConfig | None = None) -> None:
        self.config = config if config is not None else LauncherConfig()

    @staticmethod
    def build_command(invocation: CommandInvocation) -> list[str] | str:
        """Build the Popen command for an invocation.

        The argument string is never split. On Windows it becomes the tail of
        the command line; elsewhere it is passed as a single argv entry.
        An empty argument string adds nothing.
        """
        escaped = invocation.escaped_arguments
        if sys.platform == "win32":
            command_line = subprocess.list2cmdline([invocation.executable])
            return f"{command_line} {escaped}" if escaped else command_line
        if escaped:
            return [invocation.executable, escaped]
        return [invocation.executable]

    def run(self, executable: str, args: str = "") -> ExecutionResult:
        """Run a command to completion and classify the outcome.

        Args:
            executable: Executable path or name. Not validated up front.
            args: Raw argument string; double quotes are escaped.

        Returns:
            ExecutionResult with stdout on success, or the failure.
        """
        invocation = CommandInvocation(executable, args)
        command = self.build_command(invocation)
        logger.debug("Launching: executable=%s args=%r", executable, args)

        try:
            with subprocess.Popen(command, **self.config.popen_kwargs()) as process:
                stdout_stream = cast("IO[str]", process.stdout)
                listener = _ErrorStreamListener(
                    cast("IO[str]", process.stderr), invocation
                )
                listener.start()
                try:
                    stdout = stdout_stream.read()
                    exit_code = process.wait()
                finally:
                    # Unblocks a child still writing if we stopped reading early
                    stdout_stream.close()
                    listener.join()
        except LAUNCH_ERRORS as e:
            logger.debug("Launch failed: executable=%s error=%s", executable, e)
            return ExecutionResult(
                invocation, failure=LaunchFailure(invocation, str(e), cause=e)
            )

        logger.debug("Exited: executable=%s exit_code=%d", executable, exit_code)

        if listener.error is not None:
            return ExecutionResult(
                invocation,
                failure=LaunchFailure(
                    invocation, str(listener.error), cause=listener.error
                ),
            )
        if listener.chunks:
            return ExecutionResult(
                invocation,
                failure=ErrorStreamFailure(
                    invocation, "".join(listener.chunks).removesuffix("\n")
                ),
            )
        if exit_code != 0:
            return ExecutionResult(
                invocation, failure=ExitCodeFailure(invocation, exit_code)
            )
        return ExecutionResult(invocation, stdout=stdout)

    def execute(self, executable: str, args: str = "") -> str:
        """Run a command and return its standard output.

        Raises:
            ProcessExecutionError: On non-zero exit, error-stream data, or a
                launch failure (chained as __cause__).
        """
        return self.run(executable, args).unwrap()

    async def execute_async(
        self,
        executable: str,
        args: str = "",
        cancel_event: asyncio.Event | None = None,
    ) -> str:
        """Run execute() on a worker thread.

        Cancelling (via cancel_event or Task.cancel()) only stops the caller
        from waiting. The child process is never signalled and keeps running.

        Args:
            executable: Executable path or name.
            args: Raw argument string.
            cancel_event: Optional event; once set, the wait is abandoned.

        Raises:
            ProcessExecutionError: If the command fails.
            ExecutionCancelledError: If cancel_event is set before completion.
        """
        invocation = CommandInvocation(executable, args)
        if cancel_event is None:
            return await asyncio.to_thread(self.execute, executable, args)
        if cancel_event.is_set():
            raise ExecutionCancelledError(
                f'Command "{executable} {args}" cancelled before start'
            )

        work = asyncio.ensure_future(asyncio.to_thread(self.execute, executable, args))
        cancel_waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait(
                {work, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            work.add_done_callback(partial(_log_abandoned, invocation))
            raise
        finally:
            cancel_waiter.cancel()

        if work in done:
            return work.result()

        work.add_done_callback(partial(_log_abandoned, invocation))
        logger.debug("Stopped waiting: executable=%s", executable)
        raise ExecutionCancelledError(f'Command "{executable} {args}" cancelled')


def execute(
    executable: str, args: str = "", *, config: LauncherConfig | None = None
) -> str:
    """Convenience function for one-off synchronous execution.

    Equivalent to ProcessLauncher(config).execute(executable, args).
    """
    return ProcessLauncher(config).execute(executable, args)


async def execute_async(
    executable: str,
    args: str = "",
    *,
    cancel_event: asyncio.Event | None = None,
    config: LauncherConfig | None = None,
) -> str:
    """Convenience function for one-off async execution.

    Equivalent to ProcessLauncher(config).execute_async(executable, args, cancel_event).
    """
    return await ProcessLauncher(config).execute_async(executable, args, cancel_event)
