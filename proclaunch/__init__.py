"""proclaunch: run external commands and surface failures as one error."""

from .command_runner import ProcessLauncher, execute, execute_async
from .config import ConfigurationError, LauncherConfig
from .errors import ExecutionCancelledError, ProcessExecutionError
from .models import (
    CommandInvocation,
    ErrorStreamFailure,
    ExecutionResult,
    ExitCodeFailure,
    Failure,
    LaunchFailure,
)

__version__ = "0.1.0"
__all__ = [
    "CommandInvocation",
    "ConfigurationError",
    "ErrorStreamFailure",
    "ExecutionCancelledError",
    "ExecutionResult",
    "ExitCodeFailure",
    "Failure",
    "LaunchFailure",
    "LauncherConfig",
    "ProcessExecutionError",
    "ProcessLauncher",
    "__version__",
    "execute",
    "execute_async",
]
