"""Console logging helpers for proclaunch.

Colored, timestamped one-line messages for the CLI.
"""

import logging
import sys
from datetime import datetime
from typing import TextIO


# Global verbose setting (can be modified at runtime)
_verbose_enabled: bool = False
_verbose_handler: logging.Handler | None = None


def set_verbose(enabled: bool) -> None:
    """Enable or disable verbose output globally.

    Verbose mode also routes proclaunch debug logs to stderr.
    """
    global _verbose_enabled, _verbose_handler
    _verbose_enabled = enabled
    package_logger = logging.getLogger("proclaunch")
    if _verbose_handler is not None:
        package_logger.removeHandler(_verbose_handler)
        _verbose_handler = None
    if enabled:
        _verbose_handler = logging.StreamHandler(sys.stderr)
        _verbose_handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
        )
        package_logger.addHandler(_verbose_handler)
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.NOTSET)


def is_verbose_enabled() -> bool:
    """Check if verbose output is currently enabled."""
    return _verbose_enabled


class Colors:
    """ANSI color codes for terminal output (bright variants)."""

    RESET = "\033[0m"
    RED = "\033[91m"
    GRAY = "\033[90m"
    # Subdued style for secondary info (uses gray instead of dim for visibility)
    MUTED = "\033[90m"


def log(
    icon: str,
    message: str,
    color: str = Colors.RESET,
    dim: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Timestamped, colored one-line log message."""
    style = Colors.MUTED if dim else ""
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(
        f"{Colors.GRAY}{timestamp}{Colors.RESET} {style}{color}{icon} {message}{Colors.RESET}",
        file=stream if stream is not None else sys.stdout,
    )
