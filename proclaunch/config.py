"""Configuration dataclass for proclaunch.

Provides LauncherConfig, the read-only template every launch is built from.
Programmatic users construct it directly; the CLI loads it from environment
variables via from_env().

Environment Variables:
    PROCLAUNCH_ENCODING: Text encoding for child output (default: utf-8)
    PROCLAUNCH_ENCODING_ERRORS: Decode error handler (default: strict)
    PROCLAUNCH_CWD: Working directory for the child (default: inherit)
"""

from __future__ import annotations

import codecs
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        message = "Configuration validation failed:\n" + "\n".join(
            f"  - {e}" for e in errors
        )
        super().__init__(message)


@dataclass(frozen=True)
class LauncherConfig:
    """Process start settings shared by every invocation.

    The instance is never mutated; popen_kwargs() builds a fresh mapping
    for each launch, so one config can back concurrent calls.

    Attributes:
        encoding: Encoding used to decode stdout and stderr.
            Env: PROCLAUNCH_ENCODING (default: utf-8)
        encoding_errors: Codec error handler for decoding.
            Env: PROCLAUNCH_ENCODING_ERRORS (default: strict)
        cwd: Working directory for the child. None inherits ours.
            Env: PROCLAUNCH_CWD
        create_no_window: Suppress the console window on Windows.

    Example:
        config = LauncherConfig(encoding="latin-1", cwd=Path("/srv/app"))
        config = LauncherConfig.from_env()
    """

    encoding: str = "utf-8"
    encoding_errors: str = "strict"
    cwd: Path | None = None
    create_no_window: bool = True

    @classmethod
    def from_env(cls, *, validate: bool = True) -> LauncherConfig:
        """Create LauncherConfig from environment variables.

        Empty values are treated as unset.

        Raises:
            ConfigurationError: If validate=True and configuration is invalid.
        """
        encoding = os.environ.get("PROCLAUNCH_ENCODING") or "utf-8"
        encoding_errors = os.environ.get("PROCLAUNCH_ENCODING_ERRORS") or "strict"
        cwd_value = os.environ.get("PROCLAUNCH_CWD") or None

        config = cls(
            encoding=encoding,
            encoding_errors=encoding_errors,
            cwd=Path(cwd_value) if cwd_value else None,
        )

        if validate:
            errors = config.validate()
            if errors:
                raise ConfigurationError(errors)

        return config

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Checks:
            - encoding is a known codec
            - encoding_errors is a registered error handler
            - cwd, when set, is an existing directory

        Returns:
            List of error messages. Empty list if configuration is valid.
        """
        errors: list[str] = []

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            errors.append(f"unknown encoding: {self.encoding}")

        try:
            codecs.lookup_error(self.encoding_errors)
        except LookupError:
            errors.append(f"unknown encoding error handler: {self.encoding_errors}")

        if self.cwd is not None and not self.cwd.is_dir():
            errors.append(f"cwd is not an existing directory: {self.cwd}")

        return errors

    def popen_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for subprocess.Popen, built fresh per call."""
        kwargs: dict[str, Any] = {
            "stdout": subprocess.PIPE,
            "stderr": subprocess.PIPE,
            "shell": False,
            "text": True,
            "encoding": self.encoding,
            "errors": self.encoding_errors,
        }
        if self.cwd is not None:
            kwargs["cwd"] = str(self.cwd)
        if sys.platform == "win32" and self.create_no_window:
            kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW
        return kwargs
