#!/usr/bin/env python3
"""
proclaunch: run external commands and surface failures as one error.

This module is a thin shim that exposes the CLI app from proclaunch.cli.

Usage:
    proclaunch run [OPTIONS] EXECUTABLE [ARGS]
"""

from .cli import app, bootstrap

bootstrap()

if __name__ == "__main__":
    app()
