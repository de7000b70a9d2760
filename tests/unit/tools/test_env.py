"""Unit tests for proclaunch.tools.env."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from proclaunch.tools import env

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


class TestLoadEnv:
    """Tests for .env loading."""

    def test_load_user_env_reads_user_config_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".env").write_text("PROCLAUNCH_ENCODING=latin-1\n")
        # Register the variable so monkeypatch removes it again on teardown
        monkeypatch.setenv("PROCLAUNCH_ENCODING", "placeholder")
        monkeypatch.delenv("PROCLAUNCH_ENCODING")
        with patch.object(env, "USER_CONFIG_DIR", tmp_path):
            env.load_user_env()
        assert os.environ["PROCLAUNCH_ENCODING"] == "latin-1"

    def test_load_user_env_does_not_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".env").write_text("PROCLAUNCH_ENCODING=latin-1\n")
        monkeypatch.setenv("PROCLAUNCH_ENCODING", "utf-8")
        with patch.object(env, "USER_CONFIG_DIR", tmp_path):
            env.load_user_env()
        assert os.environ["PROCLAUNCH_ENCODING"] == "utf-8"

    def test_load_env_extra_file_overrides(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        user_dir = tmp_path / "user"
        user_dir.mkdir()
        (user_dir / ".env").write_text("PROCLAUNCH_ENCODING_ERRORS=strict\n")
        extra = tmp_path / "extra.env"
        extra.write_text("PROCLAUNCH_ENCODING_ERRORS=replace\n")
        monkeypatch.setenv("PROCLAUNCH_ENCODING_ERRORS", "ignore")
        with patch.object(env, "USER_CONFIG_DIR", user_dir):
            env.load_env(extra)
        assert os.environ["PROCLAUNCH_ENCODING_ERRORS"] == "replace"

    def test_missing_env_file_is_ignored(self, tmp_path: Path) -> None:
        with patch.object(env, "USER_CONFIG_DIR", tmp_path / "absent"):
            env.load_user_env()
