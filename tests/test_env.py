"""Layered .env / .env.local loading."""

from __future__ import annotations

import os
from unittest.mock import patch

from nodered_mcp.env import load_env


def _write(path, **values):
    path.write_text("".join(f"{k}={v}\n" for k, v in values.items()))


def test_loads_env_then_env_local(tmp_path):
    """.env.local overrides values from .env."""
    _write(tmp_path / ".env", NODE_RED_URL="http://from-env:1880", NODE_RED_TOKEN="base")
    _write(tmp_path / ".env.local", NODE_RED_TOKEN="local")
    with patch.dict(os.environ, {}, clear=True):
        load_env(tmp_path)
        assert os.environ["NODE_RED_URL"] == "http://from-env:1880"
        assert os.environ["NODE_RED_TOKEN"] == "local"


def test_real_env_wins_over_files(tmp_path):
    """Variables already in the environment beat both files."""
    _write(tmp_path / ".env", NODE_RED_URL="http://from-env:1880")
    _write(tmp_path / ".env.local", NODE_RED_URL="http://from-local:1880")
    with patch.dict(os.environ, {"NODE_RED_URL": "http://real:1880"}, clear=True):
        load_env(tmp_path)
        assert os.environ["NODE_RED_URL"] == "http://real:1880"


def test_missing_files_are_fine(tmp_path):
    """No env files leaves the environment untouched."""
    with patch.dict(os.environ, {"KEEP": "1"}, clear=True):
        load_env(tmp_path)
        assert dict(os.environ) == {"KEEP": "1"}
