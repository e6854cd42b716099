"""Shared test fixtures."""

from __future__ import annotations

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from qbridge.config import (
    AGENT_MAX_RESPONSE_SIZE_ENV_VAR,
    AGENT_TIMEOUT_ENV_VAR,
    ENABLE_TOOLS_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
)
from qbridge.tools import Q_DEVELOPER_TOOL_NAME


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without qbridge settings in the environment."""
    for name in (
        ENABLE_TOOLS_ENV_VAR,
        AGENT_TIMEOUT_ENV_VAR,
        AGENT_MAX_RESPONSE_SIZE_ENV_VAR,
        LOG_LEVEL_ENV_VAR,
        "QBRIDGE_Q_PROGRAM",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def enabled_env() -> dict[str, str]:
    """An environment mapping with the Q Developer tool enabled."""
    return {ENABLE_TOOLS_ENV_VAR: Q_DEVELOPER_TOOL_NAME}


@pytest.fixture
def fake_q(tmp_path: Path) -> Callable[[str], Path]:
    """Factory writing an executable shell script that stands in for ``q``."""

    def _make(body: str, name: str = "q") -> Path:
        script = tmp_path / name
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make
