"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from qbridge.config import (
    AGENT_MAX_RESPONSE_SIZE_ENV_VAR,
    AGENT_TIMEOUT_ENV_VAR,
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_TIMEOUT,
    ENABLE_TOOLS_ENV_VAR,
    ResolvedLimits,
    is_tool_enabled,
    resolve_limits,
    resolve_log_level,
    resolve_max_response_size,
    resolve_timeout,
)


class TestConstants:
    def test_names_and_defaults(self) -> None:
        assert AGENT_TIMEOUT_ENV_VAR == "AGENT_TIMEOUT"
        assert AGENT_MAX_RESPONSE_SIZE_ENV_VAR == "AGENT_MAX_RESPONSE_SIZE"
        assert ENABLE_TOOLS_ENV_VAR == "ENABLE_ADDITIONAL_TOOLS"
        assert DEFAULT_TIMEOUT == 180
        assert DEFAULT_MAX_RESPONSE_SIZE == 2 * 1024 * 1024


class TestResolveTimeout:
    def test_default_when_unset(self) -> None:
        assert resolve_timeout({}) == DEFAULT_TIMEOUT

    def test_custom(self) -> None:
        assert resolve_timeout({"AGENT_TIMEOUT": "300"}) == 300

    def test_surrounding_whitespace(self) -> None:
        assert resolve_timeout({"AGENT_TIMEOUT": " 45 "}) == 45

    @pytest.mark.parametrize("raw", ["", "not-a-number", "0", "-60", "1.5", "12abc", "+", "   "])
    def test_invalid_falls_back(self, raw: str) -> None:
        assert resolve_timeout({"AGENT_TIMEOUT": raw}) == DEFAULT_TIMEOUT

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AGENT_TIMEOUT", "90")
        assert resolve_timeout() == 90
        monkeypatch.setenv("AGENT_TIMEOUT", "not-a-number")
        assert resolve_timeout() == DEFAULT_TIMEOUT

    def test_not_cached(self) -> None:
        env = {"AGENT_TIMEOUT": "10"}
        assert resolve_timeout(env) == 10
        env["AGENT_TIMEOUT"] = "20"
        assert resolve_timeout(env) == 20


class TestResolveMaxResponseSize:
    def test_default_when_unset(self) -> None:
        assert resolve_max_response_size({}) == DEFAULT_MAX_RESPONSE_SIZE

    def test_custom(self) -> None:
        assert resolve_max_response_size({"AGENT_MAX_RESPONSE_SIZE": "1048576"}) == 1048576

    @pytest.mark.parametrize("raw", ["invalid", "0", "-1", ""])
    def test_invalid_falls_back(self, raw: str) -> None:
        env = {"AGENT_MAX_RESPONSE_SIZE": raw}
        assert resolve_max_response_size(env) == DEFAULT_MAX_RESPONSE_SIZE


class TestResolveLimits:
    def test_independent_fallback(self) -> None:
        limits = resolve_limits({"AGENT_TIMEOUT": "bogus", "AGENT_MAX_RESPONSE_SIZE": "4096"})
        assert limits == ResolvedLimits(timeout_seconds=DEFAULT_TIMEOUT, max_response_bytes=4096)


class TestEnablement:
    def test_disabled_when_unset(self) -> None:
        assert not is_tool_enabled("q-developer-agent", {})

    def test_enabled_in_list(self) -> None:
        env = {"ENABLE_ADDITIONAL_TOOLS": "claude-agent, Q-Developer-Agent ,gemini-agent"}
        assert is_tool_enabled("q-developer-agent", env)

    def test_other_tools_only(self) -> None:
        env = {"ENABLE_ADDITIONAL_TOOLS": "claude-agent,gemini-agent"}
        assert not is_tool_enabled("q-developer-agent", env)

    def test_no_substring_match(self) -> None:
        env = {"ENABLE_ADDITIONAL_TOOLS": "q-developer-agent-v2"}
        assert not is_tool_enabled("q-developer-agent", env)


class TestLogLevel:
    def test_default(self) -> None:
        assert resolve_log_level({}) == "WARNING"

    def test_custom(self) -> None:
        assert resolve_log_level({"QBRIDGE_LOG_LEVEL": "debug"}) == "DEBUG"

    def test_invalid(self) -> None:
        assert resolve_log_level({"QBRIDGE_LOG_LEVEL": "chatty"}) == "WARNING"
