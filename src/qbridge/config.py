"""Environment-driven configuration for qbridge.

Every setting is re-read from the environment on each call so a running
server picks up changes without a restart. Invalid values never raise: they
fall back to the compiled-in defaults.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ENABLE_TOOLS_ENV_VAR = "ENABLE_ADDITIONAL_TOOLS"
AGENT_TIMEOUT_ENV_VAR = "AGENT_TIMEOUT"
AGENT_MAX_RESPONSE_SIZE_ENV_VAR = "AGENT_MAX_RESPONSE_SIZE"
LOG_LEVEL_ENV_VAR = "QBRIDGE_LOG_LEVEL"

DEFAULT_TIMEOUT = 180
DEFAULT_MAX_RESPONSE_SIZE = 2 * 1024 * 1024
DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ResolvedLimits:
    """Limits applied to a single invocation.

    Attributes:
        timeout_seconds: Deadline for the external process.
        max_response_bytes: Byte budget for the returned output.
    """

    timeout_seconds: int
    max_response_bytes: int


def resolve_timeout(environ: Mapping[str, str] | None = None) -> int:
    """Return the execution timeout in seconds (AGENT_TIMEOUT or 180)."""
    return _positive_int(environ, AGENT_TIMEOUT_ENV_VAR, DEFAULT_TIMEOUT)


def resolve_max_response_size(environ: Mapping[str, str] | None = None) -> int:
    """Return the response budget in bytes (AGENT_MAX_RESPONSE_SIZE or 2 MiB)."""
    return _positive_int(environ, AGENT_MAX_RESPONSE_SIZE_ENV_VAR, DEFAULT_MAX_RESPONSE_SIZE)


def resolve_limits(environ: Mapping[str, str] | None = None) -> ResolvedLimits:
    """Resolve both limits from the same environment snapshot."""
    return ResolvedLimits(
        timeout_seconds=resolve_timeout(environ),
        max_response_bytes=resolve_max_response_size(environ),
    )


def enabled_tools(environ: Mapping[str, str] | None = None) -> frozenset[str]:
    """Return the lower-cased tool names listed in ENABLE_ADDITIONAL_TOOLS."""
    env = os.environ if environ is None else environ
    raw = env.get(ENABLE_TOOLS_ENV_VAR, "")
    return frozenset(name.strip().lower() for name in raw.split(",") if name.strip())


def is_tool_enabled(tool_name: str, environ: Mapping[str, str] | None = None) -> bool:
    """Check whether *tool_name* passes the enablement gate.

    Args:
        tool_name: The tool identifier, e.g. "q-developer-agent".
        environ: Environment mapping to read. Defaults to os.environ.

    Returns:
        True if the identifier appears in ENABLE_ADDITIONAL_TOOLS.
    """
    return tool_name.lower() in enabled_tools(environ)


def resolve_log_level(environ: Mapping[str, str] | None = None) -> str:
    """Return the log level name from QBRIDGE_LOG_LEVEL (default WARNING)."""
    env = os.environ if environ is None else environ
    level = env.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


def _positive_int(environ: Mapping[str, str] | None, name: str, default: int) -> int:
    """Parse a strictly positive integer setting, falling back to *default*."""
    env = os.environ if environ is None else environ
    raw = env.get(name, "").strip()
    if not raw:
        return default

    digits = raw[1:] if raw[0] in "+-" else raw
    if not (digits.isascii() and digits.isdigit()):
        logger.debug("Ignoring non-numeric %s=%r, using %d", name, raw, default)
        return default

    value = int(raw)
    if value <= 0:
        logger.debug("Ignoring non-positive %s=%d, using %d", name, value, default)
        return default
    return value
