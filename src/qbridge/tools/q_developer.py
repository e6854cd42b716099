"""Q Developer agent tool: runs ``q chat`` non-interactively.

The tool is off unless ``q-developer-agent`` is listed in
ENABLE_ADDITIONAL_TOOLS. Limits are re-resolved from the environment on every
call and the CLI is spawned directly from an argument vector, never a shell.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import signal
import sys
from collections.abc import Mapping
from typing import Any

from qbridge.config import (
    AGENT_TIMEOUT_ENV_VAR,
    ENABLE_TOOLS_ENV_VAR,
    is_tool_enabled,
    resolve_limits,
    resolve_max_response_size,
    resolve_timeout,
)
from qbridge.exceptions import (
    CLIExecutionError,
    CLILaunchError,
    CLINotFoundError,
    CLITimeoutError,
    ToolNotEnabledError,
)
from qbridge.request import InvocationRequest
from qbridge.tools import Q_DEVELOPER_TOOL_NAME, TOOL_DEFINITIONS
from qbridge.tools.arguments import DEFAULT_PROGRAM, build_arguments
from qbridge.tools.limiter import apply_limit

logger = logging.getLogger(__name__)


class QDeveloperTool:
    """Invokes the AWS Q Developer CLI for a single prompt.

    Args:
        program: Executable name or path for the CLI.
        environ: Environment mapping for settings. Defaults to os.environ,
            read afresh on every call.
    """

    name = Q_DEVELOPER_TOOL_NAME

    def __init__(
        self,
        program: str = DEFAULT_PROGRAM,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._program = program
        self._environ = environ

    @property
    def program(self) -> str:
        """Executable name or path used as argv[0]."""
        return self._program

    def definition(self) -> dict[str, Any]:
        """Return the tool definition advertised to protocol clients."""
        return TOOL_DEFINITIONS[0]

    def is_enabled(self) -> bool:
        """Check the ENABLE_ADDITIONAL_TOOLS gate for this tool."""
        return is_tool_enabled(self.name, self._environ)

    def get_timeout(self) -> int:
        """Return the current execution timeout in seconds."""
        return resolve_timeout(self._environ)

    def get_max_response_size(self) -> int:
        """Return the current response budget in bytes."""
        return resolve_max_response_size(self._environ)

    def apply_response_size_limit(self, output: str) -> str:
        """Truncate *output* to the currently configured response size."""
        return apply_limit(output, self.get_max_response_size())

    async def execute(self, arguments: Mapping[str, Any] | None) -> str:
        """Run the CLI for one tool call.

        Args:
            arguments: Raw tool-call arguments.

        Returns:
            The CLI's standard output, truncated to the response budget.

        Raises:
            ToolNotEnabledError: The tool is not in ENABLE_ADDITIONAL_TOOLS.
            RequestValidationError: The arguments are invalid.
            CLINotFoundError: The CLI executable is missing.
            CLILaunchError: The CLI exists but could not be started.
            CLIExecutionError: The CLI exited with a non-zero status.
            CLITimeoutError: The CLI ran past AGENT_TIMEOUT.
            asyncio.CancelledError: The call was cancelled; the CLI is killed.
        """
        if not self.is_enabled():
            raise ToolNotEnabledError(self.name, ENABLE_TOOLS_ENV_VAR)

        request = InvocationRequest.from_arguments(arguments)
        limits = resolve_limits(self._environ)
        args = build_arguments(request, self._program)
        logger.debug(
            "Running %s (timeout=%ds, max_response=%d bytes)",
            args,
            limits.timeout_seconds,
            limits.max_response_bytes,
        )

        # Keep a few bytes past the budget so a character straddling it decodes whole.
        stdout, total = await self._run(
            args, limits.timeout_seconds, limits.max_response_bytes + _UTF8_SLACK
        )
        logger.info("Q Developer CLI finished, %d bytes of output", total)

        text = stdout.decode("utf-8", errors="replace")
        original_size = total if total > len(stdout) else None
        return apply_limit(text, limits.max_response_bytes, original_size=original_size)

    async def _run(self, args: list[str], timeout: int, capture_limit: int) -> tuple[bytes, int]:
        """Spawn the CLI and return (captured stdout, total stdout bytes).

        The CLI runs in its own session so that on timeout or cancellation
        the whole process group, helpers included, is killed.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except FileNotFoundError:
            raise CLINotFoundError(self._program) from None
        except OSError as exc:
            raise CLILaunchError(self._program, exc) from exc

        finished = False
        try:
            stdout, total, stderr = await asyncio.wait_for(
                _communicate(process, capture_limit), timeout=timeout
            )
            finished = True
        except asyncio.TimeoutError:
            raise CLITimeoutError(timeout, AGENT_TIMEOUT_ENV_VAR) from None
        finally:
            if not finished:
                _kill_process_group(process)
                await process.wait()

        if process.returncode != 0:
            raise CLIExecutionError(
                process.returncode,
                stderr.decode("utf-8", errors="replace").strip(),
            )
        return stdout, total


_UTF8_SLACK = 4
_STDERR_LIMIT = 64 * 1024
_READ_CHUNK = 64 * 1024


async def read_capped(stream: asyncio.StreamReader, limit: int) -> tuple[bytes, int]:
    """Drain *stream*, keeping at most *limit* bytes.

    Returns:
        The kept prefix and the total number of bytes read.
    """
    kept = bytearray()
    total = 0
    while chunk := await stream.read(_READ_CHUNK):
        total += len(chunk)
        if len(kept) < limit:
            kept += chunk[: limit - len(kept)]
    return bytes(kept), total


async def _communicate(
    process: asyncio.subprocess.Process, stdout_limit: int
) -> tuple[bytes, int, bytes]:
    (stdout, total), (stderr, _) = await asyncio.gather(
        read_capped(process.stdout, stdout_limit),
        read_capped(process.stderr, _STDERR_LIMIT),
    )
    await process.wait()
    return stdout, total, stderr


def _kill_process_group(process: asyncio.subprocess.Process) -> None:
    """SIGKILL the CLI's process group (just the process on Windows)."""
    if sys.platform == "win32":
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        return
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        # Group already gone; make sure the leader is still signalled if alive.
        with contextlib.suppress(ProcessLookupError):
            process.kill()


def get_default_tool() -> QDeveloperTool:
    """Build a tool reading settings from the live process environment."""
    return QDeveloperTool(program=os.environ.get("QBRIDGE_Q_PROGRAM", DEFAULT_PROGRAM))
