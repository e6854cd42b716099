"""qbridge exception hierarchy.

All exceptions inherit from QBridgeError so callers (the MCP server and the
CLI) can catch the base class and surface any failure uniformly.
"""

from __future__ import annotations


class QBridgeError(Exception):
    """Base exception for all qbridge errors."""


class ToolNotEnabledError(QBridgeError):
    """The tool is missing from the enablement allow-list."""

    def __init__(self, tool_name: str, env_var: str) -> None:
        super().__init__(
            f"Q Developer agent tool is not enabled. Set the {env_var} environment "
            f"variable to include '{tool_name}' to use it."
        )
        self.tool_name = tool_name
        self.env_var = env_var


class RequestValidationError(QBridgeError):
    """Tool arguments are missing, mistyped, or unknown."""


class CLINotFoundError(QBridgeError):
    """The Q Developer CLI executable could not be found."""

    def __init__(self, program: str) -> None:
        super().__init__(
            f"Q Developer CLI not found. Please ensure '{program}' is installed "
            "and available in your PATH."
        )
        self.program = program


class CLIExecutionError(QBridgeError):
    """The Q Developer CLI exited with a non-zero status."""

    def __init__(self, exit_code: int, stderr: str = "") -> None:
        message = f"Q Developer CLI error: exit status {exit_code}"
        if stderr:
            message += f", stderr: {stderr}"
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class CLITimeoutError(QBridgeError):
    """The Q Developer CLI did not finish before the deadline."""

    def __init__(self, timeout: int, env_var: str) -> None:
        super().__init__(
            f"Q Developer CLI timed out after {timeout} seconds. "
            f"Increase {env_var} to allow longer runs."
        )
        self.timeout = timeout


class CLILaunchError(QBridgeError):
    """The Q Developer CLI exists but the OS refused to start it."""

    def __init__(self, program: str, error: OSError) -> None:
        super().__init__(f"Q Developer CLI '{program}' could not be started: {error}")
        self.program = program
        self.error = error
