"""qbridge tool system: the Q Developer agent tool and its definition."""

from __future__ import annotations

from typing import Any

__all__ = ["ADVERTISED_MODELS", "Q_DEVELOPER_TOOL_NAME", "TOOL_DEFINITIONS"]

Q_DEVELOPER_TOOL_NAME = "q-developer-agent"

# Advertised to clients only; other model names are passed through to the CLI.
ADVERTISED_MODELS: tuple[str, ...] = ("claude-3.5-sonnet", "claude-3.7-sonnet", "claude-sonnet-4")


TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": Q_DEVELOPER_TOOL_NAME,
        "description": (
            "Delegate a task to the AWS Q Developer CLI agent. Runs `q chat` "
            "non-interactively in the server's working directory and returns its answer. "
            "Useful for AWS questions, code generation, and analysis that benefits from "
            "a second agent. Output larger than AGENT_MAX_RESPONSE_SIZE is truncated."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "The prompt to send to the Q Developer agent.",
                },
                "resume": {
                    "type": "boolean",
                    "description": "Resume the previous conversation from this directory.",
                    "default": False,
                },
                "agent": {
                    "type": "string",
                    "description": "Context profile (agent) to use for this conversation.",
                },
                "override-model": {
                    "type": "string",
                    "description": (
                        "Override the model used by the CLI. Available models: "
                        + ", ".join(ADVERTISED_MODELS)
                        + "."
                    ),
                },
                "yolo-mode": {
                    "type": "boolean",
                    "description": (
                        "Pass --trust-all-tools so the agent can use any tool without "
                        "asking for confirmation. Use with care."
                    ),
                    "default": False,
                },
                "trust-tools": {
                    "type": "string",
                    "description": "Comma-separated list of tools to trust, e.g. 'fs_read,fs_write'.",
                },
                "verbose": {
                    "type": "boolean",
                    "description": "Enable verbose logging in the CLI.",
                    "default": False,
                },
            },
            "required": ["prompt"],
            "additionalProperties": False,
        },
    },
]
