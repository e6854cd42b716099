"""Validation of raw tool arguments into a typed invocation request."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from qbridge.exceptions import RequestValidationError

_STRING_FIELDS = ("agent", "override-model", "trust-tools")
_BOOL_FIELDS = ("resume", "yolo-mode", "verbose")
_KNOWN_FIELDS = frozenset(("prompt", *_STRING_FIELDS, *_BOOL_FIELDS))


@dataclass(frozen=True)
class InvocationRequest:
    """A validated request for one Q Developer CLI run.

    Attributes:
        prompt: The question or instruction passed to the CLI.
        resume: Continue the previous conversation in the working directory.
        agent: Context profile (agent) name.
        model: Model identifier; not checked against the advertised list.
        trust_all_tools: Let the CLI use every tool without confirmation.
        trust_tools: Comma-separated tool names to trust.
        verbose: Ask the CLI for verbose logging.
    """

    prompt: str
    resume: bool = False
    agent: str = ""
    model: str = ""
    trust_all_tools: bool = False
    trust_tools: str = ""
    verbose: bool = False

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any] | None) -> InvocationRequest:
        """Build a request from protocol arguments.

        Optional fields set to None are treated as absent.

        Args:
            arguments: The raw argument mapping from the tool call.

        Returns:
            A validated InvocationRequest.

        Raises:
            RequestValidationError: On unknown fields, wrong types, or a
                missing or empty prompt.
        """
        arguments = dict(arguments or {})

        unknown = sorted(set(arguments) - _KNOWN_FIELDS)
        if unknown:
            raise RequestValidationError(f"Unknown parameter(s): {', '.join(unknown)}")

        prompt = arguments.get("prompt")
        if not isinstance(prompt, str):
            raise RequestValidationError("Missing required parameter 'prompt' (string).")
        if not prompt.strip():
            raise RequestValidationError("Parameter 'prompt' must not be empty.")

        values: dict[str, Any] = {}
        for name in _STRING_FIELDS:
            value = arguments.get(name)
            if value is not None and not isinstance(value, str):
                raise RequestValidationError(f"Parameter '{name}' must be a string.")
            values[name] = value or ""
        for name in _BOOL_FIELDS:
            value = arguments.get(name)
            if value is not None and not isinstance(value, bool):
                raise RequestValidationError(f"Parameter '{name}' must be a boolean.")
            values[name] = bool(value)

        return cls(
            prompt=prompt,
            resume=values["resume"],
            agent=values["agent"],
            model=values["override-model"],
            trust_all_tools=values["yolo-mode"],
            trust_tools=values["trust-tools"],
            verbose=values["verbose"],
        )
