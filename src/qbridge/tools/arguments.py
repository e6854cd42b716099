"""Argument vector construction for the Q Developer CLI."""

from __future__ import annotations

from qbridge.request import InvocationRequest

DEFAULT_PROGRAM = "q"
NO_INTERACTIVE_FLAG = "--no-interactive"


def build_arguments(request: InvocationRequest, program: str = DEFAULT_PROGRAM) -> list[str]:
    """Map a request onto the argv for ``q chat``.

    Every value is its own element so nothing is ever interpreted by a shell.
    Empty strings and False omit the flag entirely.

    Args:
        request: The validated invocation request.
        program: Executable name or path, used as argv[0].

    Returns:
        The argument vector, with the prompt as the last element.
    """
    args = [program, "chat", NO_INTERACTIVE_FLAG]

    if request.resume:
        args.append("--resume")
    if request.agent:
        args.extend(["--agent", request.agent])
    if request.model:
        args.extend(["--model", request.model])
    if request.trust_all_tools:
        args.append("--trust-all-tools")
    if request.trust_tools:
        args.extend(["--trust-tools", request.trust_tools])
    if request.verbose:
        args.append("--verbose")

    args.append(request.prompt)
    return args
