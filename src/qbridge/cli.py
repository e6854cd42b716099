"""Typer CLI entry point for qbridge.

Bridges the synchronous Typer world to the async tool and server via asyncio.run().
"""

from __future__ import annotations

import asyncio
import shutil
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from qbridge import __version__
from qbridge.config import (
    AGENT_MAX_RESPONSE_SIZE_ENV_VAR,
    AGENT_TIMEOUT_ENV_VAR,
    ENABLE_TOOLS_ENV_VAR,
    LOG_LEVELS,
    resolve_log_level,
)
from qbridge.exceptions import QBridgeError
from qbridge.log import configure_logging
from qbridge.tools.limiter import format_size
from qbridge.tools.q_developer import get_default_tool

app = typer.Typer(
    name="qbridge",
    help="qbridge: the AWS Q Developer CLI as an MCP tool.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


def _error_exit(message: str, hint: str | None = None) -> None:
    """Print a styled error and exit."""
    console.print(f"[bold red]Error:[/bold red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
    raise typer.Exit(code=1)


@app.command()
def serve(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    ] = None,
) -> None:
    """Run the MCP server on stdio."""
    if log_level is not None and log_level.strip().upper() not in LOG_LEVELS:
        _error_exit(
            f"Invalid log level: {log_level!r}",
            hint=f"Use one of {', '.join(LOG_LEVELS)}.",
        )
    configure_logging(log_level.strip().upper() if log_level else resolve_log_level())

    from qbridge.server import run_stdio

    try:
        run_stdio()
    except KeyboardInterrupt:
        raise typer.Exit(code=130)


@app.command()
def ask(
    prompt: Annotated[str, typer.Argument(help="Prompt to send to Q Developer")],
    resume: Annotated[bool, typer.Option("--resume", help="Resume the previous conversation")] = False,
    agent: Annotated[str, typer.Option("--agent", help="Context profile to use")] = "",
    model: Annotated[str, typer.Option("--model", help="Override the model")] = "",
    yolo: Annotated[bool, typer.Option("--yolo", help="Trust all tools")] = False,
    trust_tools: Annotated[str, typer.Option("--trust-tools", help="Comma-separated tools to trust")] = "",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose CLI and log output")] = False,
) -> None:
    """Run one Q Developer prompt and print the answer."""
    configure_logging("DEBUG" if verbose else resolve_log_level())

    arguments: dict[str, Any] = {
        "prompt": prompt,
        "resume": resume,
        "agent": agent,
        "override-model": model,
        "yolo-mode": yolo,
        "trust-tools": trust_tools,
        "verbose": verbose,
    }
    tool = get_default_tool()
    try:
        output = asyncio.run(tool.execute(arguments))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(code=130)
    except QBridgeError as exc:
        _error_exit(str(exc))
        return

    console.print(output, markup=False, highlight=False, soft_wrap=True)


@app.command(name="config")
def config_cmd() -> None:
    """Show the settings the next invocation would use."""
    tool = get_default_tool()
    program_path = shutil.which(tool.program)

    table = Table(title=f"qbridge v{__version__}", border_style="cyan", header_style="bold cyan")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row(
        ENABLE_TOOLS_ENV_VAR,
        f"[green]{tool.name} enabled[/green]" if tool.is_enabled() else "[red]Not enabled[/red]",
    )
    table.add_row(AGENT_TIMEOUT_ENV_VAR, f"{tool.get_timeout()}s")
    table.add_row(AGENT_MAX_RESPONSE_SIZE_ENV_VAR, format_size(tool.get_max_response_size()))
    table.add_row(
        "Q Developer CLI",
        program_path if program_path else f"[red]'{tool.program}' not found[/red]",
    )

    console.print()
    console.print(table)
    console.print()
