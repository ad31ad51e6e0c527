"""
ci-build - Command-line entry point for the Cargo workspace CI actions.

This module provides the CLI entry point using Typer. The dispatch logic is
in services/dispatcher.py (Dispatcher class).
"""

import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ci_build.exceptions import UnknownSubcommandError
from ci_build.services.dispatcher import SUBCOMMANDS, Dispatcher
from ci_build.services.toolchain import ToolchainRunner
from ci_build.utils.config import get_settings
from ci_build.utils.telemetry import TelemetryClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = typer.Typer(
    help="Run Cargo workspace CI actions: " + ", ".join(SUBCOMMANDS),
    add_completion=False,
)
console = Console(stderr=True)


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True}
)
def main(
    ctx: typer.Context,
    subcommand: Optional[str] = typer.Argument(
        None, help="Action to run (format, build or doc)"
    ),
):
    """Run the toolchain steps for SUBCOMMAND and exit with their status"""

    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]❌ Invalid settings: {escape(str(e))}[/red]")
        raise typer.Exit(2)

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    if ctx.args:
        logger.debug("Ignoring extra arguments: %s", " ".join(ctx.args))

    telemetry = TelemetryClient(settings.telemetry_dir, settings.telemetry_max_mb)
    runner = ToolchainRunner(telemetry)
    dispatcher = Dispatcher(runner, strict=settings.strict)

    try:
        exit_code = dispatcher.dispatch(subcommand)
    except UnknownSubcommandError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(2)

    if exit_code != 0:
        failed = " ".join(runner.last_command or [])
        console.print(
            f"[red]❌ {subcommand} failed (exit {exit_code}): {failed}[/red]"
        )
    raise typer.Exit(exit_code)


if __name__ == "__main__":
    app()
