"""Main Typer application — imports and registers all CLI commands.

Entry point: ``fndeploy`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from fndeploy.cli.commands.deploy import deploy_cmd
from fndeploy.config import settings

app = typer.Typer(
    name="fndeploy",
    help="fndeploy: deploy serverless functions as Function resources on Kubernetes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


def configure_logging(level: str) -> None:
    """Route log records through Rich at the configured level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        settings.log_level,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Deploy serverless functions as Function resources on Kubernetes."""
    configure_logging(log_level)


# Register subcommands
app.command(name="deploy", help="Deploy the functions of a service.")(deploy_cmd)


@app.command(name="runtimes", help="List the supported runtime families.")
def runtimes_cmd() -> None:
    """List supported runtime families and the files they deploy."""
    from rich.console import Console
    from rich.table import Table

    from fndeploy.core.runtimes import SUPPORTED_RUNTIMES

    console = Console()
    table = Table(title="Supported Runtimes")
    table.add_column("Family", style="cyan")
    table.add_column("Matches")
    table.add_column("Handler extension", style="green")
    table.add_column("Dependency manifest")

    for profile in SUPPORTED_RUNTIMES:
        table.add_row(profile.family, profile.pattern, profile.extension, profile.deps_file)

    console.print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
