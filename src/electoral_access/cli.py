"""Main electoral-access CLI application."""

import typer
from rich.console import Console

from electoral_access import __version__
from electoral_access.commands import check, level, roles
from electoral_access.core.logging import configure_logging


console = Console()

app = typer.Typer(
    name="electoral-access",
    help="Inspect and query the election data permission model.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="roles")(roles.list_roles)
app.command(name="check")(check.check)
app.command(name="level")(level.level)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """electoral-access - Query role permissions and territorial scopes."""
    if version:
        console.print(f"[bold cyan]electoral-access[/bold cyan] version {__version__}")
        raise typer.Exit()


def main() -> None:
    """Entry point for the CLI."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()
