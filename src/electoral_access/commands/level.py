"""Command: electoral-access level - Show where a user lands."""

import typer
from rich.console import Console


console = Console()


def level(
    roles: list[str] = typer.Argument(..., help="Role names held by the user"),
) -> None:
    """Show the access level, landing view and readable entities for roles."""
    from electoral_access.core.permissions import entity_tabs, get_evaluator, landing_view

    evaluator = get_evaluator()
    view = landing_view(roles)
    entities = evaluator.accessible_entities(roles)

    console.print(f"[bold cyan]Access level:[/bold cyan] {evaluator.access_level(roles).value}")
    console.print(
        f"[bold cyan]Landing view:[/bold cyan] {view.default_view if view else '[dim]none[/dim]'}"
    )
    if entities:
        console.print("[bold cyan]Readable entities:[/bold cyan]")
        for entity in entities:
            console.print(f"  • {entity.value}")
    else:
        console.print("[yellow]No readable entities.[/yellow]")
    tabs = entity_tabs(roles)
    if tabs:
        console.print(
            f"[bold cyan]Tabs:[/bold cyan] {', '.join(tab.label for tab in tabs)}"
        )
