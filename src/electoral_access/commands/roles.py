"""Command: electoral-access roles - List roles and their grants."""

import typer
from rich.console import Console
from rich.table import Table


console = Console()


def list_roles(
    role: str | None = typer.Option(
        None, "--role", "-r", help="Show only this role"
    ),
) -> None:
    """List roles and the grants they hold.

    Shows each grant's entity, actions and scope from the canonical table.
    """
    from electoral_access.core.permissions import Action, default_table, parse_role

    permissions = default_table()
    selected = list(permissions.roles())

    if role is not None:
        parsed = parse_role(role)
        if parsed is None:
            console.print(f"[red]Error:[/red] Unknown role '{role}'.")
            raise typer.Exit(1)
        selected = [parsed]

    console.print()
    for r in selected:
        grants = permissions.permissions_for(r)
        if not grants:
            console.print(f"[cyan]{r.value}[/cyan]: [dim]no grants[/dim]")
            continue

        # Build table
        table = Table(title=r.value, title_style="bold cyan", show_header=True)
        table.add_column("Entity", no_wrap=True)
        table.add_column("Actions")
        table.add_column("Scope", style="green", no_wrap=True)

        for grant in grants:
            actions = [a.value for a in Action if a in grant.actions]
            table.add_row(grant.entity.value, ", ".join(actions), grant.scope.value)

        console.print(table)
        console.print()
