"""Command: electoral-access check - Check a permission for a set of roles."""

import typer
from rich.console import Console


console = Console()


def check(
    roles: list[str] = typer.Argument(..., help="Role names held by the user"),
    entity: str = typer.Option(..., "--entity", "-e", help="Entity being accessed"),
    action: str = typer.Option(..., "--action", "-a", help="Action being performed"),
    scope: str | None = typer.Option(
        None, "--scope", "-s", help="Scope the grant must cover"
    ),
) -> None:
    """Check whether roles may perform an action on an entity.

    Exits with status 0 when allowed and 1 when denied.
    """
    from electoral_access.core.permissions import (
        get_evaluator,
        parse_action,
        parse_entity,
        parse_roles,
        parse_scope,
        role_messages,
    )

    unknown = [name for name in roles if not parse_roles([name])]
    if unknown:
        console.print(
            f"[yellow]Warning:[/yellow] Ignoring unknown role(s): {', '.join(unknown)}"
        )
    if parse_entity(entity) is None:
        console.print(f"[yellow]Warning:[/yellow] Unknown entity '{entity}'.")
    if parse_action(action) is None:
        console.print(f"[yellow]Warning:[/yellow] Unknown action '{action}'.")
    if scope is not None and parse_scope(scope) is None:
        console.print(f"[yellow]Warning:[/yellow] Unknown scope '{scope}'.")

    evaluator = get_evaluator()
    allowed = evaluator.authorize(roles, entity, action, scope)

    if allowed:
        granted = evaluator.granted_scope(roles, entity, action)
        console.print(f"[green]✓[/green] allowed (scope: {granted.value if granted else '-'})")
        return

    console.print("[red]✗[/red] denied")
    messages = role_messages(roles)
    if messages is not None:
        # The grant exists but does not reach the requested scope
        narrower = scope is not None and evaluator.authorize(roles, entity, action)
        console.print(messages.scope_error if narrower else messages.access_denied)
    raise typer.Exit(1)
