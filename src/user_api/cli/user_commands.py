"""User management CLI commands."""

import typer
from rich.prompt import Confirm
from rich.table import Table

from src.user_api.core.errors import UserServiceError
from src.user_api.entities.user import UserDetails

from . import utils
from .utils import console

users_app = typer.Typer(help="Manage users in the configured database")


@users_app.command("list")
def list_users() -> None:
    """List all users."""
    with utils.user_service_scope() as service:
        users = service.list_users()

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Username", style="green")
    table.add_column("Email", style="blue")
    table.add_column("Name", style="magenta")

    for user in users:
        table.add_row(str(user.id), user.username, user.email, user.name)

    console.print(table)
    console.print(f"\n[green]Found {len(users)} users[/green]")


@users_app.command("add")
def add_user(
    username: str = typer.Argument(..., help="Username for the new user"),
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
) -> None:
    """Create a user."""
    details = UserDetails(username=username, email=email, name=name)
    try:
        with utils.user_service_scope() as service:
            created = service.create_user(details)
    except UserServiceError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created user '{created.username}' with id {created.id}[/green]")


@users_app.command("delete")
def delete_user(
    user_id: int = typer.Argument(..., help="ID of the user to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete a user by ID."""
    if not force and not Confirm.ask(f"Delete user {user_id}?"):
        console.print("[yellow]Aborted[/yellow]")
        return

    try:
        with utils.user_service_scope() as service:
            service.delete_user(user_id)
    except UserServiceError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Deleted user {user_id}[/green]")
