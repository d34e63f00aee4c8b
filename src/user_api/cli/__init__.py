"""Main CLI application module."""

import typer

from .server_commands import init_db, serve
from .user_commands import users_app

app = typer.Typer(
    help="User API CLI - run the service and manage users",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="init-db")(init_db)
app.add_typer(users_app, name="users")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
