"""Commands for running the service and preparing its database."""

import typer
from rich.panel import Panel

from src.user_api.core.services import DbManageService
from src.user_api.runtime.context import get_config

from . import utils
from .utils import console


def serve(
    host: str = typer.Option(None, help="Host to bind the server to"),
    port: int = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """🚀 Start the API server under uvicorn."""
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Starting User API on {host}:{port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(
        "src.user_api.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,
    )


def init_db() -> None:
    """Create the database tables."""
    database_service = utils.get_database_service()
    DbManageService(database_service.engine).create_all()
    console.print("[green]✅ Database initialized[/green]")
