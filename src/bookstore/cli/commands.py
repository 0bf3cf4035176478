"""Server and database CLI commands."""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.bookstore.runtime.context import get_config

console = Console()


def serve(
    host: str | None = typer.Option(None, help="Host to bind (defaults to app.host)"),
    port: int | None = typer.Option(None, help="Port to bind (defaults to app.port)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the API server."""
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Starting Bookstore API on {host}:{port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(
        "src.bookstore.api.http.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        access_log=False,  # Request logging middleware covers this
    )


def init_db() -> None:
    """Create the books table if it does not exist."""
    from sqlalchemy.exc import SQLAlchemyError

    from src.bookstore.core.services import DbSessionService

    database = DbSessionService(get_config().database)
    try:
        database.create_all()
    except SQLAlchemyError as e:
        console.print(f"[red]Database initialization failed: {e}[/red]")
        raise typer.Exit(1) from e
    finally:
        database.dispose()
    console.print("[green]Database initialized[/green]")


def show_config() -> None:
    """Print the effective configuration, without secrets."""
    config = get_config()
    table = Table(title="Bookstore configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    sections = {
        "app": config.app.model_dump(),
        "database": config.database.model_dump(
            exclude={"url", "password", "connection_string"}
        ),
        "logging": config.logging.model_dump(),
    }
    for section, values in sections.items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", str(value))
    table.add_row("database.dialect", config.database.dialect)

    console.print(table)
