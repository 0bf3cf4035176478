"""Main CLI application module."""

import typer

from .commands import init_db, serve, show_config

app = typer.Typer(
    help="Bookstore API command line",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="init-db")(init_db)
app.command(name="show-config")(show_config)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
