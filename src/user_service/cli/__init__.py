"""Main CLI application module."""

import typer

from .db_commands import db_app
from .user_commands import users_app

app = typer.Typer(
    help="👥 User Service CLI - database and user management",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(db_app, name="db")
app.add_typer(users_app, name="users")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (defaults to config app.host)"),
    port: int | None = typer.Option(None, help="Port (defaults to config app.port)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """🚀 Run the HTTP API with uvicorn."""
    import uvicorn

    from src.user_service.runtime.context import get_config

    config = get_config()
    uvicorn.run(
        "src.user_service.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
