"""Database management CLI commands."""

import typer

from src.user_service.core.services import DbManageService, DbSessionService
from src.user_service.runtime.init_db import init_db

from .utils import console

db_app = typer.Typer(help="🗄️ Database management commands")


@db_app.command("init")
def init() -> None:
    """Create the users table and its indexes if they do not exist."""
    init_db()
    console.print("[green]✅ Database initialized[/green]")


@db_app.command("drop")
def drop(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Drop every table. All user records are lost."""
    if not yes:
        typer.confirm("This deletes all users. Continue?", abort=True)

    database_service = DbSessionService()
    try:
        DbManageService(database_service.engine).drop_all()
    finally:
        database_service.close()
    console.print("[yellow]🗑️  All tables dropped[/yellow]")
