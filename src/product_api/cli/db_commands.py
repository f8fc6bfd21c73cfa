"""Database management CLI commands."""

import typer
from rich.prompt import Confirm

from src.product_api.core.services import DbManageService, DbSessionService

from .utils import console

db_app = typer.Typer(help="Manage the product database")


@db_app.command("init")
def init_db() -> None:
    """Create the product table if it does not exist."""
    database_service = DbSessionService()
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.engine.dispose()
    console.print("[green]✅ Database tables created[/green]")


@db_app.command("drop")
def drop_db(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Drop the product table and all its rows."""
    if not force and not Confirm.ask("Drop all product data?"):
        console.print("[yellow]Aborted[/yellow]")
        raise typer.Exit(code=1)

    database_service = DbSessionService()
    try:
        DbManageService(database_service.engine).drop_all()
    finally:
        database_service.engine.dispose()
    console.print("[green]✅ Database tables dropped[/green]")
