"""Poised CLI.

Commands:
- init: Create the Poised tables
- menu: Run the interactive numbered menu
- projects: Project listings, search, finalise and cascade delete
- parties: Architect / contractor / customer listings
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape

from poised.cli_project import party_cli, project_cli
from poised.config import get_config
from poised.context import open_context
from poised.core.logging import configure_logging
from poised.db.connection import close_db, init_db
from poised.errors import StoreError
from poised.menu import run_menu

app = typer.Typer(
    name="poised",
    help="Poised - record manager for construction projects and their parties",
    no_args_is_help=True,
)
app.add_typer(project_cli, name="projects")
app.add_typer(party_cli, name="parties")

console = Console()


@app.callback()
def main() -> None:
    """Load configuration and set up logging before any command runs."""
    try:
        config = get_config()
    except KeyError as e:
        console.print(f"[bold red]✗ Configuration error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    configure_logging(config.logging)


@app.command()
def init(
    drop: bool = typer.Option(False, "--drop", help="Drop existing tables"),
):
    """Create the Projects, Architects, Contractors and Customers tables."""
    console.print(f"[bold]Initializing database:[/bold] {escape(get_config().db.url)}")

    async def _init():
        try:
            if drop:
                console.print("[yellow]Dropping existing tables...[/yellow]")
            await init_db(drop=drop)
        finally:
            await close_db()

    asyncio.run(_init())
    console.print("[bold green]✓[/bold green] Database initialized")


@app.command()
def menu():
    """Run the interactive Poised Project Management System menu."""

    async def _menu():
        async with open_context(console=console) as ctx:
            await run_menu(ctx)

    try:
        asyncio.run(_menu())
    except StoreError as e:
        console.print(f"[bold red]✗ Database error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
