"""Project and party CLI commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime

import typer
from rich.console import Console
from rich.markup import escape

from poised.context import AppContext, open_context
from poised.errors import CascadeDeletionError, StoreError
from poised.models import PartyRole
from poised.parties import service as parties
from poised.projects import service as projects

project_cli = typer.Typer(help="List, search, finalise and delete projects")
party_cli = typer.Typer(help="List architects, contractors and customers")
console = Console()


def _run(operation: Callable[[AppContext], Awaitable[object]]) -> None:
    """Run one operation inside a fresh application context."""

    async def _go():
        async with open_context(console=console) as ctx:
            await operation(ctx)

    try:
        asyncio.run(_go())
    except CascadeDeletionError as e:
        console.print(f"[bold red]✗ Delete rolled back:[/bold red] {escape(str(e.cause))}")
        raise typer.Exit(code=1) from e
    except StoreError as e:
        console.print(f"[bold red]✗ Database error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


@project_cli.command("list")
def list_projects():
    """List all projects."""
    _run(projects.show_all)


@project_cli.command("incomplete")
def list_incomplete():
    """List projects that are not finalised."""
    _run(projects.show_incomplete)


@project_cli.command("overdue")
def list_overdue(
    as_of: str | None = typer.Option(
        None, "--as-of", help="Reference date (YYYY-MM-DD); defaults to today"
    ),
):
    """List unfinalised projects past their deadline."""
    today = None
    if as_of:
        try:
            today = datetime.strptime(as_of, "%Y-%m-%d").date()
        except ValueError:
            console.print(f"[red]Invalid date: {escape(as_of)}[/red]")
            raise typer.Exit(code=1)

    _run(lambda ctx: projects.show_overdue(ctx, today=today))


@project_cli.command("search")
def search(term: str = typer.Argument(..., help="Project number or part of its name")):
    """Search projects by number or name."""
    _run(lambda ctx: projects.search(ctx, term=term))


@project_cli.command("finalise")
def finalise():
    """Finalise a project (prompts for number and completion date)."""
    _run(projects.finalise)


@project_cli.command("delete")
def delete(project_number: int = typer.Argument(..., min=0, help="Project number")):
    """Delete a project and the parties no other project references."""
    _run(lambda ctx: projects.delete(ctx, project_number=project_number))


@party_cli.command("list")
def list_parties(role: PartyRole = typer.Argument(..., help="architect, contractor or customer")):
    """List all parties of one role."""
    _run(lambda ctx: parties.show_parties(ctx, role))
