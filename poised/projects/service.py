"""Interactive project operations.

Each function takes the :class:`~poised.context.AppContext`, gathers its
input through the prompter and reports back on the console.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import structlog
from rich.markup import escape

from poised.display import render_projects, report_deletion
from poised.models import PartyRole, ProjectDetails
from poised.parties.repository import fetch_party
from poised.projects.deletion import DeletionOutcome
from poised.projects.repository import (
    fetch_project,
    finalise_project,
    insert_project,
    list_incomplete_projects,
    list_overdue_projects,
    list_projects,
    search_projects,
    update_project,
)
from poised.prompts.prompter import Prompter

if TYPE_CHECKING:
    from poised.context import AppContext

logger = structlog.get_logger(__name__)


def prompt_project_details(prompter: Prompter) -> ProjectDetails:
    """Ask for every user-supplied field of a project."""
    architect_id = prompter.text("Architect ID: ")
    contractor_id = prompter.text("Contractor ID: ")
    customer_id = prompter.text("Customer ID: ")
    project_name = prompter.optional_text("Project Name: ")
    building_type = prompter.text("Building Type: ")
    physical_address = prompter.text("Physical Address: ")
    erf_number = prompter.numeric_string("ERF Number: ")
    total_fee = prompter.amount("Total Fee: ")
    amount_paid = prompter.amount("Amount Paid: ")
    project_deadline = prompter.date("Project Deadline (YYYY-MM-DD): ")
    project_finalised = prompter.boolean("Project Finalised (true/false): ")

    completion_date = None
    if project_finalised:
        completion_date = prompter.date("Completion Date (YYYY-MM-DD): ")

    return ProjectDetails(
        architect_id=architect_id,
        contractor_id=contractor_id,
        customer_id=customer_id,
        project_name=project_name,
        building_type=building_type,
        physical_address=physical_address,
        erf_number=erf_number,
        total_fee=total_fee,
        amount_paid=amount_paid,
        project_deadline=project_deadline,
        project_finalised=project_finalised,
        completion_date=completion_date,
    )


async def missing_parties(ctx: AppContext, details: ProjectDetails) -> list[PartyRole]:
    """Roles whose referenced party id has no record yet."""
    missing = []
    for role in PartyRole:
        if await fetch_party(ctx.store, role, details.party_id(role)) is None:
            missing.append(role)
    return missing


async def _warn_missing_parties(ctx: AppContext, details: ProjectDetails) -> None:
    for role in await missing_parties(ctx, details):
        party_id = details.party_id(role)
        logger.warning("project.unknown_party", role=role.value, party_id=party_id)
        ctx.console.print(
            f"[yellow]⚠ No {role.value} with ID {escape(party_id)} exists yet.[/yellow]"
        )


async def _with_default_name(ctx: AppContext, details: ProjectDetails) -> ProjectDetails:
    """Name an unnamed project after its building type and customer surname."""
    if details.project_name is not None:
        return details
    customer = await fetch_party(ctx.store, PartyRole.CUSTOMER, details.customer_id)
    surname = customer["customer_surname"] if customer else None
    return details.model_copy(update={"project_name": details.display_name(surname)})


async def add_project(ctx: AppContext) -> int:
    """Prompt for a new project, insert it and return its project number."""
    ctx.console.print("[bold]Enter details for the new project:[/bold]")
    details = prompt_project_details(ctx.prompter)
    await _warn_missing_parties(ctx, details)
    details = await _with_default_name(ctx, details)

    async with ctx.store.atomic():
        project_number = await insert_project(ctx.store, details)

    logger.info("project.added", project_number=project_number)
    ctx.console.print(
        f"[green]New project successfully added! (Project Number {project_number})[/green]"
    )
    return project_number


async def edit_project(ctx: AppContext) -> ProjectDetails | None:
    """Prompt for a project number, then overwrite every field of that project."""
    project_number = ctx.prompter.project_number(
        "Enter project number of the project record you wish to update: "
    )

    if await fetch_project(ctx.store, project_number) is None:
        ctx.console.print("[red]Project record not found.[/red]")
        return None

    ctx.console.print(f"Update details for project record {project_number}: ")
    details = prompt_project_details(ctx.prompter)
    await _warn_missing_parties(ctx, details)
    details = await _with_default_name(ctx, details)

    async with ctx.store.atomic():
        await update_project(ctx.store, project_number, details)

    logger.info("project.updated", project_number=project_number)
    ctx.console.print("[green]Project record is successfully updated![/green]")
    return details


async def finalise(ctx: AppContext) -> bool:
    """Mark a project finalised with a completion date."""
    project_number = ctx.prompter.project_number(
        "Enter project number of the project you wish to finalise: "
    )

    if await fetch_project(ctx.store, project_number) is None:
        ctx.console.print(f"[red]Project Number {project_number} not found.[/red]")
        return False

    completion_date = ctx.prompter.date("Enter completion date (YYYY-MM-DD): ")
    async with ctx.store.atomic():
        await finalise_project(ctx.store, project_number, completion_date)

    logger.info(
        "project.finalised",
        project_number=project_number,
        completion_date=completion_date.isoformat(),
    )
    ctx.console.print(
        f"[green]Project Number {project_number} successfully finalised![/green]"
    )
    return True


async def delete(ctx: AppContext, project_number: int | None = None) -> DeletionOutcome:
    """Delete a project, cascading to its parties, and report the result."""
    if project_number is None:
        project_number = ctx.prompter.project_number(
            "Enter project number of the project record you wish to delete: "
        )
    outcome = await ctx.deletion.delete_project(project_number)
    report_deletion(ctx.console, outcome)
    return outcome


async def show_all(ctx: AppContext) -> None:
    rows = await list_projects(ctx.store)
    render_projects(ctx.console, rows, "All Projects")


async def show_incomplete(ctx: AppContext) -> None:
    rows = await list_incomplete_projects(ctx.store)
    render_projects(
        ctx.console, rows, "Incomplete Projects", "No incomplete projects found."
    )


async def show_overdue(ctx: AppContext, today: date | None = None) -> None:
    rows = await list_overdue_projects(ctx.store, today or date.today())
    render_projects(ctx.console, rows, "Overdue Projects", "No overdue projects found.")


async def search(ctx: AppContext, term: str | None = None) -> None:
    if term is None:
        term = ctx.prompter.text("Enter the project number or name to search for: ")
    rows = await search_projects(ctx.store, term)
    render_projects(
        ctx.console,
        rows,
        f"Search results for '{term}'",
        f"No projects found matching the search term '{term}'.",
    )
