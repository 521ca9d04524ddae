"""Interactive party operations (view, add, update)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from rich.markup import escape

from poised.display import render_parties
from poised.models import (
    ArchitectDetails,
    ContractorDetails,
    CustomerDetails,
    PartyDetails,
    PartyRole,
)
from poised.parties.repository import fetch_party, insert_party, list_parties, update_party
from poised.prompts.prompter import Prompter

if TYPE_CHECKING:
    from poised.context import AppContext

logger = structlog.get_logger(__name__)


def prompt_party_details(prompter: Prompter, role: PartyRole, party_id: str) -> PartyDetails:
    """Ask for every non-key field of a party."""
    if role is PartyRole.CUSTOMER:
        first_name = prompter.text("First Name: ")
        surname = prompter.text("Surname: ")
        tel = prompter.numeric_string("Telephone Number: ")
        email = prompter.text("Email: ")
        address = prompter.text("Address: ")
        return CustomerDetails(
            party_id=party_id,
            first_name=first_name,
            surname=surname,
            tel=tel,
            email=email,
            address=address,
        )

    name = prompter.text("Name: ")
    tel = prompter.numeric_string("Telephone Number: ")
    email = prompter.text("Email: ")
    address = prompter.text("Address: ")
    details_cls = ArchitectDetails if role is PartyRole.ARCHITECT else ContractorDetails
    return details_cls(
        party_id=party_id, name=name, tel=tel, email=email, address=address
    )


async def show_parties(ctx: AppContext, role: PartyRole) -> None:
    rows = await list_parties(ctx.store, role)
    render_parties(ctx.console, role, rows)


async def add_party(ctx: AppContext, role: PartyRole) -> PartyDetails | None:
    """Prompt for a new party and insert it.

    Returns None (and writes nothing) when the id is already taken.
    """
    ctx.console.print(f"[bold]Enter details for the new {role.value}:[/bold]")
    party_id = ctx.prompter.text(f"{role.label} ID: ")

    if await fetch_party(ctx.store, role, party_id) is not None:
        ctx.console.print(f"[red]{role.label} with ID {escape(party_id)} already exists.[/red]")
        return None

    details = prompt_party_details(ctx.prompter, role, party_id)
    async with ctx.store.atomic():
        await insert_party(ctx.store, details)

    logger.info("party.added", role=role.value, party_id=party_id)
    ctx.console.print(f"[green]New {role.value} record {escape(party_id)} successfully added![/green]")
    return details


async def edit_party(ctx: AppContext, role: PartyRole) -> PartyDetails | None:
    """Prompt for a party id, then overwrite its details.

    Returns None when no party has that id.
    """
    party_id = ctx.prompter.text(f"Enter ID of the {role.value} to update: ")

    if await fetch_party(ctx.store, role, party_id) is None:
        ctx.console.print(f"[red]{role.label} record not found.[/red]")
        return None

    ctx.console.print(f"Update details for {role.value} record {escape(party_id)}: ")
    details = prompt_party_details(ctx.prompter, role, party_id)
    async with ctx.store.atomic():
        await update_party(ctx.store, details)

    logger.info("party.updated", role=role.value, party_id=party_id)
    ctx.console.print(f"[green]{role.label} record {escape(party_id)} successfully updated![/green]")
    return details
