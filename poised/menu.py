"""Numbered interactive menu."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import partial

import structlog
from rich.markup import escape

from poised.context import AppContext
from poised.errors import StoreError
from poised.models import PartyRole
from poised.parties import service as parties
from poised.projects import service as projects

logger = structlog.get_logger(__name__)

Action = Callable[[AppContext], Awaitable[object]]

EXIT_OPTION = 18

MENU_ENTRIES: list[tuple[int, str, Action | None]] = [
    (1, "View All Projects", projects.show_all),
    (2, "View All Customers", partial(parties.show_parties, role=PartyRole.CUSTOMER)),
    (3, "View All Architects", partial(parties.show_parties, role=PartyRole.ARCHITECT)),
    (4, "View All Contractors", partial(parties.show_parties, role=PartyRole.CONTRACTOR)),
    (5, "Finalise Project", projects.finalise),
    (6, "Find Incomplete Projects", projects.show_incomplete),
    (7, "Find Overdue Projects", projects.show_overdue),
    (8, "Search Projects", projects.search),
    (9, "Update Project Details", projects.edit_project),
    (10, "Update Customer Details", partial(parties.edit_party, role=PartyRole.CUSTOMER)),
    (11, "Update Architect Details", partial(parties.edit_party, role=PartyRole.ARCHITECT)),
    (12, "Update Contractor Details", partial(parties.edit_party, role=PartyRole.CONTRACTOR)),
    (13, "Add New Project", projects.add_project),
    (14, "Add New Customer", partial(parties.add_party, role=PartyRole.CUSTOMER)),
    (15, "Add New Architect", partial(parties.add_party, role=PartyRole.ARCHITECT)),
    (16, "Add New Contractor", partial(parties.add_party, role=PartyRole.CONTRACTOR)),
    (17, "Delete Project", projects.delete),
    (EXIT_OPTION, "Exit Programme", None),
]

# Blank line after these options groups the menu
_GROUP_ENDS = {4, 8, 12, 16, 18}

ACTIONS: dict[int, Action | None] = {number: action for number, _, action in MENU_ENTRIES}


def print_menu(ctx: AppContext) -> None:
    ctx.console.print("\n[bold]Poised Project Management System Menu:[/bold]")
    for number, label, _ in MENU_ENTRIES:
        ctx.console.print(f"{number}. {label}")
        if number in _GROUP_ENDS:
            ctx.console.print()


async def run_action(ctx: AppContext, option: int) -> bool:
    """Run one menu option. Returns False once the user chooses to exit.

    Store errors end the current operation only; they are reported and the
    menu carries on.
    """
    if option not in ACTIONS:
        ctx.console.print(
            f"[red]Invalid option selected! Please choose an option from 1-{EXIT_OPTION}.[/red]"
        )
        return True

    action = ACTIONS[option]
    if action is None:
        ctx.console.print("Exiting Poised Project Management System...")
        return False

    try:
        await action(ctx)
    except StoreError as e:
        await ctx.store.rollback()
        logger.exception("menu.operation_failed", option=option)
        ctx.console.print(f"[bold red]✗ Database error:[/bold red] {escape(str(e))}")
    return True


async def run_menu(ctx: AppContext) -> None:
    """Show the menu until the user exits or input runs out."""
    keep_going = True
    while keep_going:
        print_menu(ctx)
        try:
            option = ctx.prompter.integer("Enter your option: ")
            keep_going = await run_action(ctx, option)
        except EOFError:
            logger.info("menu.input_closed")
            ctx.console.print("\nExiting Poised Project Management System...")
            keep_going = False
