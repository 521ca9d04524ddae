"""Console tables for project and party rows."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from poised.db.store import Row
from poised.models import PartyRole
from poised.projects.deletion import DeletionOutcome

PROJECT_COLUMNS: list[tuple[str, str]] = [
    ("project_number", "Project Number"),
    ("project_name", "Project Name"),
    ("building_type", "Building Type"),
    ("physical_address", "Physical Address"),
    ("erf_number", "ERF Number"),
    ("total_fee", "Total Fee"),
    ("amount_paid", "Amount Paid"),
    ("project_deadline", "Deadline"),
    ("project_finalised", "Finalised"),
    ("completion_date", "Completion Date"),
    ("architect_id", "Architect ID"),
    ("contractor_id", "Contractor ID"),
    ("customer_id", "Customer ID"),
]

PARTY_COLUMNS: dict[PartyRole, list[tuple[str, str]]] = {
    PartyRole.ARCHITECT: [
        ("architect_id", "Architect ID"),
        ("architect_name", "Name"),
        ("architect_tel", "Telephone"),
        ("architect_email", "Email"),
        ("architect_address", "Address"),
    ],
    PartyRole.CONTRACTOR: [
        ("contractor_id", "Contractor ID"),
        ("contractor_name", "Name"),
        ("contractor_tel", "Telephone"),
        ("contractor_email", "Email"),
        ("contractor_address", "Address"),
    ],
    PartyRole.CUSTOMER: [
        ("customer_id", "Customer ID"),
        ("customer_fname", "First Name"),
        ("customer_surname", "Surname"),
        ("customer_tel", "Telephone"),
        ("customer_email", "Email"),
        ("customer_address", "Address"),
    ],
}


def format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float):
        return f"{value:.2f}"
    if isinstance(value, date):
        return value.isoformat()
    return escape(str(value))


def build_table(title: str, columns: list[tuple[str, str]], rows: Sequence[Row]) -> Table:
    table = Table(title=title)
    for i, (_, header) in enumerate(columns):
        table.add_column(header, style="cyan" if i == 0 else None, no_wrap=i == 0)

    for row in rows:
        table.add_row(*(format_value(row.get(key)) for key, _ in columns))

    return table


def render_projects(
    console: Console,
    rows: Sequence[Row],
    title: str,
    empty_message: str = "No projects found.",
) -> None:
    if not rows:
        console.print(escape(empty_message), style="yellow")
        return
    console.print(build_table(escape(title), PROJECT_COLUMNS, rows))


def render_parties(console: Console, role: PartyRole, rows: Sequence[Row]) -> None:
    if not rows:
        console.print(f"[yellow]No {role.value}s found.[/yellow]")
        return
    console.print(build_table(f"All {role.table_name}", PARTY_COLUMNS[role], rows))


def report_deletion(console: Console, outcome: DeletionOutcome) -> None:
    """Print what a cascade delete removed and kept."""
    if not outcome.found:
        console.print(f"[red]Project Number {outcome.project_number} not found.[/red]")
        return

    for decision in outcome.decisions:
        if decision.delete and decision.rows_deleted == 0:
            console.print(
                f"[yellow]{decision.role.label} with ID {escape(decision.party_id)} "
                "has no record to delete.[/yellow]"
            )
        elif decision.delete:
            console.print(
                f"[green]{decision.role.label} with ID {escape(decision.party_id)} "
                "successfully deleted![/green]"
            )
        else:
            console.print(
                f"[yellow]{decision.role.label} with ID {escape(decision.party_id)} kept "
                f"({decision.reference_count} projects reference it).[/yellow]"
            )

    console.print(
        f"[bold green]✓[/bold green] Project Number {outcome.project_number} "
        "successfully deleted!"
    )
