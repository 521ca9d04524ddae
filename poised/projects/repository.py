"""Reads and writes for the Projects table."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Table, delete, false, insert, or_, select, update

from poised.db.models import MAX_PROJECT_NUMBER, ProjectModel
from poised.db.store import RecordStore, Row
from poised.models import ProjectDetails

projects: Table = ProjectModel.__table__


def is_storable_number(value: int) -> bool:
    """Whether ``value`` fits the Projects key column."""
    return 0 <= value <= MAX_PROJECT_NUMBER


async def fetch_project(store: RecordStore, project_number: int) -> Row | None:
    # No row can carry a key the column cannot hold
    if not is_storable_number(project_number):
        return None
    stmt = select(projects).where(projects.c.project_number == project_number)
    return await store.query_one(stmt)


async def list_projects(store: RecordStore) -> list[Row]:
    stmt = select(projects).order_by(projects.c.project_number)
    return await store.query(stmt)


async def list_incomplete_projects(store: RecordStore) -> list[Row]:
    stmt = (
        select(projects)
        .where(projects.c.project_finalised == false())
        .order_by(projects.c.project_deadline)
    )
    return await store.query(stmt)


async def list_overdue_projects(store: RecordStore, today: date) -> list[Row]:
    """Unfinalised projects whose deadline is before ``today``."""
    stmt = (
        select(projects)
        .where(
            projects.c.project_finalised == false(),
            projects.c.project_deadline < today,
        )
        .order_by(projects.c.project_deadline)
    )
    return await store.query(stmt)


async def search_projects(store: RecordStore, term: str) -> list[Row]:
    """Match on project number (when ``term`` is numeric) or name substring."""
    criteria = [projects.c.project_name.contains(term, autoescape=True)]
    if term.isascii() and term.isdigit() and is_storable_number(int(term)):
        criteria.append(projects.c.project_number == int(term))

    stmt = select(projects).where(or_(*criteria)).order_by(projects.c.project_number)
    return await store.query(stmt)


async def insert_project(store: RecordStore, details: ProjectDetails) -> int:
    """Insert a project and return its assigned project number."""
    stmt = insert(projects).values(**details.to_row())
    return await store.insert(stmt)


async def update_project(
    store: RecordStore, project_number: int, details: ProjectDetails
) -> int:
    stmt = (
        update(projects)
        .where(projects.c.project_number == project_number)
        .values(**details.to_row())
    )
    return await store.execute(stmt)


async def finalise_project(
    store: RecordStore, project_number: int, completion_date: date
) -> int:
    stmt = (
        update(projects)
        .where(projects.c.project_number == project_number)
        .values(project_finalised=True, completion_date=completion_date)
    )
    return await store.execute(stmt)


async def delete_project_row(store: RecordStore, project_number: int) -> int:
    stmt = delete(projects).where(projects.c.project_number == project_number)
    return await store.execute(stmt)
