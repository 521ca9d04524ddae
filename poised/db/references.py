"""Reference counting over the Poised tables."""

from __future__ import annotations

from sqlalchemy import Column, Table, func, select

from poised.db.models import Base
from poised.db.store import RecordStore


def resolve_column(table: str, column: str) -> tuple[Table, Column]:
    """Look up a declared table and column by name.

    Raises:
        ValueError: If either name is not part of the schema
    """
    try:
        table_obj = Base.metadata.tables[table]
    except KeyError:
        raise ValueError(f"Unknown table: {table}") from None

    try:
        column_obj = table_obj.c[column]
    except KeyError:
        raise ValueError(f"Unknown column {column} on table {table}") from None

    return table_obj, column_obj


async def count_references(
    store: RecordStore,
    table: str,
    column: str,
    identifier: str,
) -> int:
    """Count rows in ``table`` whose ``column`` equals ``identifier``.

    Args:
        store: Record store to query
        table: Table name, e.g. "Projects"
        column: Column name, e.g. "architect_id"
        identifier: Value to match

    Returns:
        Number of matching rows (0 when none)
    """
    table_obj, column_obj = resolve_column(table, column)
    stmt = select(func.count()).select_from(table_obj).where(column_obj == identifier)
    count = await store.scalar(stmt)
    return int(count or 0)
