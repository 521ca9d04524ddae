"""Reads and writes for the Architects, Contractors and Customers tables."""

from __future__ import annotations

from sqlalchemy import Column, Table, delete, insert, select, update

from poised.db.models import ArchitectModel, ContractorModel, CustomerModel
from poised.db.store import RecordStore, Row
from poised.models import PartyDetails, PartyRole

PARTY_TABLES: dict[PartyRole, Table] = {
    PartyRole.ARCHITECT: ArchitectModel.__table__,
    PartyRole.CONTRACTOR: ContractorModel.__table__,
    PartyRole.CUSTOMER: CustomerModel.__table__,
}


def party_table(role: PartyRole) -> Table:
    return PARTY_TABLES[role]


def _key_column(role: PartyRole) -> Column:
    return party_table(role).c[role.reference_column]


async def fetch_party(store: RecordStore, role: PartyRole, party_id: str) -> Row | None:
    stmt = select(party_table(role)).where(_key_column(role) == party_id)
    return await store.query_one(stmt)


async def list_parties(store: RecordStore, role: PartyRole) -> list[Row]:
    stmt = select(party_table(role)).order_by(_key_column(role))
    return await store.query(stmt)


async def insert_party(store: RecordStore, details: PartyDetails) -> int:
    stmt = insert(party_table(details.role)).values(**details.to_row())
    return await store.execute(stmt)


async def update_party(store: RecordStore, details: PartyDetails) -> int:
    """Overwrite every non-key column of an existing party."""
    row = details.to_row()
    row.pop(details.role.reference_column)
    stmt = (
        update(party_table(details.role))
        .where(_key_column(details.role) == details.party_id)
        .values(**row)
    )
    return await store.execute(stmt)


async def delete_party(store: RecordStore, role: PartyRole, party_id: str) -> int:
    stmt = delete(party_table(role)).where(_key_column(role) == party_id)
    return await store.execute(stmt)
