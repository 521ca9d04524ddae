"""Database layer for Poised PMS with async SQLAlchemy."""

from poised.db.connection import close_db, get_session, init_db
from poised.db.models import (
    ArchitectModel,
    Base,
    ContractorModel,
    CustomerModel,
    ProjectModel,
)
from poised.db.references import count_references
from poised.db.store import RecordStore

__all__ = [
    "Base",
    "ProjectModel",
    "ArchitectModel",
    "ContractorModel",
    "CustomerModel",
    "RecordStore",
    "count_references",
    "close_db",
    "get_session",
    "init_db",
]
