"""Record store: parameterized statement execution over an async session.

Every statement handed to the store is a SQLAlchemy Core expression, so
user-supplied values always travel as bound parameters.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import Executable

from poised.errors import StoreError

logger = structlog.get_logger(__name__)

Row = dict[str, Any]


class RecordStore:
    """Executes reads and writes against the Poised tables."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def query(self, statement: Executable) -> list[Row]:
        """Run a read statement and return rows as column-name mappings.

        Raises:
            StoreError: If the database rejects the statement
        """
        try:
            result = await self._session.execute(statement)
            rows = [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error("store.query_failed", error=str(e))
            raise StoreError(f"Query failed: {e}") from e
        return rows

    async def query_one(self, statement: Executable) -> Row | None:
        """Run a read statement and return its first row, if any."""
        rows = await self.query(statement)
        return rows[0] if rows else None

    async def scalar(self, statement: Executable) -> Any:
        """Run a read statement and return the first column of the first row."""
        try:
            return await self._session.scalar(statement)
        except SQLAlchemyError as e:
            logger.error("store.scalar_failed", error=str(e))
            raise StoreError(f"Query failed: {e}") from e

    async def execute(self, statement: Executable) -> int:
        """Run a write statement and return the number of affected rows.

        The write joins the session's current transaction; call
        :meth:`commit` or use :meth:`atomic` to make it durable.

        Raises:
            StoreError: If the database rejects the statement
        """
        try:
            result = await self._session.execute(statement)
        except SQLAlchemyError as e:
            logger.error("store.execute_failed", error=str(e))
            raise StoreError(f"Statement failed: {e}") from e
        return result.rowcount

    async def insert(self, statement: Executable) -> Any:
        """Run a single-row INSERT and return the generated primary key."""
        try:
            result = await self._session.execute(statement)
        except SQLAlchemyError as e:
            logger.error("store.insert_failed", error=str(e))
            raise StoreError(f"Insert failed: {e}") from e
        return result.inserted_primary_key[0]

    async def commit(self) -> None:
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            logger.error("store.commit_failed", error=str(e))
            raise StoreError(f"Commit failed: {e}") from e

    async def rollback(self) -> None:
        await self._session.rollback()

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[RecordStore]:
        """Group writes into one transaction.

        Usage:
            async with store.atomic():
                await store.execute(delete(...))
                await store.execute(delete(...))

        Commits when the block exits normally; rolls back and re-raises
        otherwise.
        """
        try:
            yield self
            await self.commit()
        except Exception:
            await self.rollback()
            raise
