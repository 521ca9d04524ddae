"""Pytest configuration and fixtures for Poised tests.

Provides an in-memory database, a captured console and helpers to script
the answers a user would type at the prompts.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from datetime import date

import pytest
import pytest_asyncio
from rich.console import Console
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from poised.config import reset_config
from poised.context import AppContext
from poised.db.models import Base
from poised.db.store import RecordStore
from poised.models import (
    ArchitectDetails,
    ContractorDetails,
    CustomerDetails,
    ProjectDetails,
)
from poised.parties.repository import insert_party
from poised.projects.repository import insert_project
from poised.prompts.prompter import Prompter


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    reset_config()
    yield
    reset_config()


@pytest_asyncio.fixture()
async def db_session() -> AsyncSession:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest.fixture
def store(db_session: AsyncSession) -> RecordStore:
    return RecordStore(db_session)


@pytest.fixture
def console() -> Console:
    """Console writing plain text to a buffer wide enough to avoid wrapping."""
    return Console(file=io.StringIO(), width=250, color_system=None, force_terminal=False)


@pytest.fixture
def output(console: Console) -> Callable[[], str]:
    """Everything printed to the test console so far."""
    return lambda: console.file.getvalue()


@pytest.fixture
def make_prompter(console: Console) -> Callable[..., Prompter]:
    """Prompter that reads the given answers, one per line."""

    def _make(*answers: str) -> Prompter:
        stream = io.StringIO("".join(f"{answer}\n" for answer in answers))
        return Prompter(console, stream=stream)

    return _make


@pytest.fixture
def make_context(store: RecordStore, console: Console, make_prompter) -> Callable[..., AppContext]:
    """AppContext over the test database, answering prompts with ``answers``."""

    def _make(*answers: str) -> AppContext:
        return AppContext(store=store, prompter=make_prompter(*answers), console=console)

    return _make


class Seeder:
    """Inserts committed parties and projects."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def architect(self, party_id: str, name: str = "Ama Mensah") -> None:
        await self._party(
            ArchitectDetails(
                party_id=party_id,
                name=name,
                tel="0215550101",
                email=f"{party_id.lower()}@studio.example",
                address="12 Loop Street, Cape Town",
            )
        )

    async def contractor(self, party_id: str, name: str = "Bongani Builders") -> None:
        await self._party(
            ContractorDetails(
                party_id=party_id,
                name=name,
                tel="0215550202",
                email=f"{party_id.lower()}@build.example",
                address="4 Harbour Road, Durban",
            )
        )

    async def customer(self, party_id: str, surname: str = "Smith") -> None:
        await self._party(
            CustomerDetails(
                party_id=party_id,
                first_name="Jane",
                surname=surname,
                tel="0825550303",
                email=f"{party_id.lower()}@mail.example",
                address="88 Kloof Nek Road, Cape Town",
            )
        )

    async def parties(self, architect_id: str, contractor_id: str, customer_id: str) -> None:
        await self.architect(architect_id)
        await self.contractor(contractor_id)
        await self.customer(customer_id)

    async def project(
        self,
        architect_id: str,
        contractor_id: str,
        customer_id: str,
        **overrides,
    ) -> int:
        fields = dict(
            architect_id=architect_id,
            contractor_id=contractor_id,
            customer_id=customer_id,
            project_name="Harbour View",
            building_type="House",
            physical_address="1 Beach Road, Sea Point",
            erf_number="4521",
            total_fee=250000.0,
            amount_paid=50000.0,
            project_deadline=date(2025, 6, 30),
            project_finalised=False,
            completion_date=None,
        )
        fields.update(overrides)
        async with self.store.atomic():
            return await insert_project(self.store, ProjectDetails(**fields))

    async def _party(self, details) -> None:
        async with self.store.atomic():
            await insert_party(self.store, details)


@pytest.fixture
def seed(store: RecordStore) -> Seeder:
    return Seeder(store)
