"""Process-scoped application context.

One database session, one console and one prompter are opened when the
program starts and released when it exits. They travel together in an
:class:`AppContext` passed explicitly to every operation.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TextIO

from rich.console import Console

from poised.config import get_config
from poised.db.connection import close_db, get_session
from poised.db.store import RecordStore
from poised.projects.deletion import DeletionCoordinator
from poised.prompts.prompter import Prompter


@dataclass
class AppContext:
    store: RecordStore
    prompter: Prompter
    console: Console

    @property
    def deletion(self) -> DeletionCoordinator:
        return DeletionCoordinator(self.store, self.prompter)


@asynccontextmanager
async def open_context(
    console: Console | None = None,
    stream: TextIO | None = None,
) -> AsyncIterator[AppContext]:
    """Open the database session and console for the lifetime of the block.

    Args:
        console: Console to print to (default: stdout)
        stream: Read answers from this stream instead of stdin
    """
    if console is None:
        console = Console(width=get_config().console.width)

    try:
        async with get_session() as session:
            yield AppContext(
                store=RecordStore(session),
                prompter=Prompter(console, stream=stream),
                console=console,
            )
    finally:
        await close_db()
