"""Project deletion with conditional cascade to the project's parties.

For each of the project's three parties the coordinator counts how many
projects reference it:

- one reference (only this project): the party is deleted;
- several references: the user is asked whether to delete it anyway, and a
  "false" answer keeps the party;
- no references (dangling id): any matching party row is deleted.

All questions are asked before anything is written. The party deletes and
the project delete then run in a single transaction, so a failure part way
through leaves the database untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from poised.db.references import count_references
from poised.db.store import RecordStore
from poised.errors import CascadeDeletionError, StoreError
from poised.models import PartyRole
from poised.parties.repository import delete_party
from poised.projects.repository import delete_project_row, fetch_project, projects
from poised.prompts.prompter import Prompter

logger = structlog.get_logger(__name__)

SHARED_PARTY_PROMPT = (
    "The {role} is associated with multiple projects. "
    "Do you also wish to delete the {role}? (true/false): "
)


@dataclass(slots=True)
class PartyDecision:
    """What the cascade does with one of the project's parties."""

    role: PartyRole
    party_id: str
    reference_count: int
    delete: bool
    prompted: bool = False
    rows_deleted: int = 0

    @property
    def shared(self) -> bool:
        return self.reference_count > 1


@dataclass(slots=True)
class DeletionOutcome:
    project_number: int
    found: bool
    decisions: list[PartyDecision] = field(default_factory=list)

    @property
    def deleted_parties(self) -> list[PartyDecision]:
        return [d for d in self.decisions if d.delete]

    @property
    def preserved_parties(self) -> list[PartyDecision]:
        return [d for d in self.decisions if not d.delete]


class DeletionCoordinator:
    """Deletes projects, cascading to parties no other project needs."""

    def __init__(self, store: RecordStore, prompter: Prompter):
        self.store = store
        self.prompter = prompter

    async def delete_project(self, project_number: int) -> DeletionOutcome:
        """Delete a project and, where appropriate, its parties.

        Returns:
            DeletionOutcome with ``found=False`` (and nothing deleted) when
            no project has this number

        Raises:
            StoreError: If reading the project or its reference counts fails
            CascadeDeletionError: If any delete fails; all deletes of this
                call are rolled back
        """
        project = await fetch_project(self.store, project_number)
        if project is None:
            logger.info("deletion.project_not_found", project_number=project_number)
            return DeletionOutcome(project_number=project_number, found=False)

        decisions = []
        for role in PartyRole:
            decisions.append(await self._decide(role, project[role.reference_column]))

        try:
            async with self.store.atomic():
                for decision in decisions:
                    if decision.delete:
                        decision.rows_deleted = await delete_party(
                            self.store, decision.role, decision.party_id
                        )
                await delete_project_row(self.store, project_number)
        except StoreError as e:
            logger.error(
                "deletion.rolled_back",
                project_number=project_number,
                error=str(e),
            )
            raise CascadeDeletionError(project_number, e) from e

        logger.info(
            "deletion.completed",
            project_number=project_number,
            deleted=[f"{d.role.value}:{d.party_id}" for d in decisions if d.delete],
            preserved=[f"{d.role.value}:{d.party_id}" for d in decisions if not d.delete],
        )
        return DeletionOutcome(
            project_number=project_number, found=True, decisions=decisions
        )

    async def _decide(self, role: PartyRole, party_id: str) -> PartyDecision:
        count = await count_references(
            self.store, projects.name, role.reference_column, party_id
        )

        if count <= 1:
            return PartyDecision(
                role=role, party_id=party_id, reference_count=count, delete=True
            )

        answer = self.prompter.boolean(SHARED_PARTY_PROMPT.format(role=role.value))
        return PartyDecision(
            role=role,
            party_id=party_id,
            reference_count=count,
            delete=answer,
            prompted=True,
        )
