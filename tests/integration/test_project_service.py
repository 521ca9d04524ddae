"""Tests for the interactive project operations."""

from __future__ import annotations

from datetime import date

import pytest

from poised.projects import service
from poised.projects.repository import fetch_project, list_projects
from poised.prompts.parsers import INVALID_DATE, INVALID_INTEGER, INVALID_NUMBER, NEGATIVE_AMOUNT


def project_answers(
    name: str = "Harbour View",
    finalised: str = "false",
    completion: str | None = None,
) -> list[str]:
    answers = [
        "A1",  # architect id
        "C1",  # contractor id
        "U1",  # customer id
        name,
        "House",
        "1 Beach Road, Sea Point",
        "4521",  # ERF number
        "250000",  # total fee
        "50000.50",  # amount paid
        "2025-06-30",  # deadline
        finalised,
    ]
    if completion is not None:
        answers.append(completion)
    return answers


@pytest.mark.asyncio
async def test_add_project_inserts_row(store, seed, make_context):
    await seed.parties("A1", "C1", "U1")
    ctx = make_context(*project_answers())

    project_number = await service.add_project(ctx)

    row = await fetch_project(store, project_number)
    assert row["project_name"] == "Harbour View"
    assert row["erf_number"] == "4521"
    assert row["amount_paid"] == pytest.approx(50000.5)
    assert row["project_deadline"] == date(2025, 6, 30)
    assert row["project_finalised"] is False
    assert row["completion_date"] is None


@pytest.mark.asyncio
async def test_add_project_retries_bad_fields(store, seed, make_context, output):
    await seed.parties("A1", "C1", "U1")
    answers = [
        "A1", "C1", "U1", "Harbour View", "House", "1 Beach Road",
        "45-21", "4521",  # ERF number
        "lots", "250000",  # total fee
        "-10", "0",  # amount paid
        "30/06/2025", "2025-06-30",  # deadline
        "true",
        "2025-07-01",
    ]
    ctx = make_context(*answers)

    project_number = await service.add_project(ctx)

    row = await fetch_project(store, project_number)
    assert row["project_finalised"] is True
    assert row["completion_date"] == date(2025, 7, 1)
    assert output().count(INVALID_INTEGER) == 1
    assert output().count(INVALID_NUMBER) == 1
    assert output().count(NEGATIVE_AMOUNT) == 1
    assert output().count(INVALID_DATE) == 1


@pytest.mark.asyncio
async def test_unnamed_project_is_named_after_building_and_customer(store, seed, make_context):
    await seed.architect("A1")
    await seed.contractor("C1")
    await seed.customer("U1", surname="Naidoo")
    ctx = make_context(*project_answers(name=""))

    project_number = await service.add_project(ctx)

    row = await fetch_project(store, project_number)
    assert row["project_name"] == "House Naidoo"


@pytest.mark.asyncio
async def test_add_project_warns_about_unknown_parties(store, make_context, output):
    ctx = make_context(*project_answers())

    await service.add_project(ctx)

    assert "No architect with ID A1 exists yet" in output()
    assert "No customer with ID U1 exists yet" in output()
    assert len(await list_projects(store)) == 1


@pytest.mark.asyncio
async def test_edit_project_clears_completion_date(store, seed, make_context):
    project_number = await seed.project(
        "A1", "C1", "U1", project_finalised=True, completion_date=date(2025, 5, 1)
    )
    ctx = make_context(str(project_number), *project_answers(name="Renamed"))

    await service.edit_project(ctx)

    row = await fetch_project(store, project_number)
    assert row["project_name"] == "Renamed"
    assert row["project_finalised"] is False
    assert row["completion_date"] is None


@pytest.mark.asyncio
async def test_edit_unknown_project_reports_not_found(store, make_context, output):
    ctx = make_context("42")

    assert await service.edit_project(ctx) is None
    assert "Project record not found." in output()


@pytest.mark.asyncio
async def test_finalise_sets_completion_date(store, seed, make_context, output):
    project_number = await seed.project("A1", "C1", "U1")
    ctx = make_context(str(project_number), "2025-02-30", "2025-03-01")

    assert await service.finalise(ctx) is True

    row = await fetch_project(store, project_number)
    assert row["project_finalised"] is True
    assert row["completion_date"] == date(2025, 3, 1)
    assert output().count(INVALID_DATE) == 1


@pytest.mark.asyncio
async def test_finalise_unknown_project(make_context, output):
    ctx = make_context("7")

    assert await service.finalise(ctx) is False
    assert "Project Number 7 not found." in output()


@pytest.mark.asyncio
async def test_finalise_reprompts_for_oversized_project_number(make_context, output):
    ctx = make_context("99999999999999999999", "7")

    assert await service.finalise(ctx) is False
    assert output().count(INVALID_INTEGER) == 1
    assert "Project Number 7 not found." in output()


@pytest.mark.asyncio
async def test_incomplete_and_overdue_listings(seed, make_context, output):
    await seed.project("A1", "C1", "U1", project_name="Late Build", project_deadline=date(2024, 1, 31))
    await seed.project("A1", "C1", "U1", project_name="Future Build", project_deadline=date(2030, 1, 31))
    await seed.project(
        "A1", "C1", "U1",
        project_name="Done Build",
        project_deadline=date(2024, 1, 31),
        project_finalised=True,
        completion_date=date(2024, 1, 15),
    )
    ctx = make_context()

    await service.show_overdue(ctx, today=date(2025, 1, 1))
    overdue = output()
    assert "Late Build" in overdue
    assert "Future Build" not in overdue
    assert "Done Build" not in overdue

    await service.show_incomplete(ctx)
    incomplete = output()[len(overdue):]
    assert "Late Build" in incomplete
    assert "Future Build" in incomplete
    assert "Done Build" not in incomplete


@pytest.mark.asyncio
async def test_overdue_with_none_found(make_context, output):
    await service.show_overdue(make_context(), today=date(2025, 1, 1))

    assert "No overdue projects found." in output()


@pytest.mark.asyncio
async def test_search_by_number_or_name(seed, make_context, output):
    first = await seed.project("A1", "C1", "U1", project_name="Sea Point Flats")
    await seed.project("A1", "C1", "U1", project_name="Camps Bay Villa")
    ctx = make_context()

    await service.search(ctx, term=str(first))
    by_number = output()
    assert "Sea Point Flats" in by_number
    assert "Camps Bay Villa" not in by_number

    await service.search(ctx, term="Villa")
    by_name = output()[len(by_number):]
    assert "Camps Bay Villa" in by_name
    assert "Sea Point Flats" not in by_name


@pytest.mark.asyncio
async def test_search_for_number_beyond_key_range(seed, make_context, output):
    await seed.project("A1", "C1", "U1", project_name="Sea Point Flats")

    await service.search(make_context(), term="99999999999999999999")

    assert "No projects found matching the search term '99999999999999999999'." in output()


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(seed, make_context, output):
    await seed.project("A1", "C1", "U1", project_name="Sea Point Flats")

    await service.search(make_context(), term="%")

    assert "No projects found matching the search term '%'." in output()


@pytest.mark.asyncio
async def test_delete_reports_outcome(seed, make_context, output):
    await seed.parties("A1", "C1", "U1")
    project_number = await seed.project("A1", "C1", "U1")
    ctx = make_context(str(project_number))

    outcome = await service.delete(ctx)

    assert outcome.found is True
    assert "Architect with ID A1 successfully deleted!" in output()
    assert f"Project Number {project_number} successfully deleted!" in output()


@pytest.mark.asyncio
async def test_delete_reports_party_ids_without_records(seed, make_context, output):
    await seed.architect("A1")
    project_number = await seed.project("A1", "C9", "U9")

    await service.delete(make_context(), project_number=project_number)

    assert "Architect with ID A1 successfully deleted!" in output()
    assert "Contractor with ID C9 has no record to delete." in output()
    assert "Customer with ID U9 has no record to delete." in output()
    assert "Contractor with ID C9 successfully deleted!" not in output()


@pytest.mark.asyncio
async def test_delete_unknown_project_reports_not_found(make_context, output):
    outcome = await service.delete(make_context(), project_number=404)

    assert outcome.found is False
    assert "Project Number 404 not found." in output()
