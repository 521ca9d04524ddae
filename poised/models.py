"""Poised Pydantic models for type-safe data validation.

These carry validated values between the prompts and the record store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

_DIGITS_PATTERN = r"^[0-9]+$"


class PartyRole(str, Enum):
    """The three kinds of party a project references."""

    ARCHITECT = "architect"
    CONTRACTOR = "contractor"
    CUSTOMER = "customer"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def table_name(self) -> str:
        """Name of the table holding parties of this role."""
        return f"{self.label}s"

    @property
    def reference_column(self) -> str:
        """Column on Projects (and key column on the party table)."""
        return f"{self.value}_id"


class ProjectDetails(BaseModel):
    """Every user-supplied field of a project record."""

    architect_id: str = Field(min_length=1)
    contractor_id: str = Field(min_length=1)
    customer_id: str = Field(min_length=1)

    project_name: str | None = None
    building_type: str = Field(min_length=1)
    physical_address: str = Field(min_length=1)
    erf_number: str = Field(pattern=_DIGITS_PATTERN)

    total_fee: float = Field(ge=0)
    amount_paid: float = Field(ge=0)

    project_deadline: date
    project_finalised: bool = False
    completion_date: date | None = None

    @field_validator("project_name")
    @classmethod
    def blank_name_is_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def completion_date_iff_finalised(self) -> ProjectDetails:
        """A completion date is recorded exactly when the project is finalised."""
        if self.project_finalised and self.completion_date is None:
            raise ValueError("A finalised project needs a completion date")
        if not self.project_finalised and self.completion_date is not None:
            raise ValueError("Only a finalised project can have a completion date")
        return self

    def party_id(self, role: PartyRole) -> str:
        return getattr(self, role.reference_column)

    def display_name(self, customer_surname: str | None = None) -> str:
        """Project name, or "<building type> <customer surname>" when unnamed."""
        if self.project_name:
            return self.project_name
        if customer_surname:
            return f"{self.building_type} {customer_surname}"
        return self.building_type

    def to_row(self) -> dict[str, Any]:
        return self.model_dump()


class PartyDetails(BaseModel, ABC):
    """Fields shared by every party."""

    party_id: str = Field(min_length=1)
    tel: str = Field(pattern=_DIGITS_PATTERN)
    email: str = Field(min_length=1)
    address: str = Field(min_length=1)

    role: PartyRole

    def to_row(self) -> dict[str, Any]:
        """Map onto the party table's column names."""
        prefix = self.role.value
        row = {
            f"{prefix}_id": self.party_id,
            f"{prefix}_tel": self.tel,
            f"{prefix}_email": self.email,
            f"{prefix}_address": self.address,
        }
        row.update(self._name_columns())
        return row

    @abstractmethod
    def _name_columns(self) -> dict[str, Any]:
        """Name columns, which differ between party tables."""


class ArchitectDetails(PartyDetails):
    role: PartyRole = PartyRole.ARCHITECT
    name: str = Field(min_length=1)

    def _name_columns(self) -> dict[str, Any]:
        return {"architect_name": self.name}


class ContractorDetails(PartyDetails):
    role: PartyRole = PartyRole.CONTRACTOR
    name: str = Field(min_length=1)

    def _name_columns(self) -> dict[str, Any]:
        return {"contractor_name": self.name}


class CustomerDetails(PartyDetails):
    role: PartyRole = PartyRole.CUSTOMER
    first_name: str = Field(min_length=1)
    surname: str = Field(min_length=1)

    def _name_columns(self) -> dict[str, Any]:
        return {
            "customer_fname": self.first_name,
            "customer_surname": self.surname,
        }
