"""SQLAlchemy database models for Poised PMS.

Maps to the four-table Poised schema. Party references on ``Projects`` are
plain text columns: the cascade policy for parties is applied by
:mod:`poised.projects.deletion`, not by the database.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    Float,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Largest key a SQLite INTEGER or PostgreSQL BIGINT column can hold
MAX_PROJECT_NUMBER = 2**63 - 1


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class ProjectModel(Base):
    """Construction project and the three parties attached to it."""

    __tablename__ = "Projects"

    project_number: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Parties
    architect_id: Mapped[str] = mapped_column(String(64), nullable=False)
    contractor_id: Mapped[str] = mapped_column(String(64), nullable=False)
    customer_id: Mapped[str] = mapped_column(String(64), nullable=False)

    # Project details
    project_name: Mapped[str | None] = mapped_column(Text)
    building_type: Mapped[str] = mapped_column(Text, nullable=False)
    physical_address: Mapped[str] = mapped_column(Text, nullable=False)
    erf_number: Mapped[str] = mapped_column(String(32), nullable=False)

    # Fees
    total_fee: Mapped[float] = mapped_column(Float, nullable=False)
    amount_paid: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # Progress
    project_deadline: Mapped[date] = mapped_column(Date, nullable=False)
    project_finalised: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    completion_date: Mapped[date | None] = mapped_column(Date)

    __table_args__ = (
        CheckConstraint(
            "(project_finalised AND completion_date IS NOT NULL) OR "
            "(NOT project_finalised AND completion_date IS NULL)",
            name="check_completion_date_iff_finalised",
        ),
        CheckConstraint("total_fee >= 0", name="check_total_fee_non_negative"),
        CheckConstraint("amount_paid >= 0", name="check_amount_paid_non_negative"),
        Index("idx_projects_architect", "architect_id"),
        Index("idx_projects_contractor", "contractor_id"),
        Index("idx_projects_customer", "customer_id"),
        Index("idx_projects_finalised", "project_finalised"),
    )


class ArchitectModel(Base):
    """Architect party."""

    __tablename__ = "Architects"

    architect_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    architect_name: Mapped[str] = mapped_column(Text, nullable=False)
    architect_tel: Mapped[str] = mapped_column(String(32), nullable=False)
    architect_email: Mapped[str] = mapped_column(Text, nullable=False)
    architect_address: Mapped[str] = mapped_column(Text, nullable=False)


class ContractorModel(Base):
    """Contractor party."""

    __tablename__ = "Contractors"

    contractor_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    contractor_name: Mapped[str] = mapped_column(Text, nullable=False)
    contractor_tel: Mapped[str] = mapped_column(String(32), nullable=False)
    contractor_email: Mapped[str] = mapped_column(Text, nullable=False)
    contractor_address: Mapped[str] = mapped_column(Text, nullable=False)


class CustomerModel(Base):
    """Customer party. Customers carry a first name and surname."""

    __tablename__ = "Customers"

    customer_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    customer_fname: Mapped[str] = mapped_column(Text, nullable=False)
    customer_surname: Mapped[str] = mapped_column(Text, nullable=False)
    customer_tel: Mapped[str] = mapped_column(String(32), nullable=False)
    customer_email: Mapped[str] = mapped_column(Text, nullable=False)
    customer_address: Mapped[str] = mapped_column(Text, nullable=False)
