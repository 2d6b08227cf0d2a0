"""
Income and expense category models.

A category groups journal entries for reporting. Income
types may carry a monthly target, expense types a monthly
budget. Names are unique per owner within each kind.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, Text, Boolean, DateTime, Numeric,
    CheckConstraint, UniqueConstraint, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from finance_os.models.base import Base


class IncomeType(Base):
    __tablename__ = "income_types"
    __table_args__ = (
        CheckConstraint(
            "target_amount IS NULL OR target_amount > 0",
            name="ck_income_types_positive_target",
        ),
        UniqueConstraint("owner_id", "name", name="uq_income_types_owner_name"),
    )

    label = "Income type"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(15, 2), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    @property
    def limit_amount(self) -> Decimal | None:
        """The monthly goal for this category."""
        return self.target_amount

    @limit_amount.setter
    def limit_amount(self, value: Decimal | None) -> None:
        self.target_amount = value

    def __repr__(self) -> str:
        return f"<IncomeType {self.name!r} target={self.target_amount}>"


class ExpenseType(Base):
    __tablename__ = "expense_types"
    __table_args__ = (
        CheckConstraint(
            "budget_amount IS NULL OR budget_amount > 0",
            name="ck_expense_types_positive_budget",
        ),
        UniqueConstraint("owner_id", "name", name="uq_expense_types_owner_name"),
    )

    label = "Expense type"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    budget_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(15, 2), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    @property
    def limit_amount(self) -> Decimal | None:
        """The monthly goal for this category."""
        return self.budget_amount

    @limit_amount.setter
    def limit_amount(self, value: Decimal | None) -> None:
        self.budget_amount = value

    def __repr__(self) -> str:
        return f"<ExpenseType {self.name!r} budget={self.budget_amount}>"
