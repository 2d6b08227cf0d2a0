"""
Journal entry models: incomes, expenses, and transfers.

Each row explains a change to one or two account balances.
The row and its balance effect are always written in the
same transaction by the BalanceEngine; the models themselves
carry no balance logic and there are no database triggers.
"""

import uuid
import datetime as dt
from decimal import Decimal

from sqlalchemy import (
    Date, DateTime, Numeric, Text, ForeignKey,
    CheckConstraint, Index, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from finance_os.models.base import Base


class Income(Base):
    """Money received into one account, filed under an income type."""

    __tablename__ = "incomes"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_incomes_positive_amount"),
        Index("ix_incomes_owner_date", "owner_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    income_type_id: Mapped[int] = mapped_column(
        ForeignKey("income_types.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow
    )

    account: Mapped["Account"] = relationship()
    income_type: Mapped["IncomeType"] = relationship()

    @property
    def category_id(self) -> int:
        return self.income_type_id

    def __repr__(self) -> str:
        return f"<Income {self.amount} -> account {self.account_id} on {self.date}>"


class Expense(Base):
    """Money spent from one account, filed under an expense type."""

    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expenses_positive_amount"),
        Index("ix_expenses_owner_date", "owner_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    expense_type_id: Mapped[int] = mapped_column(
        ForeignKey("expense_types.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow
    )

    account: Mapped["Account"] = relationship()
    expense_type: Mapped["ExpenseType"] = relationship()

    @property
    def category_id(self) -> int:
        return self.expense_type_id

    def __repr__(self) -> str:
        return f"<Expense {self.amount} <- account {self.account_id} on {self.date}>"


class Transfer(Base):
    """
    Money moved between two accounts of the same owner.

    Transfers are immutable. To correct one, delete it (which
    reverses both legs) and record a new one.
    """

    __tablename__ = "transfers"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transfers_positive_amount"),
        CheckConstraint(
            "from_account_id <> to_account_id", name="ck_transfers_different_accounts"
        ),
        Index("ix_transfers_owner_date", "owner_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    from_account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    to_account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow
    )

    from_account: Mapped["Account"] = relationship(foreign_keys=[from_account_id])
    to_account: Mapped["Account"] = relationship(foreign_keys=[to_account_id])

    def __repr__(self) -> str:
        return (
            f"<Transfer {self.amount} {self.from_account_id} -> "
            f"{self.to_account_id} on {self.date}>"
        )
