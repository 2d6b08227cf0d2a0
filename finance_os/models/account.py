"""
Money account model.

An account belongs to exactly one owner and carries its
current balance. The balance is only ever written by the
BalanceEngine; everything else reads it. Accounts are
deactivated, never deleted, so their history stays intact.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, Boolean, DateTime, Numeric, CheckConstraint, Index,
    Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from finance_os.models.base import Base
from finance_os.models.enums import AccountType


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        # Storage-level backstop; the engine's conditional update
        # is what actually rejects an overdraft.
        CheckConstraint("balance >= 0", name="ck_accounts_non_negative_balance"),
        Index("ix_accounts_owner_active", "owner_id", "is_active"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(
            AccountType,
            name="account_type_enum",
            create_constraint=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False, default=Decimal("0.00")
    )
    opening_balance: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False, default=Decimal("0.00")
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

    def __repr__(self) -> str:
        return (
            f"<Account {self.id} {self.name!r} "
            f"{self.account_type.value} balance={self.balance}>"
        )
