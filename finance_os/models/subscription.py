"""
Recurring subscription model.

A subscription is a reminder of a recurring charge against
an account. It has no balance effect of its own; the actual
payment is recorded as an expense when it happens.
"""

import uuid
import datetime as dt
from decimal import Decimal

from sqlalchemy import (
    String, Text, Boolean, Date, DateTime, Numeric, ForeignKey,
    CheckConstraint, Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from finance_os.models.base import Base
from finance_os.models.enums import BillingCycle


class Subscription(Base):
    __tablename__ = "subscriptions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_subscriptions_positive_amount"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, nullable=False, index=True
    )
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    billing_cycle: Mapped[BillingCycle] = mapped_column(
        SAEnum(
            BillingCycle,
            name="billing_cycle_enum",
            create_constraint=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    next_billing_date: Mapped[dt.date] = mapped_column(
        Date, nullable=False, index=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow
    )

    account: Mapped["Account"] = relationship()

    def __repr__(self) -> str:
        return (
            f"<Subscription {self.name!r} {self.amount} "
            f"{self.billing_cycle.value}>"
        )
