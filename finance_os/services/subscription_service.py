"""
Subscription service.

Subscriptions track recurring charges. They never touch a
balance; paying one is recorded separately as an expense.
"""

import datetime as dt
import logging
import uuid
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import select
from sqlalchemy.orm import Session

from finance_os.config import get_settings
from finance_os.errors import NotFoundError
from finance_os.models.enums import BillingCycle
from finance_os.models.subscription import Subscription
from finance_os.schemas.subscription import SubscriptionCreate, SubscriptionUpdate
from finance_os.services.admission import AdmissionGuard

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# Multiplier turning one charge into its monthly equivalent.
MONTHLY_FACTOR = {
    BillingCycle.WEEKLY: Decimal("4.33"),
    BillingCycle.MONTHLY: Decimal("1"),
    BillingCycle.QUARTERLY: Decimal("1") / Decimal("3"),
    BillingCycle.YEARLY: Decimal("1") / Decimal("12"),
}


class SubscriptionService:

    def __init__(self, db: Session):
        self.db = db
        self.guard = AdmissionGuard(db)

    def create_subscription(
        self, owner_id: uuid.UUID, request: SubscriptionCreate
    ) -> Subscription:
        self.guard.require_positive(request.amount)
        account = self.guard.require_account(owner_id, request.account_id)

        subscription = Subscription(
            owner_id=owner_id,
            account=account,
            name=request.name,
            amount=request.amount,
            billing_cycle=request.billing_cycle,
            next_billing_date=request.next_billing_date,
            description=request.description,
        )
        self.db.add(subscription)
        self.db.flush()
        logger.info(
            "Created %s subscription %s on account %s",
            subscription.billing_cycle.value, subscription.id, account.id,
        )
        return subscription

    def get_subscription(
        self, owner_id: uuid.UUID, subscription_id: int
    ) -> Subscription:
        subscription = self.db.execute(
            select(Subscription).where(
                Subscription.id == subscription_id,
                Subscription.owner_id == owner_id,
            )
        ).scalar_one_or_none()
        if not subscription:
            raise NotFoundError("Subscription", subscription_id)
        return subscription

    def list_subscriptions(
        self,
        owner_id: uuid.UUID,
        account_id: int | None = None,
        is_active: bool | None = None,
        billing_cycle: BillingCycle | None = None,
    ) -> list[Subscription]:
        """Owned subscriptions, next renewal first."""
        query = select(Subscription).where(Subscription.owner_id == owner_id)
        if account_id is not None:
            query = query.where(Subscription.account_id == account_id)
        if is_active is not None:
            query = query.where(Subscription.is_active == is_active)
        if billing_cycle is not None:
            query = query.where(Subscription.billing_cycle == billing_cycle)

        return list(self.db.execute(
            query.order_by(Subscription.next_billing_date, Subscription.id)
        ).scalars().all())

    def update_subscription(
        self,
        owner_id: uuid.UUID,
        subscription_id: int,
        request: SubscriptionUpdate,
    ) -> Subscription:
        subscription = self.get_subscription(owner_id, subscription_id)
        changes = request.model_dump(exclude_unset=True)

        account_id = changes.pop("account_id", None)
        if account_id is not None and account_id != subscription.account_id:
            subscription.account = self.guard.require_account(owner_id, account_id)

        if changes.get("amount") is not None:
            self.guard.require_positive(changes["amount"])

        for field in ("name", "amount", "billing_cycle", "next_billing_date", "is_active"):
            if changes.get(field) is not None:
                setattr(subscription, field, changes[field])
        if "description" in changes:
            subscription.description = changes["description"]

        self.db.flush()
        return subscription

    def delete_subscription(self, owner_id: uuid.UUID, subscription_id: int) -> None:
        subscription = self.get_subscription(owner_id, subscription_id)
        self.db.delete(subscription)
        self.db.flush()
        logger.info("Deleted subscription %s", subscription_id)

    def active(self, owner_id: uuid.UUID) -> list[Subscription]:
        return self.list_subscriptions(owner_id, is_active=True)

    def upcoming(
        self,
        owner_id: uuid.UUID,
        days: int | None = None,
        today: dt.date | None = None,
    ) -> list[Subscription]:
        """Active subscriptions renewing within `days` days, soonest first."""
        if days is None:
            days = get_settings().UPCOMING_RENEWAL_DAYS
        today = today or dt.date.today()
        horizon = today + dt.timedelta(days=days)

        return list(self.db.execute(
            select(Subscription)
            .where(
                Subscription.owner_id == owner_id,
                Subscription.is_active.is_(True),
                Subscription.next_billing_date >= today,
                Subscription.next_billing_date <= horizon,
            )
            .order_by(Subscription.next_billing_date, Subscription.id)
        ).scalars().all())

    def monthly_cost(self, owner_id: uuid.UUID) -> Decimal:
        """What the active subscriptions cost per month, in cents."""
        total = sum(
            (
                Decimal(str(s.amount)) * MONTHLY_FACTOR[s.billing_cycle]
                for s in self.active(owner_id)
            ),
            Decimal("0"),
        )
        return total.quantize(CENT, rounding=ROUND_HALF_UP)
