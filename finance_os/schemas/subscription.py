"""
Pydantic schemas for subscriptions.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from finance_os.models.enums import BillingCycle
from finance_os.schemas.journal import AccountRef


class SubscriptionCreate(BaseModel):
    account_id: int
    name: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(gt=0, decimal_places=2)
    billing_cycle: BillingCycle
    next_billing_date: dt.date
    description: str | None = Field(default=None, max_length=1000)


class SubscriptionUpdate(BaseModel):
    account_id: int | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    billing_cycle: BillingCycle | None = None
    next_billing_date: dt.date | None = None
    description: str | None = Field(default=None, max_length=1000)
    is_active: bool | None = None


class SubscriptionResponse(BaseModel):
    id: int
    account_id: int
    name: str
    amount: Decimal
    billing_cycle: BillingCycle
    next_billing_date: dt.date
    description: str | None
    is_active: bool
    account: AccountRef
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class MonthlyCostResponse(BaseModel):
    total_monthly_cost: Decimal
