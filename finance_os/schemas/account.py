"""
Pydantic schemas for account operations.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from finance_os.models.enums import AccountType


class AccountCreate(BaseModel):
    """Request to open a new money account."""
    name: str = Field(min_length=1, max_length=255)
    account_type: AccountType
    balance: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)


class AccountUpdate(BaseModel):
    """Rename or (de)activate an account. Balance is never set here."""
    name: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None


class AccountResponse(BaseModel):
    id: int
    name: str
    account_type: AccountType
    balance: Decimal
    opening_balance: Decimal
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AccountBalanceResponse(BaseModel):
    account_id: int
    name: str
    account_type: AccountType
    balance: Decimal


class AccountTypeSummary(BaseModel):
    account_type: AccountType
    count: int
    total_balance: Decimal


class AccountSummary(BaseModel):
    """Active accounts grouped by type."""
    total_balance: Decimal
    accounts_by_type: list[AccountTypeSummary]


class ReconciliationReport(BaseModel):
    """Stored balance against the balance the journal explains."""
    account_id: int
    balance: Decimal
    expected: Decimal
    difference: Decimal
    is_consistent: bool
