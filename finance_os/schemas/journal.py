"""
Pydantic schemas for journal entries: incomes, expenses, transfers.

Update schemas are partial. Services read them with
model_dump(exclude_unset=True) so that "field not sent" and
"field set to null" stay distinguishable.
"""

import datetime as dt
from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from finance_os.models.enums import AccountType

T = TypeVar("T")


class AccountRef(BaseModel):
    """Account summary embedded in entry responses."""
    id: int
    name: str
    account_type: AccountType

    model_config = {"from_attributes": True}


class CategoryRef(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


# --- Income ---

class IncomeCreate(BaseModel):
    account_id: int
    income_type_id: int
    amount: Decimal = Field(gt=0, decimal_places=2)
    date: dt.date
    description: str | None = Field(default=None, max_length=1000)


class IncomeUpdate(BaseModel):
    account_id: int | None = None
    income_type_id: int | None = None
    amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    date: dt.date | None = None
    description: str | None = Field(default=None, max_length=1000)


class IncomeResponse(BaseModel):
    id: int
    account_id: int
    income_type_id: int
    amount: Decimal
    date: dt.date
    description: str | None
    account: AccountRef
    income_type: CategoryRef
    created_at: dt.datetime

    model_config = {"from_attributes": True}


# --- Expense ---

class ExpenseCreate(BaseModel):
    account_id: int
    expense_type_id: int
    amount: Decimal = Field(gt=0, decimal_places=2)
    date: dt.date
    description: str | None = Field(default=None, max_length=1000)


class ExpenseUpdate(BaseModel):
    account_id: int | None = None
    expense_type_id: int | None = None
    amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    date: dt.date | None = None
    description: str | None = Field(default=None, max_length=1000)


class ExpenseResponse(BaseModel):
    id: int
    account_id: int
    expense_type_id: int
    amount: Decimal
    date: dt.date
    description: str | None
    account: AccountRef
    expense_type: CategoryRef
    created_at: dt.datetime

    model_config = {"from_attributes": True}


# --- Transfer ---

class TransferCreate(BaseModel):
    """
    Move money between two accounts.

    There is no TransferUpdate: transfers are corrected by
    deleting and recording them again.
    """
    from_account_id: int
    to_account_id: int
    amount: Decimal = Field(gt=0, decimal_places=2)
    date: dt.date
    description: str | None = Field(default=None, max_length=1000)


class TransferResponse(BaseModel):
    id: int
    from_account_id: int
    to_account_id: int
    amount: Decimal
    date: dt.date
    description: str | None
    from_account: AccountRef
    to_account: AccountRef
    created_at: dt.datetime

    model_config = {"from_attributes": True}


# --- Listing ---

class JournalFilters(BaseModel):
    """Optional filters shared by the three entry listings."""
    account_id: int | None = None
    category_id: int | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None


class Page(BaseModel, Generic[T]):
    items: list[T]
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool
