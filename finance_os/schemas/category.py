"""
Pydantic schemas for income and expense types.

Both kinds share one shape; only the name of the monthly
goal differs (target for income, budget for expenses).
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class IncomeTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    target_amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)


class IncomeTypeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    target_amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    is_active: bool | None = None


class IncomeTypeResponse(BaseModel):
    id: int
    name: str
    description: str | None
    target_amount: Decimal | None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ExpenseTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    budget_amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)


class ExpenseTypeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    budget_amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    is_active: bool | None = None


class ExpenseTypeResponse(BaseModel):
    id: int
    name: str
    description: str | None
    budget_amount: Decimal | None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
