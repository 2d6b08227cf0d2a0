"""
Pydantic schemas for aggregation results.

These are read models: the AggregationService builds them
directly, nothing is persisted.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel

from finance_os.models.enums import EntryKind
from finance_os.schemas.account import AccountSummary


class CategoryAmount(BaseModel):
    """One category's total for a month, with its goal if it has one."""
    type_id: int
    type_name: str
    amount: Decimal
    target_or_budget: Decimal | None
    percentage: Decimal | None


class MonthlySummary(BaseModel):
    year: int
    month: int
    kind: EntryKind
    total_amount: Decimal
    by_type: list[CategoryAmount]


class BudgetStatus(BaseModel):
    type_id: int
    type_name: str
    budget: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    is_over_budget: bool


class TargetProgress(BaseModel):
    type_id: int
    type_name: str
    target: Decimal
    achieved: Decimal
    remaining: Decimal
    percentage: Decimal
    is_achieved: bool


class TrendPoint(BaseModel):
    year_month: str
    income: Decimal
    expenses: Decimal
    savings: Decimal


class CategoryShare(BaseModel):
    type_id: int
    type_name: str
    total: Decimal
    percentage: Decimal


class Trends(BaseModel):
    monthly_data: list[TrendPoint]
    category_spending: list[CategoryShare]
    income_distribution: list[CategoryShare]


class MonthProgress(BaseModel):
    """Current-month total against the sum of category goals."""
    total: Decimal
    goal: Decimal
    percentage: Decimal


class RecentTransaction(BaseModel):
    id: int
    kind: EntryKind
    amount: Decimal
    description: str | None
    date: dt.date
    account_name: str
    category_name: str | None


class Overview(BaseModel):
    total_balance: Decimal
    accounts: AccountSummary
    current_month_income: MonthProgress
    current_month_expenses: MonthProgress
    net_savings: Decimal
    recent_transactions: list[RecentTransaction]


class EntryCounts(BaseModel):
    incomes: int
    expenses: int
    transfers: int


class MonthOverview(BaseModel):
    year: int
    month: int
    income: MonthlySummary
    expenses: MonthlySummary
    net_savings: Decimal
    transaction_counts: EntryCounts
