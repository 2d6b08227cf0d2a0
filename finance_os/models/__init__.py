"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from finance_os.models.base import Base
from finance_os.models.enums import (
    AccountType,
    EntryKind,
    BillingCycle,
)
from finance_os.models.account import Account
from finance_os.models.category import IncomeType, ExpenseType
from finance_os.models.journal import Income, Expense, Transfer
from finance_os.models.subscription import Subscription

__all__ = [
    "Base",
    "AccountType",
    "EntryKind",
    "BillingCycle",
    "Account",
    "IncomeType",
    "ExpenseType",
    "Income",
    "Expense",
    "Transfer",
    "Subscription",
]
