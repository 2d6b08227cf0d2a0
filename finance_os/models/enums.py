"""
Shared enumerations for database models.

Python enums mapped to database enums ensure that only
valid values can be stored. An unknown account type or
billing cycle is rejected by the database, not just by
request validation.
"""

import enum


class AccountType(str, enum.Enum):
    """What a money account is used for."""
    SAVING = "saving"
    SPENDING = "spending"
    WALLET = "wallet"
    INVESTMENT = "investment"
    BUSINESS = "business"


class EntryKind(str, enum.Enum):
    """The three kinds of journal entry."""
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class BillingCycle(str, enum.Enum):
    """How often a subscription renews."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
