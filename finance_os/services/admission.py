"""
Admission guard: fast pre-checks ahead of journal mutations.

The guard answers "does this request stand a chance?" with a
precise error before any write happens: the account exists,
belongs to the caller, is active, and currently holds enough
money. Its balance read is a point-in-time snapshot and may be
stale by the time the write runs. The BalanceEngine re-checks
at write time and is the one that actually prevents overdraft.
"""

import uuid
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from finance_os.errors import (
    NotFoundError,
    ValidationError,
    InsufficientBalanceError,
)
from finance_os.models.account import Account
from finance_os.models.category import IncomeType, ExpenseType

ZERO = Decimal("0")


class AdmissionGuard:

    def __init__(self, db: Session):
        self.db = db

    def find_account(self, owner_id: uuid.UUID, account_id: int) -> Account:
        """Owned account regardless of its active flag."""
        account = self.db.execute(
            select(Account).where(
                Account.id == account_id,
                Account.owner_id == owner_id,
            )
        ).scalar_one_or_none()
        if not account:
            raise NotFoundError("Account", account_id)
        return account

    def require_account(self, owner_id: uuid.UUID, account_id: int) -> Account:
        """Owned and active account, or NotFound / ValidationError."""
        account = self.find_account(owner_id, account_id)
        if not account.is_active:
            raise ValidationError(
                f"Account {account_id} is inactive",
                {"account_id": account_id},
            )
        return account

    def require_category(
        self,
        owner_id: uuid.UUID,
        model: type[IncomeType] | type[ExpenseType],
        category_id: int,
    ) -> IncomeType | ExpenseType:
        """
        Owned and active category.

        A missing category is a dangling reference on the entry
        being written, so it is a ValidationError rather than
        NotFound.
        """
        category = self.db.execute(
            select(model).where(
                model.id == category_id,
                model.owner_id == owner_id,
            )
        ).scalar_one_or_none()
        if not category:
            raise ValidationError(
                f"{model.label} not found",
                {"category_id": category_id},
            )
        if not category.is_active:
            raise ValidationError(
                f"{model.label} {category_id} is inactive",
                {"category_id": category_id},
            )
        return category

    @staticmethod
    def require_positive(amount: Decimal) -> None:
        if amount is None or amount <= ZERO:
            raise ValidationError("Amount must be a positive number")

    @staticmethod
    def require_funds(
        account: Account,
        required: Decimal,
        released: Decimal = ZERO,
    ) -> None:
        """
        Snapshot sufficiency check.

        `released` is money the same operation returns to this
        account before debiting it (an amended expense's old
        amount).
        """
        available = account.balance + released
        if available < required:
            raise InsufficientBalanceError(account.id, required, available)
