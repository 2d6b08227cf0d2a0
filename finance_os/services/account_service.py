"""
Account service: the account store.

Accounts are created with an opening balance and afterwards
only the BalanceEngine changes their balance. This service
handles everything else: naming, activation, lookups, the
per-type summary, and reconciliation against the journal.
"""

import logging
import uuid
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from finance_os.errors import NotFoundError, ValidationError
from finance_os.models.account import Account
from finance_os.models.enums import AccountType
from finance_os.models.journal import Income, Expense, Transfer
from finance_os.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountSummary,
    AccountTypeSummary,
    ReconciliationReport,
)

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

ZERO = Decimal("0")


class AccountService:

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, owner_id: uuid.UUID, request: AccountCreate) -> Account:
        """
        Open a new account.

        The initial balance is recorded as the opening balance so
        the account still reconciles against its journal.
        """
        if request.balance < 0:
            raise ValidationError("Balance cannot be negative")

        account = Account(
            owner_id=owner_id,
            name=request.name,
            account_type=request.account_type,
            balance=request.balance,
            opening_balance=request.balance,
        )
        self.db.add(account)
        self.db.flush()
        logger.info(
            "Opened %s account %s with balance %s",
            account.account_type.value, account.id, account.balance,
        )
        return account

    def get_account(self, owner_id: uuid.UUID, account_id: int) -> Account:
        """Get an owned account by ID."""
        account = self.db.execute(
            select(Account).where(
                Account.id == account_id,
                Account.owner_id == owner_id,
            )
        ).scalar_one_or_none()
        if not account:
            raise NotFoundError("Account", account_id)
        return account

    def list_accounts(
        self,
        owner_id: uuid.UUID,
        account_type: AccountType | None = None,
        is_active: bool | None = None,
    ) -> list[Account]:
        """Owned accounts, newest first."""
        query = select(Account).where(Account.owner_id == owner_id)
        if account_type is not None:
            query = query.where(Account.account_type == account_type)
        if is_active is not None:
            query = query.where(Account.is_active == is_active)

        accounts = self.db.execute(
            query.order_by(Account.created_at.desc(), Account.id.desc())
        ).scalars().all()
        return list(accounts)

    def update_account(
        self, owner_id: uuid.UUID, account_id: int, request: AccountUpdate
    ) -> Account:
        """Rename and/or (de)activate. Never touches the balance."""
        account = self.get_account(owner_id, account_id)

        if request.name is not None:
            account.name = request.name
        if request.is_active is not None:
            account.is_active = request.is_active

        self.db.flush()
        return account

    def deactivate_account(self, owner_id: uuid.UUID, account_id: int) -> Account:
        """
        Soft-delete an account.

        The balance and every journal entry referencing the
        account stay as they are.
        """
        account = self.get_account(owner_id, account_id)
        account.is_active = False
        self.db.flush()
        logger.info("Deactivated account %s", account_id)
        return account

    def get_balance(self, owner_id: uuid.UUID, account_id: int) -> Decimal:
        account = self.get_account(owner_id, account_id)
        return account.balance

    def get_summary(self, owner_id: uuid.UUID) -> AccountSummary:
        """
        Balance and count per account type, active accounts only.

        Every type is listed, with zeros when the owner has no
        account of that type.
        """
        rows = self.db.execute(
            select(
                Account.account_type,
                func.count(Account.id),
                func.coalesce(func.sum(Account.balance), 0),
            )
            .where(Account.owner_id == owner_id, Account.is_active.is_(True))
            .group_by(Account.account_type)
        ).all()

        by_type = {
            account_type: (count, Decimal(str(total)))
            for account_type, count, total in rows
        }

        accounts_by_type = []
        total_balance = ZERO
        for account_type in AccountType:
            count, total = by_type.get(account_type, (0, ZERO))
            accounts_by_type.append(AccountTypeSummary(
                account_type=account_type,
                count=count,
                total_balance=total,
            ))
            total_balance += total

        return AccountSummary(
            total_balance=total_balance,
            accounts_by_type=accounts_by_type,
        )

    def reconcile(self, owner_id: uuid.UUID, account_id: int) -> ReconciliationReport:
        """
        Compare the stored balance with what the journal explains.

        expected = opening balance + incomes - expenses
                   - transfers out + transfers in
        """
        account = self.get_account(owner_id, account_id)

        def total(column, *criteria) -> Decimal:
            value = self.db.execute(
                select(func.coalesce(func.sum(column), 0)).where(*criteria)
            ).scalar()
            return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)

        incomes = total(Income.amount, Income.account_id == account_id)
        expenses = total(Expense.amount, Expense.account_id == account_id)
        transfers_out = total(Transfer.amount, Transfer.from_account_id == account_id)
        transfers_in = total(Transfer.amount, Transfer.to_account_id == account_id)

        expected = (
            account.opening_balance + incomes - expenses
            - transfers_out + transfers_in
        )
        difference = account.balance - expected

        if difference != 0:
            logger.warning(
                "Account %s is out of balance by %s", account_id, difference
            )

        return ReconciliationReport(
            account_id=account.id,
            balance=account.balance,
            expected=expected,
            difference=difference,
            is_consistent=difference == 0,
        )
