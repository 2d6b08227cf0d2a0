"""
Income service.

Recording an income credits its account. Amending or deleting
one reverses part or all of that credit, which is a debit and
can therefore be refused when the money has already left the
account.
"""

import logging
import uuid

from finance_os.models.category import IncomeType
from finance_os.models.journal import Income
from finance_os.schemas.journal import IncomeCreate, IncomeUpdate, JournalFilters
from finance_os.services.balance_engine import credit, debit
from finance_os.services.journal_service import JournalService

logger = logging.getLogger(__name__)


class IncomeService(JournalService):
    model = Income
    resource = "Income"

    def _filter(self, query, filters: JournalFilters):
        query = super()._filter(query, filters)
        if filters.account_id is not None:
            query = query.where(Income.account_id == filters.account_id)
        if filters.category_id is not None:
            query = query.where(Income.income_type_id == filters.category_id)
        return query

    def create_income(self, owner_id: uuid.UUID, request: IncomeCreate) -> Income:
        """Record an income and credit its account."""
        self.guard.require_positive(request.amount)
        account = self.guard.require_account(owner_id, request.account_id)
        income_type = self.guard.require_category(
            owner_id, IncomeType, request.income_type_id
        )

        with self.engine.mutation():
            self.engine.apply([credit(account.id, request.amount)])
            income = Income(
                owner_id=owner_id,
                account=account,
                income_type=income_type,
                amount=request.amount,
                date=request.date,
                description=request.description,
            )
            self.db.add(income)

        logger.info(
            "Recorded income %s of %s into account %s",
            income.id, income.amount, account.id,
        )
        return income

    def get_income(self, owner_id: uuid.UUID, income_id: int) -> Income:
        return self.get(owner_id, income_id)

    def update_income(
        self, owner_id: uuid.UUID, income_id: int, request: IncomeUpdate
    ) -> Income:
        """
        Amend an income.

        Moving it to another account debits the old account by the
        old amount and credits the new one with the new amount.
        Lowering it debits the difference. Both debits are refused
        if the account no longer holds that money.
        """
        income = self.get(owner_id, income_id)
        changes = request.model_dump(exclude_unset=True)

        new_amount = income.amount
        if changes.get("amount") is not None:
            self.guard.require_positive(changes["amount"])
            new_amount = changes["amount"]

        account = income.account
        deltas = []
        new_account_id = changes.get("account_id")
        if new_account_id is not None and new_account_id != income.account_id:
            account = self.guard.require_account(owner_id, new_account_id)
            old_account = self.guard.find_account(owner_id, income.account_id)
            self.guard.require_funds(old_account, income.amount)
            deltas = [
                debit(old_account.id, income.amount),
                credit(account.id, new_amount),
            ]
        elif new_amount < income.amount:
            reduction = income.amount - new_amount
            current = self.guard.find_account(owner_id, income.account_id)
            self.guard.require_funds(current, reduction)
            deltas = [debit(current.id, reduction)]
        elif new_amount > income.amount:
            deltas = [credit(income.account_id, new_amount - income.amount)]

        income_type = income.income_type
        new_type_id = changes.get("income_type_id")
        if new_type_id is not None and new_type_id != income.income_type_id:
            income_type = self.guard.require_category(owner_id, IncomeType, new_type_id)

        with self.engine.mutation():
            self.engine.apply(deltas)
            income.account = account
            income.income_type = income_type
            income.amount = new_amount
            if changes.get("date") is not None:
                income.date = changes["date"]
            if "description" in changes:
                income.description = changes["description"]

        logger.info("Updated income %s", income.id)
        return income

    def delete_income(self, owner_id: uuid.UUID, income_id: int) -> None:
        """Delete an income and take its amount back out of the account."""
        income = self.get(owner_id, income_id)
        account = self.guard.find_account(owner_id, income.account_id)
        self.guard.require_funds(account, income.amount)

        with self.engine.mutation():
            self.engine.apply([debit(account.id, income.amount)])
            self.db.delete(income)

        logger.info("Deleted income %s from account %s", income_id, account.id)
