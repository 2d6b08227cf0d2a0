"""
Expense service.

Recording an expense debits its account and is refused when the
account cannot cover it. Deleting one refunds the account.
"""

import logging
import uuid

from finance_os.models.category import ExpenseType
from finance_os.models.journal import Expense
from finance_os.schemas.journal import ExpenseCreate, ExpenseUpdate, JournalFilters
from finance_os.services.balance_engine import credit, debit
from finance_os.services.journal_service import JournalService

logger = logging.getLogger(__name__)


class ExpenseService(JournalService):
    model = Expense
    resource = "Expense"

    def _filter(self, query, filters: JournalFilters):
        query = super()._filter(query, filters)
        if filters.account_id is not None:
            query = query.where(Expense.account_id == filters.account_id)
        if filters.category_id is not None:
            query = query.where(Expense.expense_type_id == filters.category_id)
        return query

    def create_expense(self, owner_id: uuid.UUID, request: ExpenseCreate) -> Expense:
        """
        Record an expense and debit its account.

        Raises InsufficientBalanceError when the balance is below
        the amount; nothing is written in that case.
        """
        self.guard.require_positive(request.amount)
        account = self.guard.require_account(owner_id, request.account_id)
        expense_type = self.guard.require_category(
            owner_id, ExpenseType, request.expense_type_id
        )
        self.guard.require_funds(account, request.amount)

        with self.engine.mutation():
            self.engine.apply([debit(account.id, request.amount)])
            expense = Expense(
                owner_id=owner_id,
                account=account,
                expense_type=expense_type,
                amount=request.amount,
                date=request.date,
                description=request.description,
            )
            self.db.add(expense)

        logger.info(
            "Recorded expense %s of %s from account %s",
            expense.id, expense.amount, account.id,
        )
        return expense

    def get_expense(self, owner_id: uuid.UUID, expense_id: int) -> Expense:
        return self.get(owner_id, expense_id)

    def update_expense(
        self, owner_id: uuid.UUID, expense_id: int, request: ExpenseUpdate
    ) -> Expense:
        """
        Amend an expense.

        On the same account only the difference moves. An increase
        counts the old amount as available, since the amended
        expense gives it back first. Moving the expense refunds the
        old account in full and charges the new one in full.
        """
        expense = self.get(owner_id, expense_id)
        changes = request.model_dump(exclude_unset=True)

        old_amount = expense.amount
        new_amount = old_amount
        if changes.get("amount") is not None:
            self.guard.require_positive(changes["amount"])
            new_amount = changes["amount"]

        account = expense.account
        deltas = []
        new_account_id = changes.get("account_id")
        if new_account_id is not None and new_account_id != expense.account_id:
            account = self.guard.require_account(owner_id, new_account_id)
            self.guard.require_funds(account, new_amount)
            deltas = [
                credit(expense.account_id, old_amount),
                debit(account.id, new_amount),
            ]
        elif new_amount > old_amount:
            current = self.guard.require_account(owner_id, expense.account_id)
            self.guard.require_funds(current, new_amount, released=old_amount)
            deltas = [
                debit(
                    current.id,
                    new_amount - old_amount,
                    required=new_amount,
                    released=old_amount,
                )
            ]
        elif new_amount < old_amount:
            deltas = [credit(expense.account_id, old_amount - new_amount)]

        expense_type = expense.expense_type
        new_type_id = changes.get("expense_type_id")
        if new_type_id is not None and new_type_id != expense.expense_type_id:
            expense_type = self.guard.require_category(
                owner_id, ExpenseType, new_type_id
            )

        with self.engine.mutation():
            self.engine.apply(deltas)
            expense.account = account
            expense.expense_type = expense_type
            expense.amount = new_amount
            if changes.get("date") is not None:
                expense.date = changes["date"]
            if "description" in changes:
                expense.description = changes["description"]

        logger.info("Updated expense %s", expense.id)
        return expense

    def delete_expense(self, owner_id: uuid.UUID, expense_id: int) -> None:
        """Delete an expense and refund its account."""
        expense = self.get(owner_id, expense_id)
        account_id = expense.account_id

        with self.engine.mutation():
            self.engine.apply([credit(account_id, expense.amount)])
            self.db.delete(expense)

        logger.info("Deleted expense %s, refunded account %s", expense_id, account_id)
