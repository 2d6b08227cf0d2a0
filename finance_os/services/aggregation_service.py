"""
Aggregation service: read-only views over the journal.

Nothing here writes. Every method takes an optional `today` so
"the current month" can be pinned in tests. Amounts come back
quantized to cents and every percentage goes through percent(),
which rounds half-up to two places.
"""

import datetime as dt
import uuid
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from finance_os.config import get_settings
from finance_os.errors import ValidationError
from finance_os.models.category import IncomeType, ExpenseType
from finance_os.models.enums import EntryKind
from finance_os.models.journal import Income, Expense, Transfer
from finance_os.schemas.dashboard import (
    BudgetStatus,
    CategoryAmount,
    CategoryShare,
    EntryCounts,
    MonthlySummary,
    MonthOverview,
    MonthProgress,
    Overview,
    RecentTransaction,
    TargetProgress,
    TrendPoint,
    Trends,
)
from finance_os.services.account_service import AccountService

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def money(value) -> Decimal:
    if value is None:
        return ZERO.quantize(CENT)
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def percent(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole as a percentage; 0 when whole is 0."""
    if not whole:
        return ZERO.quantize(CENT)
    return (Decimal(part) / Decimal(whole) * HUNDRED).quantize(
        CENT, rounding=ROUND_HALF_UP
    )


def month_bounds(year: int, month: int) -> tuple[dt.date, dt.date]:
    """First day of the month and first day of the next one."""
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12", {"month": month})
    start = dt.date(year, month, 1)
    if month == 12:
        return start, dt.date(year + 1, 1, 1)
    return start, dt.date(year, month + 1, 1)


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


# kind -> (entry model, category model, entry fk column name)
_KINDS = {
    EntryKind.INCOME: (Income, IncomeType, "income_type_id"),
    EntryKind.EXPENSE: (Expense, ExpenseType, "expense_type_id"),
}


class AggregationService:

    def __init__(self, db: Session):
        self.db = db

    # --- building blocks ---

    def _month_total(self, model, owner_id, year, month) -> Decimal:
        start, end = month_bounds(year, month)
        value = self.db.execute(
            select(func.coalesce(func.sum(model.amount), 0)).where(
                model.owner_id == owner_id,
                model.date >= start,
                model.date < end,
            )
        ).scalar()
        return money(value)

    def _month_count(self, model, owner_id, year, month) -> int:
        start, end = month_bounds(year, month)
        return self.db.execute(
            select(func.count(model.id)).where(
                model.owner_id == owner_id,
                model.date >= start,
                model.date < end,
            )
        ).scalar()

    def _by_category(self, kind: EntryKind, owner_id, year, month):
        """Rows of (category, amount) for categories with entries that month."""
        entry_model, category_model, fk = _KINDS[kind]
        start, end = month_bounds(year, month)
        rows = self.db.execute(
            select(category_model, func.sum(entry_model.amount))
            .join(entry_model, getattr(entry_model, fk) == category_model.id)
            .where(
                entry_model.owner_id == owner_id,
                entry_model.date >= start,
                entry_model.date < end,
            )
            .group_by(category_model.id)
            .order_by(func.sum(entry_model.amount).desc(), category_model.name)
        ).all()
        return [(category, money(amount)) for category, amount in rows]

    def _totals_by_category(self, kind: EntryKind, owner_id, year, month) -> dict:
        return {
            category.id: amount
            for category, amount in self._by_category(kind, owner_id, year, month)
        }

    def _goal_total(self, category_model, owner_id) -> Decimal:
        column = (
            category_model.target_amount
            if category_model is IncomeType
            else category_model.budget_amount
        )
        value = self.db.execute(
            select(func.coalesce(func.sum(column), 0)).where(
                category_model.owner_id == owner_id,
                category_model.is_active.is_(True),
            )
        ).scalar()
        return money(value)

    # --- summaries ---

    def monthly_summary(
        self, owner_id: uuid.UUID, year: int, month: int, kind: EntryKind
    ) -> MonthlySummary:
        """Total for one kind in one month, broken down by category."""
        if kind not in _KINDS:
            raise ValidationError(
                "Summary kind must be income or expense", {"kind": str(kind)}
            )

        by_type = []
        total = ZERO
        for category, amount in self._by_category(kind, owner_id, year, month):
            goal = category.limit_amount
            by_type.append(CategoryAmount(
                type_id=category.id,
                type_name=category.name,
                amount=amount,
                target_or_budget=money(goal) if goal is not None else None,
                percentage=percent(amount, goal) if goal is not None else None,
            ))
            total += amount

        return MonthlySummary(
            year=year,
            month=month,
            kind=kind,
            total_amount=money(total),
            by_type=by_type,
        )

    def budget_status(
        self, owner_id: uuid.UUID, today: dt.date | None = None
    ) -> list[BudgetStatus]:
        """
        This month's spending against each budgeted expense type.

        The percentage is capped at 100; is_over_budget tells the
        rest of the story.
        """
        today = today or dt.date.today()
        spent_by_type = self._totals_by_category(
            EntryKind.EXPENSE, owner_id, today.year, today.month
        )

        categories = self.db.execute(
            select(ExpenseType).where(
                ExpenseType.owner_id == owner_id,
                ExpenseType.is_active.is_(True),
                ExpenseType.budget_amount.is_not(None),
            ).order_by(ExpenseType.name)
        ).scalars().all()

        statuses = []
        for category in categories:
            budget = money(category.budget_amount)
            spent = spent_by_type.get(category.id, money(ZERO))
            statuses.append(BudgetStatus(
                type_id=category.id,
                type_name=category.name,
                budget=budget,
                spent=spent,
                remaining=max(budget - spent, ZERO),
                percentage=min(percent(spent, budget), HUNDRED),
                is_over_budget=spent > budget,
            ))
        return statuses

    def target_progress(
        self, owner_id: uuid.UUID, today: dt.date | None = None
    ) -> list[TargetProgress]:
        """This month's earnings against each income type's target."""
        today = today or dt.date.today()
        earned_by_type = self._totals_by_category(
            EntryKind.INCOME, owner_id, today.year, today.month
        )

        categories = self.db.execute(
            select(IncomeType).where(
                IncomeType.owner_id == owner_id,
                IncomeType.is_active.is_(True),
                IncomeType.target_amount.is_not(None),
            ).order_by(IncomeType.name)
        ).scalars().all()

        progress = []
        for category in categories:
            target = money(category.target_amount)
            achieved = earned_by_type.get(category.id, money(ZERO))
            progress.append(TargetProgress(
                type_id=category.id,
                type_name=category.name,
                target=target,
                achieved=achieved,
                remaining=max(target - achieved, ZERO),
                percentage=min(percent(achieved, target), HUNDRED),
                is_achieved=achieved >= target,
            ))
        return progress

    def _distribution(self, kind, owner_id, year, month) -> list[CategoryShare]:
        rows = self._by_category(kind, owner_id, year, month)
        total = sum((amount for _, amount in rows), ZERO)
        return [
            CategoryShare(
                type_id=category.id,
                type_name=category.name,
                total=amount,
                percentage=percent(amount, total),
            )
            for category, amount in rows
        ]

    def trends(
        self,
        owner_id: uuid.UUID,
        months: int | None = None,
        today: dt.date | None = None,
    ) -> Trends:
        """
        Income, expenses and savings for the last `months` calendar
        months (current one included), oldest first, plus how this
        month's income and spending split across categories.
        """
        if months is None:
            months = get_settings().TRENDS_MONTHS
        if months < 1:
            raise ValidationError("Months must be at least 1", {"months": months})
        today = today or dt.date.today()

        monthly_data = []
        for offset in range(months - 1, -1, -1):
            year, month = shift_month(today.year, today.month, -offset)
            income = self._month_total(Income, owner_id, year, month)
            expenses = self._month_total(Expense, owner_id, year, month)
            monthly_data.append(TrendPoint(
                year_month=f"{year:04d}-{month:02d}",
                income=income,
                expenses=expenses,
                savings=income - expenses,
            ))

        return Trends(
            monthly_data=monthly_data,
            category_spending=self._distribution(
                EntryKind.EXPENSE, owner_id, today.year, today.month
            ),
            income_distribution=self._distribution(
                EntryKind.INCOME, owner_id, today.year, today.month
            ),
        )

    def recent_transactions(
        self, owner_id: uuid.UUID, limit: int
    ) -> list[RecentTransaction]:
        """
        The `limit` latest entries of any kind, newest date first.

        Each kind contributes at most `limit` rows, which is enough
        to fill the merged list.
        """

        def latest(model):
            return self.db.execute(
                select(model)
                .where(model.owner_id == owner_id)
                .order_by(model.date.desc(), model.created_at.desc(), model.id.desc())
                .limit(limit)
            ).scalars().all()

        merged = []
        for income in latest(Income):
            merged.append((income, RecentTransaction(
                id=income.id,
                kind=EntryKind.INCOME,
                amount=income.amount,
                description=income.description,
                date=income.date,
                account_name=income.account.name,
                category_name=income.income_type.name,
            )))
        for expense in latest(Expense):
            merged.append((expense, RecentTransaction(
                id=expense.id,
                kind=EntryKind.EXPENSE,
                amount=expense.amount,
                description=expense.description,
                date=expense.date,
                account_name=expense.account.name,
                category_name=expense.expense_type.name,
            )))
        for transfer in latest(Transfer):
            merged.append((transfer, RecentTransaction(
                id=transfer.id,
                kind=EntryKind.TRANSFER,
                amount=transfer.amount,
                description=transfer.description,
                date=transfer.date,
                account_name=(
                    f"{transfer.from_account.name} → {transfer.to_account.name}"
                ),
                category_name=None,
            )))

        merged.sort(key=lambda pair: (pair[0].date, pair[0].created_at), reverse=True)
        return [item for _, item in merged[:limit]]

    def overview(
        self,
        owner_id: uuid.UUID,
        limit: int | None = None,
        today: dt.date | None = None,
    ) -> Overview:
        """Dashboard front page."""
        if limit is None:
            limit = get_settings().RECENT_TRANSACTIONS_LIMIT
        if limit < 1:
            raise ValidationError("Limit must be at least 1", {"limit": limit})
        today = today or dt.date.today()

        accounts = AccountService(self.db).get_summary(owner_id)
        income = self._month_total(Income, owner_id, today.year, today.month)
        expenses = self._month_total(Expense, owner_id, today.year, today.month)
        income_goal = self._goal_total(IncomeType, owner_id)
        expense_goal = self._goal_total(ExpenseType, owner_id)

        return Overview(
            total_balance=accounts.total_balance,
            accounts=accounts,
            current_month_income=MonthProgress(
                total=income,
                goal=income_goal,
                percentage=percent(income, income_goal),
            ),
            current_month_expenses=MonthProgress(
                total=expenses,
                goal=expense_goal,
                percentage=percent(expenses, expense_goal),
            ),
            net_savings=income - expenses,
            recent_transactions=self.recent_transactions(owner_id, limit),
        )

    def month_overview(
        self, owner_id: uuid.UUID, year: int, month: int
    ) -> MonthOverview:
        income = self.monthly_summary(owner_id, year, month, EntryKind.INCOME)
        expenses = self.monthly_summary(owner_id, year, month, EntryKind.EXPENSE)
        return MonthOverview(
            year=year,
            month=month,
            income=income,
            expenses=expenses,
            net_savings=income.total_amount - expenses.total_amount,
            transaction_counts=EntryCounts(
                incomes=self._month_count(Income, owner_id, year, month),
                expenses=self._month_count(Expense, owner_id, year, month),
                transfers=self._month_count(Transfer, owner_id, year, month),
            ),
        )
