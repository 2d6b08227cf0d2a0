"""
Tests for the AggregationService.

Every test pins `today` so month boundaries are deterministic.
"""

import datetime as dt
from decimal import Decimal

import pytest

from finance_os.config import get_settings
from finance_os.errors import ValidationError
from finance_os.models.enums import AccountType, EntryKind
from finance_os.schemas.account import AccountCreate
from finance_os.schemas.category import IncomeTypeCreate, ExpenseTypeCreate
from finance_os.schemas.journal import IncomeCreate, ExpenseCreate, TransferCreate
from finance_os.services.account_service import AccountService
from finance_os.services.aggregation_service import AggregationService, percent
from finance_os.services.category_service import IncomeTypeService, ExpenseTypeService
from finance_os.services.income_service import IncomeService
from finance_os.services.expense_service import ExpenseService
from finance_os.services.transfer_service import TransferService

TODAY = dt.date(2024, 3, 15)


class Ledger:
    """Small builder for journal fixtures."""

    def __init__(self, db, owner_id):
        self.db = db
        self.owner_id = owner_id

    def account(self, name, balance="0"):
        account = AccountService(self.db).create_account(self.owner_id, AccountCreate(
            name=name, account_type=AccountType.SPENDING, balance=Decimal(balance),
        ))
        self.db.commit()
        return account

    def income_type(self, name, target=None):
        category = IncomeTypeService(self.db).create(self.owner_id, IncomeTypeCreate(
            name=name, target_amount=Decimal(target) if target else None,
        ))
        self.db.commit()
        return category

    def expense_type(self, name, budget=None):
        category = ExpenseTypeService(self.db).create(self.owner_id, ExpenseTypeCreate(
            name=name, budget_amount=Decimal(budget) if budget else None,
        ))
        self.db.commit()
        return category

    def income(self, account, category, amount, date=TODAY):
        income = IncomeService(self.db).create_income(self.owner_id, IncomeCreate(
            account_id=account.id, income_type_id=category.id,
            amount=Decimal(amount), date=date,
        ))
        self.db.commit()
        return income

    def expense(self, account, category, amount, date=TODAY):
        expense = ExpenseService(self.db).create_expense(self.owner_id, ExpenseCreate(
            account_id=account.id, expense_type_id=category.id,
            amount=Decimal(amount), date=date,
        ))
        self.db.commit()
        return expense

    def transfer(self, source, destination, amount, date=TODAY):
        transfer = TransferService(self.db).create_transfer(self.owner_id, TransferCreate(
            from_account_id=source.id, to_account_id=destination.id,
            amount=Decimal(amount), date=date,
        ))
        self.db.commit()
        return transfer


@pytest.fixture
def ledger(db_session, owner_id):
    return Ledger(db_session, owner_id)


class TestPercent:

    def test_rounds_half_up(self):
        assert percent(Decimal("1"), Decimal("8")) == Decimal("12.50")
        assert percent(Decimal("1"), Decimal("3")) == Decimal("33.33")
        assert percent(Decimal("2"), Decimal("3")) == Decimal("66.67")
        assert percent(Decimal("0.125"), Decimal("1")) == Decimal("12.50")

    def test_zero_whole_is_zero(self):
        assert percent(Decimal("5"), Decimal("0")) == Decimal("0.00")


class TestBudgetStatus:

    def test_overspent_budget_is_capped(self, db_session, owner_id, ledger):
        account = ledger.account("Main", "1000")
        food = ledger.expense_type("Food", budget="80")
        ledger.expense(account, food, "30")
        ledger.expense(account, food, "70")

        [status] = AggregationService(db_session).budget_status(owner_id, today=TODAY)

        assert status.spent == Decimal("100")
        assert status.remaining == Decimal("0")
        assert status.is_over_budget is True
        assert status.percentage == Decimal("100")

    def test_only_current_month_counts(self, db_session, owner_id, ledger):
        account = ledger.account("Main", "1000")
        food = ledger.expense_type("Food", budget="200")
        ledger.expense(account, food, "50")
        ledger.expense(account, food, "500", date=dt.date(2024, 2, 28))

        [status] = AggregationService(db_session).budget_status(owner_id, today=TODAY)

        assert status.spent == Decimal("50")
        assert status.remaining == Decimal("150")
        assert status.percentage == Decimal("25.00")
        assert status.is_over_budget is False

    def test_categories_without_budget_are_skipped(self, db_session, owner_id, ledger):
        ledger.expense_type("Food", budget="100")
        ledger.expense_type("Misc")

        statuses = AggregationService(db_session).budget_status(owner_id, today=TODAY)

        assert [s.type_name for s in statuses] == ["Food"]
        assert statuses[0].spent == Decimal("0")


class TestTargetProgress:

    def test_target_achieved(self, db_session, owner_id, ledger):
        account = ledger.account("Main")
        salary = ledger.income_type("Salary", target="3000")
        ledger.income(account, salary, "3200")

        [progress] = AggregationService(db_session).target_progress(owner_id, today=TODAY)

        assert progress.achieved == Decimal("3200")
        assert progress.remaining == Decimal("0")
        assert progress.percentage == Decimal("100")
        assert progress.is_achieved is True

    def test_target_partially_reached(self, db_session, owner_id, ledger):
        account = ledger.account("Main")
        salary = ledger.income_type("Salary", target="3000")
        ledger.income(account, salary, "1000")

        [progress] = AggregationService(db_session).target_progress(owner_id, today=TODAY)

        assert progress.remaining == Decimal("2000")
        assert progress.percentage == Decimal("33.33")
        assert progress.is_achieved is False


class TestMonthlySummary:

    def test_expense_summary_by_category(self, db_session, owner_id, ledger):
        account = ledger.account("Main", "1000")
        food = ledger.expense_type("Food", budget="200")
        rent = ledger.expense_type("Rent")
        ledger.expense(account, food, "50")
        ledger.expense(account, rent, "400")

        summary = AggregationService(db_session).monthly_summary(
            owner_id, 2024, 3, EntryKind.EXPENSE
        )

        assert summary.total_amount == Decimal("450")
        assert [t.type_name for t in summary.by_type] == ["Rent", "Food"]
        food_row = summary.by_type[1]
        assert food_row.target_or_budget == Decimal("200")
        assert food_row.percentage == Decimal("25.00")
        assert summary.by_type[0].percentage is None

    def test_transfer_kind_rejected(self, db_session, owner_id):
        with pytest.raises(ValidationError):
            AggregationService(db_session).monthly_summary(
                owner_id, 2024, 3, EntryKind.TRANSFER
            )

    def test_invalid_month_rejected(self, db_session, owner_id):
        with pytest.raises(ValidationError, match="Month"):
            AggregationService(db_session).monthly_summary(
                owner_id, 2024, 13, EntryKind.INCOME
            )


class TestTrends:

    def test_months_oldest_first_with_savings(self, db_session, owner_id, ledger):
        account = ledger.account("Main", "1000")
        salary = ledger.income_type("Salary")
        food = ledger.expense_type("Food")
        ledger.income(account, salary, "100", date=dt.date(2024, 1, 10))
        ledger.expense(account, food, "40", date=dt.date(2024, 1, 12))
        ledger.income(account, salary, "200", date=TODAY)

        trends = AggregationService(db_session).trends(owner_id, months=3, today=TODAY)

        assert [p.year_month for p in trends.monthly_data] == ["2024-01", "2024-02", "2024-03"]
        january, february, march = trends.monthly_data
        assert january.savings == Decimal("60")
        assert february.income == Decimal("0")
        assert march.income == Decimal("200")

    def test_trends_cross_year_boundary(self, db_session, owner_id):
        trends = AggregationService(db_session).trends(
            owner_id, months=3, today=dt.date(2024, 1, 5)
        )
        assert [p.year_month for p in trends.monthly_data] == ["2023-11", "2023-12", "2024-01"]

    def test_zero_months_rejected(self, db_session, owner_id):
        with pytest.raises(ValidationError, match="Months"):
            AggregationService(db_session).trends(owner_id, months=0, today=TODAY)

    def test_default_months_from_settings(self, db_session, owner_id):
        trends = AggregationService(db_session).trends(owner_id, today=TODAY)
        assert len(trends.monthly_data) == get_settings().TRENDS_MONTHS

    def test_category_distribution(self, db_session, owner_id, ledger):
        account = ledger.account("Main", "1000")
        food = ledger.expense_type("Food")
        rent = ledger.expense_type("Rent")
        ledger.expense(account, food, "25")
        ledger.expense(account, rent, "75")

        trends = AggregationService(db_session).trends(owner_id, months=1, today=TODAY)
        shares = {s.type_name: s.percentage for s in trends.category_spending}

        assert shares == {"Rent": Decimal("75.00"), "Food": Decimal("25.00")}
        assert trends.income_distribution == []


class TestOverview:

    def test_overview_totals(self, db_session, owner_id, ledger):
        account = ledger.account("Main", "1000")
        salary = ledger.income_type("Salary", target="1000")
        food = ledger.expense_type("Food", budget="400")
        ledger.income(account, salary, "500")
        ledger.expense(account, food, "100")

        overview = AggregationService(db_session).overview(owner_id, today=TODAY)

        assert overview.total_balance == Decimal("1400")
        assert overview.current_month_income.percentage == Decimal("50.00")
        assert overview.current_month_expenses.goal == Decimal("400")
        assert overview.current_month_expenses.percentage == Decimal("25.00")
        assert overview.net_savings == Decimal("400")

    def test_recent_transactions_merged_newest_first(self, db_session, owner_id, ledger):
        main = ledger.account("Main", "1000")
        savings = ledger.account("Savings")
        salary = ledger.income_type("Salary")
        food = ledger.expense_type("Food")
        ledger.expense(main, food, "10", date=dt.date(2024, 3, 1))
        ledger.income(main, salary, "20", date=dt.date(2024, 3, 5))
        ledger.transfer(main, savings, "30", date=dt.date(2024, 3, 3))
        ledger.expense(main, food, "40", date=dt.date(2024, 3, 7))

        overview = AggregationService(db_session).overview(owner_id, limit=3, today=TODAY)
        recent = overview.recent_transactions

        assert [r.amount for r in recent] == [Decimal("40"), Decimal("20"), Decimal("30")]
        assert [r.kind for r in recent] == [
            EntryKind.EXPENSE, EntryKind.INCOME, EntryKind.TRANSFER,
        ]
        assert recent[2].account_name == "Main → Savings"
        assert recent[2].category_name is None
        assert recent[0].category_name == "Food"

    def test_zero_limit_rejected(self, db_session, owner_id):
        with pytest.raises(ValidationError, match="Limit"):
            AggregationService(db_session).overview(owner_id, limit=0, today=TODAY)


class TestMonthOverview:

    def test_counts_and_net_savings(self, db_session, owner_id, ledger):
        main = ledger.account("Main", "1000")
        savings = ledger.account("Savings")
        salary = ledger.income_type("Salary")
        food = ledger.expense_type("Food")
        ledger.income(main, salary, "300")
        ledger.expense(main, food, "50")
        ledger.expense(main, food, "25")
        ledger.transfer(main, savings, "100")

        month = AggregationService(db_session).month_overview(owner_id, 2024, 3)

        assert month.net_savings == Decimal("225")
        assert month.transaction_counts.incomes == 1
        assert month.transaction_counts.expenses == 2
        assert month.transaction_counts.transfers == 1
