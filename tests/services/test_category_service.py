"""
Tests for income type and expense type services.
"""

import datetime as dt
from decimal import Decimal

import pytest

from finance_os.errors import NotFoundError, ValidationError
from finance_os.models.enums import AccountType
from finance_os.schemas.account import AccountCreate
from finance_os.schemas.category import (
    IncomeTypeCreate,
    IncomeTypeUpdate,
    ExpenseTypeCreate,
    ExpenseTypeUpdate,
)
from finance_os.schemas.journal import ExpenseCreate
from finance_os.services.account_service import AccountService
from finance_os.services.category_service import IncomeTypeService, ExpenseTypeService
from finance_os.services.expense_service import ExpenseService


class TestCreateCategory:

    def test_create_expense_type_with_budget(self, db_session, owner_id):
        food = ExpenseTypeService(db_session).create(
            owner_id, ExpenseTypeCreate(name="Food", budget_amount=Decimal("400"))
        )
        db_session.commit()

        assert food.id is not None
        assert food.budget_amount == Decimal("400")
        assert food.is_active is True

    def test_create_income_type_without_target(self, db_session, owner_id):
        salary = IncomeTypeService(db_session).create(
            owner_id, IncomeTypeCreate(name="Salary")
        )
        assert salary.target_amount is None

    def test_duplicate_name_rejected(self, db_session, owner_id):
        service = ExpenseTypeService(db_session)
        service.create(owner_id, ExpenseTypeCreate(name="Food"))
        db_session.commit()

        with pytest.raises(ValidationError, match="already exists"):
            service.create(owner_id, ExpenseTypeCreate(name="Food"))

    def test_same_name_allowed_for_other_owner(self, db_session, owner_id, other_owner_id):
        service = ExpenseTypeService(db_session)
        service.create(owner_id, ExpenseTypeCreate(name="Food"))
        other = service.create(other_owner_id, ExpenseTypeCreate(name="Food"))
        db_session.commit()

        assert other.id is not None

    def test_non_positive_target_rejected(self, db_session, owner_id):
        request = IncomeTypeCreate.model_construct(
            name="Bonus", description=None, target_amount=Decimal("0"),
        )
        with pytest.raises(ValidationError, match="positive"):
            IncomeTypeService(db_session).create(owner_id, request)


class TestUpdateCategory:

    def test_update_budget_and_deactivate(self, db_session, owner_id):
        service = ExpenseTypeService(db_session)
        food = service.create(owner_id, ExpenseTypeCreate(name="Food"))
        db_session.commit()

        service.update(owner_id, food.id, ExpenseTypeUpdate(
            budget_amount=Decimal("250"), is_active=False,
        ))
        db_session.commit()

        assert food.budget_amount == Decimal("250")
        assert food.is_active is False

    def test_rename_to_existing_name_rejected(self, db_session, owner_id):
        service = IncomeTypeService(db_session)
        service.create(owner_id, IncomeTypeCreate(name="Salary"))
        bonus = service.create(owner_id, IncomeTypeCreate(name="Bonus"))
        db_session.commit()

        with pytest.raises(ValidationError, match="already exists"):
            service.update(owner_id, bonus.id, IncomeTypeUpdate(name="Salary"))

    def test_list_is_sorted_by_name(self, db_session, owner_id):
        service = IncomeTypeService(db_session)
        service.create(owner_id, IncomeTypeCreate(name="Salary"))
        service.create(owner_id, IncomeTypeCreate(name="Bonus"))
        db_session.commit()

        assert [c.name for c in service.list_all(owner_id)] == ["Bonus", "Salary"]


class TestDeleteCategory:

    def test_delete_unused_category(self, db_session, owner_id):
        service = ExpenseTypeService(db_session)
        food = service.create(owner_id, ExpenseTypeCreate(name="Food"))
        db_session.commit()

        service.delete(owner_id, food.id)
        db_session.commit()

        with pytest.raises(NotFoundError):
            service.get(owner_id, food.id)

    def test_delete_category_in_use_rejected(self, db_session, owner_id):
        account = AccountService(db_session).create_account(owner_id, AccountCreate(
            name="Main", account_type=AccountType.SPENDING, balance=Decimal("100"),
        ))
        service = ExpenseTypeService(db_session)
        food = service.create(owner_id, ExpenseTypeCreate(name="Food"))
        db_session.commit()
        ExpenseService(db_session).create_expense(owner_id, ExpenseCreate(
            account_id=account.id, expense_type_id=food.id,
            amount=Decimal("10"), date=dt.date(2024, 3, 1),
        ))
        db_session.commit()

        with pytest.raises(ValidationError, match="deactivate"):
            service.delete(owner_id, food.id)
