"""
Tests for the TransferService.

A transfer must move both legs or neither.
"""

import datetime as dt
from decimal import Decimal

import pytest

from finance_os.errors import InsufficientBalanceError, NotFoundError, ValidationError
from finance_os.models.enums import AccountType
from finance_os.schemas.account import AccountCreate
from finance_os.schemas.category import ExpenseTypeCreate
from finance_os.schemas.journal import TransferCreate, ExpenseCreate, JournalFilters
from finance_os.services.account_service import AccountService
from finance_os.services.category_service import ExpenseTypeService
from finance_os.services.expense_service import ExpenseService
from finance_os.services.transfer_service import TransferService

TODAY = dt.date(2024, 3, 15)


def open_account(db, owner_id, balance, name):
    account = AccountService(db).create_account(owner_id, AccountCreate(
        name=name, account_type=AccountType.SPENDING, balance=Decimal(balance),
    ))
    db.commit()
    return account


def transfer(db, owner_id, source, destination, amount, date=TODAY):
    result = TransferService(db).create_transfer(owner_id, TransferCreate(
        from_account_id=source.id,
        to_account_id=destination.id,
        amount=Decimal(amount),
        date=date,
    ))
    db.commit()
    return result


class TestCreateTransfer:

    def test_transfer_moves_both_legs(self, db_session, owner_id):
        a = open_account(db_session, owner_id, "500", "A")
        b = open_account(db_session, owner_id, "0", "B")

        transfer(db_session, owner_id, a, b, "500")

        assert a.balance == Decimal("0")
        assert b.balance == Decimal("500")

    def test_transfer_from_empty_account_rejected(self, db_session, owner_id):
        a = open_account(db_session, owner_id, "500", "A")
        b = open_account(db_session, owner_id, "0", "B")
        transfer(db_session, owner_id, a, b, "500")

        with pytest.raises(InsufficientBalanceError) as exc_info:
            transfer(db_session, owner_id, a, b, "1")
        db_session.rollback()

        assert exc_info.value.account_id == a.id
        assert a.balance == Decimal("0")
        assert b.balance == Decimal("500")

    def test_same_account_rejected(self, db_session, owner_id):
        a = open_account(db_session, owner_id, "100", "A")
        with pytest.raises(ValidationError, match="same account"):
            transfer(db_session, owner_id, a, a, "10")

    def test_inactive_destination_rejected(self, db_session, owner_id):
        a = open_account(db_session, owner_id, "100", "A")
        b = open_account(db_session, owner_id, "0", "B")
        AccountService(db_session).deactivate_account(owner_id, b.id)
        db_session.commit()

        with pytest.raises(ValidationError, match="inactive"):
            transfer(db_session, owner_id, a, b, "10")
        assert a.balance == Decimal("100")

    def test_cross_owner_transfer_not_found(self, db_session, owner_id, other_owner_id):
        a = open_account(db_session, owner_id, "100", "A")
        theirs = open_account(db_session, other_owner_id, "0", "Theirs")

        with pytest.raises(NotFoundError):
            transfer(db_session, owner_id, a, theirs, "10")

    def test_engine_failure_on_source_leaves_destination_untouched(
        self, db_session, owner_id, monkeypatch
    ):
        """With the pre-check bypassed, a failed debit still undoes the credit."""
        # Destination gets the lower id so its credit is applied first.
        b = open_account(db_session, owner_id, "0", "B")
        a = open_account(db_session, owner_id, "5", "A")
        service = TransferService(db_session)
        monkeypatch.setattr(service.guard, "require_funds", lambda *args, **kwargs: None)

        with pytest.raises(InsufficientBalanceError):
            service.create_transfer(owner_id, TransferCreate(
                from_account_id=a.id, to_account_id=b.id,
                amount=Decimal("10"), date=TODAY,
            ))

        assert a.balance == Decimal("5")
        assert b.balance == Decimal("0")


class TestDeleteTransfer:

    def test_create_then_delete_restores_both_balances(self, db_session, owner_id):
        a = open_account(db_session, owner_id, "300", "A")
        b = open_account(db_session, owner_id, "40", "B")
        created = transfer(db_session, owner_id, a, b, "120")

        TransferService(db_session).delete_transfer(owner_id, created.id)
        db_session.commit()

        assert a.balance == Decimal("300")
        assert b.balance == Decimal("40")

    def test_delete_blocked_when_destination_spent_the_money(self, db_session, owner_id):
        a = open_account(db_session, owner_id, "100", "A")
        b = open_account(db_session, owner_id, "0", "B")
        created = transfer(db_session, owner_id, a, b, "100")
        food = ExpenseTypeService(db_session).create(owner_id, ExpenseTypeCreate(name="Food"))
        ExpenseService(db_session).create_expense(owner_id, ExpenseCreate(
            account_id=b.id, expense_type_id=food.id, amount=Decimal("70"), date=TODAY,
        ))
        db_session.commit()

        with pytest.raises(InsufficientBalanceError) as exc_info:
            TransferService(db_session).delete_transfer(owner_id, created.id)
        db_session.rollback()

        assert exc_info.value.account_id == b.id
        assert exc_info.value.available == Decimal("30")
        assert a.balance == Decimal("0")
        assert b.balance == Decimal("30")
        assert TransferService(db_session).get_transfer(owner_id, created.id) is not None


class TestListTransfers:

    def test_filter_matches_either_leg(self, db_session, owner_id):
        a = open_account(db_session, owner_id, "100", "A")
        b = open_account(db_session, owner_id, "100", "B")
        c = open_account(db_session, owner_id, "100", "C")
        transfer(db_session, owner_id, a, b, "10", date=dt.date(2024, 3, 1))
        transfer(db_session, owner_id, b, c, "10", date=dt.date(2024, 3, 2))
        transfer(db_session, owner_id, a, c, "10", date=dt.date(2024, 3, 3))

        items, total, _, _ = TransferService(db_session).list_entries(
            owner_id, JournalFilters(account_id=b.id)
        )

        assert total == 2
        assert [t.date for t in items] == [dt.date(2024, 3, 2), dt.date(2024, 3, 1)]
