"""
Balance engine: the only code that writes account balances.

Every journal operation hands the engine a list of signed
balance deltas and writes its journal row inside the same
mutation() block. Either all of it reaches the database or
none of it does.

Debits are conditional updates:

    UPDATE accounts SET balance = round(balance - :amount, 2)
    WHERE id = :id AND round(balance, 2) >= :amount

The database evaluates the condition against the latest
committed balance while holding the row's write lock, so two
concurrent debits on one account are serialized and the later
one sees the earlier one's effect. This is the authoritative
sufficiency check; the AdmissionGuard only fails fast.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select, update, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finance_os.errors import (
    LedgerError,
    NotFoundError,
    InsufficientBalanceError,
    StorageError,
)
from finance_os.models.account import Account

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _cents(expression):
    # SQLite keeps NUMERIC as REAL, so server-side arithmetic leaves
    # binary residues (0.30 - 0.10 = 0.19999999999999998).
    return func.round(expression, 2)


@dataclass(frozen=True)
class BalanceDelta:
    """
    A signed change to one account's balance.

    `required` and `released` only shape the error a rejected
    debit reports. `released` is money the same operation gives
    back to this account first (the old amount of an amended
    expense), so it counts as available.
    """
    account_id: int
    amount: Decimal
    required: Decimal | None = None
    released: Decimal = ZERO

    @property
    def is_debit(self) -> bool:
        return self.amount < 0


def credit(account_id: int, amount: Decimal) -> BalanceDelta:
    return BalanceDelta(account_id=account_id, amount=amount)


def debit(
    account_id: int,
    amount: Decimal,
    required: Decimal | None = None,
    released: Decimal = ZERO,
) -> BalanceDelta:
    return BalanceDelta(
        account_id=account_id,
        amount=-amount,
        required=required,
        released=released,
    )


class BalanceEngine:
    """
    Applies balance deltas on the caller's session.

    The session is the transaction handle. The engine never
    commits; the caller commits after mutation() exits
    cleanly. On failure the engine rolls the session back so
    a half-applied operation cannot be committed by accident.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def mutation(self):
        """
        Scope one journal operation: balance deltas plus row write.

        Ledger errors propagate unchanged. Storage errors are
        logged with their cause and surface as StorageError,
        whose message never includes driver text.
        """
        try:
            yield
            self.db.flush()
        except LedgerError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Ledger mutation failed in storage")
            raise StorageError() from e

    def apply(self, deltas: list[BalanceDelta]) -> None:
        """
        Apply every delta, in ascending account id order.

        A fixed order means two operations touching the same pair
        of accounts always lock them in the same sequence.
        """
        for delta in sorted(deltas, key=lambda d: d.account_id):
            if delta.amount == ZERO:
                continue
            if delta.is_debit:
                self._debit(delta)
            else:
                self._credit(delta)

    def _credit(self, delta: BalanceDelta) -> None:
        result = self.db.execute(
            update(Account)
            .where(Account.id == delta.account_id)
            .values(balance=_cents(Account.balance + delta.amount))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("Account", delta.account_id)

        logger.debug("Credited %s to account %s", delta.amount, delta.account_id)
        self._expire(delta.account_id)

    def _debit(self, delta: BalanceDelta) -> None:
        amount = -delta.amount
        result = self.db.execute(
            update(Account)
            .where(
                Account.id == delta.account_id,
                _cents(Account.balance) >= amount,
            )
            .values(balance=_cents(Account.balance - amount))
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            balance = self.db.execute(
                select(Account.balance).where(Account.id == delta.account_id)
            ).scalar_one_or_none()
            if balance is None:
                raise NotFoundError("Account", delta.account_id)

            available = Decimal(str(balance)) + delta.released
            required = delta.required if delta.required is not None else amount
            logger.info(
                "Rejected debit on account %s: required=%s available=%s",
                delta.account_id, required, available,
            )
            raise InsufficientBalanceError(delta.account_id, required, available)

        logger.debug("Debited %s from account %s", amount, delta.account_id)
        self._expire(delta.account_id)

    def _expire(self, account_id: int) -> None:
        """Make an already-loaded Account re-read its balance."""
        key = self.db.identity_key(Account, account_id)
        account = self.db.identity_map.get(key)
        if account is not None:
            self.db.expire(account, ["balance", "updated_at"])
