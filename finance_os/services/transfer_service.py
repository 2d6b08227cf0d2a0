"""
Transfer service.

A transfer debits one account and credits another in a single
mutation. Transfers are never edited; a wrong one is deleted,
which reverses both legs.
"""

import logging
import uuid

from sqlalchemy import or_

from finance_os.errors import ValidationError
from finance_os.models.journal import Transfer
from finance_os.schemas.journal import TransferCreate, JournalFilters
from finance_os.services.balance_engine import credit, debit
from finance_os.services.journal_service import JournalService

logger = logging.getLogger(__name__)


class TransferService(JournalService):
    model = Transfer
    resource = "Transfer"

    def _filter(self, query, filters: JournalFilters):
        query = super()._filter(query, filters)
        if filters.account_id is not None:
            query = query.where(
                or_(
                    Transfer.from_account_id == filters.account_id,
                    Transfer.to_account_id == filters.account_id,
                )
            )
        return query

    def create_transfer(self, owner_id: uuid.UUID, request: TransferCreate) -> Transfer:
        """
        Move money from one owned account to another.

        Both accounts must be active and different. The source
        must cover the amount.
        """
        if request.from_account_id == request.to_account_id:
            raise ValidationError("Cannot transfer to the same account")
        self.guard.require_positive(request.amount)

        source = self.guard.require_account(owner_id, request.from_account_id)
        destination = self.guard.require_account(owner_id, request.to_account_id)
        self.guard.require_funds(source, request.amount)

        with self.engine.mutation():
            self.engine.apply([
                debit(source.id, request.amount),
                credit(destination.id, request.amount),
            ])
            transfer = Transfer(
                owner_id=owner_id,
                from_account=source,
                to_account=destination,
                amount=request.amount,
                date=request.date,
                description=request.description,
            )
            self.db.add(transfer)

        logger.info(
            "Transferred %s from account %s to account %s",
            transfer.amount, source.id, destination.id,
        )
        return transfer

    def get_transfer(self, owner_id: uuid.UUID, transfer_id: int) -> Transfer:
        return self.get(owner_id, transfer_id)

    def delete_transfer(self, owner_id: uuid.UUID, transfer_id: int) -> None:
        """
        Delete a transfer, returning the money to its source.

        Refused with InsufficientBalanceError when the destination
        has already spent it; neither balance changes then.
        """
        transfer = self.get(owner_id, transfer_id)
        destination = self.guard.find_account(owner_id, transfer.to_account_id)
        self.guard.require_funds(destination, transfer.amount)

        with self.engine.mutation():
            self.engine.apply([
                credit(transfer.from_account_id, transfer.amount),
                debit(destination.id, transfer.amount),
            ])
            self.db.delete(transfer)

        logger.info(
            "Deleted transfer %s, returned %s to account %s",
            transfer_id, transfer.amount, transfer.from_account_id,
        )
