"""
Transfer API endpoints.

There is no update endpoint: a wrong transfer is deleted and
recorded again.
"""

import datetime as dt
import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from finance_os.api.deps import get_owner_id, PageParams, to_page
from finance_os.errors import LedgerError
from finance_os.models.base import get_db
from finance_os.services.transfer_service import TransferService
from finance_os.schemas.journal import (
    TransferCreate,
    TransferResponse,
    JournalFilters,
    Page,
)

router = APIRouter(prefix="/transfers", tags=["Transfers"])


@router.post("", response_model=TransferResponse, status_code=201)
def create_transfer(
    request: TransferCreate,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Move money between two of the caller's accounts. Both legs or neither."""
    service = TransferService(db)
    try:
        transfer = service.create_transfer(owner_id, request)
        db.commit()
        return transfer
    except LedgerError:
        db.rollback()
        raise


@router.get("", response_model=Page[TransferResponse])
def list_transfers(
    account_id: int | None = None,
    start_date: dt.date | None = None,
    end_date: dt.date | None = None,
    paging: PageParams = Depends(),
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Transfers touching `account_id` on either side, if given."""
    filters = JournalFilters(
        account_id=account_id,
        start_date=start_date,
        end_date=end_date,
    )
    items, total, page, limit = TransferService(db).list_entries(
        owner_id, filters, paging.page, paging.limit
    )
    return to_page(TransferResponse, items, total, page, limit)


@router.get("/{transfer_id}", response_model=TransferResponse)
def get_transfer(
    transfer_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return TransferService(db).get_transfer(owner_id, transfer_id)


@router.delete("/{transfer_id}", status_code=204)
def delete_transfer(
    transfer_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """
    Delete a transfer and reverse both legs.

    Fails with INSUFFICIENT_BALANCE if the destination account
    has already spent the money.
    """
    service = TransferService(db)
    try:
        service.delete_transfer(owner_id, transfer_id)
        db.commit()
    except LedgerError:
        db.rollback()
        raise
    return Response(status_code=204)
