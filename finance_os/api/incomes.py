"""
Income API endpoints.
"""

import datetime as dt
import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from finance_os.api.deps import get_owner_id, PageParams, to_page
from finance_os.errors import LedgerError
from finance_os.models.base import get_db
from finance_os.services.income_service import IncomeService
from finance_os.schemas.journal import (
    IncomeCreate,
    IncomeUpdate,
    IncomeResponse,
    JournalFilters,
    Page,
)

router = APIRouter(prefix="/incomes", tags=["Incomes"])


@router.post("", response_model=IncomeResponse, status_code=201)
def create_income(
    request: IncomeCreate,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Record an income; its account is credited in the same transaction."""
    service = IncomeService(db)
    try:
        income = service.create_income(owner_id, request)
        db.commit()
        return income
    except LedgerError:
        db.rollback()
        raise


@router.get("", response_model=Page[IncomeResponse])
def list_incomes(
    account_id: int | None = None,
    income_type_id: int | None = None,
    start_date: dt.date | None = None,
    end_date: dt.date | None = None,
    paging: PageParams = Depends(),
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    filters = JournalFilters(
        account_id=account_id,
        category_id=income_type_id,
        start_date=start_date,
        end_date=end_date,
    )
    items, total, page, limit = IncomeService(db).list_entries(
        owner_id, filters, paging.page, paging.limit
    )
    return to_page(IncomeResponse, items, total, page, limit)


@router.get("/{income_id}", response_model=IncomeResponse)
def get_income(
    income_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return IncomeService(db).get_income(owner_id, income_id)


@router.patch("/{income_id}", response_model=IncomeResponse)
def update_income(
    income_id: int,
    request: IncomeUpdate,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """
    Amend an income.

    Lowering the amount or moving it to another account takes
    money back out of the original account, so it can fail with
    INSUFFICIENT_BALANCE.
    """
    service = IncomeService(db)
    try:
        income = service.update_income(owner_id, income_id, request)
        db.commit()
        return income
    except LedgerError:
        db.rollback()
        raise


@router.delete("/{income_id}", status_code=204)
def delete_income(
    income_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    service = IncomeService(db)
    try:
        service.delete_income(owner_id, income_id)
        db.commit()
    except LedgerError:
        db.rollback()
        raise
    return Response(status_code=204)
