"""
Expense API endpoints.
"""

import datetime as dt
import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from finance_os.api.deps import get_owner_id, PageParams, to_page
from finance_os.errors import LedgerError
from finance_os.models.base import get_db
from finance_os.services.expense_service import ExpenseService
from finance_os.schemas.journal import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    JournalFilters,
    Page,
)

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.post("", response_model=ExpenseResponse, status_code=201)
def create_expense(
    request: ExpenseCreate,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """
    Record an expense.

    Rejected with INSUFFICIENT_BALANCE when the account cannot
    cover it.
    """
    service = ExpenseService(db)
    try:
        expense = service.create_expense(owner_id, request)
        db.commit()
        return expense
    except LedgerError:
        db.rollback()
        raise


@router.get("", response_model=Page[ExpenseResponse])
def list_expenses(
    account_id: int | None = None,
    expense_type_id: int | None = None,
    start_date: dt.date | None = None,
    end_date: dt.date | None = None,
    paging: PageParams = Depends(),
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    filters = JournalFilters(
        account_id=account_id,
        category_id=expense_type_id,
        start_date=start_date,
        end_date=end_date,
    )
    items, total, page, limit = ExpenseService(db).list_entries(
        owner_id, filters, paging.page, paging.limit
    )
    return to_page(ExpenseResponse, items, total, page, limit)


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return ExpenseService(db).get_expense(owner_id, expense_id)


@router.patch("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    request: ExpenseUpdate,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    service = ExpenseService(db)
    try:
        expense = service.update_expense(owner_id, expense_id, request)
        db.commit()
        return expense
    except LedgerError:
        db.rollback()
        raise


@router.delete("/{expense_id}", status_code=204)
def delete_expense(
    expense_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Delete an expense and refund its account."""
    service = ExpenseService(db)
    try:
        service.delete_expense(owner_id, expense_id)
        db.commit()
    except LedgerError:
        db.rollback()
        raise
    return Response(status_code=204)
