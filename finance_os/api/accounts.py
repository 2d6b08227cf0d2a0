"""
Account API endpoints.
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_os.api.deps import get_owner_id
from finance_os.errors import LedgerError
from finance_os.models.base import get_db
from finance_os.models.enums import AccountType
from finance_os.services.account_service import AccountService
from finance_os.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountBalanceResponse,
    AccountSummary,
    ReconciliationReport,
)

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Open a new account with an optional opening balance."""
    service = AccountService(db)
    try:
        account = service.create_account(owner_id, request)
        db.commit()
        return account
    except LedgerError:
        db.rollback()
        raise


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    account_type: AccountType | None = None,
    is_active: bool | None = None,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return AccountService(db).list_accounts(owner_id, account_type, is_active)


@router.get("/summary", response_model=AccountSummary)
def get_account_summary(
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Totals per account type, active accounts only."""
    return AccountService(db).get_summary(owner_id)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return AccountService(db).get_account(owner_id, account_id)


@router.get("/{account_id}/balance", response_model=AccountBalanceResponse)
def get_account_balance(
    account_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    account = AccountService(db).get_account(owner_id, account_id)
    return AccountBalanceResponse(
        account_id=account.id,
        name=account.name,
        account_type=account.account_type,
        balance=account.balance,
    )


@router.get("/{account_id}/reconcile", response_model=ReconciliationReport)
def reconcile_account(
    account_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Check the stored balance against the journal."""
    return AccountService(db).reconcile(owner_id, account_id)


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    request: AccountUpdate,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Rename or (de)activate. The balance cannot be edited here."""
    service = AccountService(db)
    try:
        account = service.update_account(owner_id, account_id, request)
        db.commit()
        return account
    except LedgerError:
        db.rollback()
        raise


@router.delete("/{account_id}", response_model=AccountResponse)
def deactivate_account(
    account_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """
    Deactivate an account.

    Accounts are never physically deleted; their journal
    history has to stay explainable.
    """
    service = AccountService(db)
    try:
        account = service.deactivate_account(owner_id, account_id)
        db.commit()
        return account
    except LedgerError:
        db.rollback()
        raise
