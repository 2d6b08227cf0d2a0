"""
Subscription API endpoints.
"""

import uuid

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from finance_os.api.deps import get_owner_id
from finance_os.errors import LedgerError
from finance_os.models.base import get_db
from finance_os.models.enums import BillingCycle
from finance_os.services.subscription_service import SubscriptionService
from finance_os.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionUpdate,
    SubscriptionResponse,
    MonthlyCostResponse,
)

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("", response_model=SubscriptionResponse, status_code=201)
def create_subscription(
    request: SubscriptionCreate,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    service = SubscriptionService(db)
    try:
        subscription = service.create_subscription(owner_id, request)
        db.commit()
        return subscription
    except LedgerError:
        db.rollback()
        raise


@router.get("", response_model=list[SubscriptionResponse])
def list_subscriptions(
    account_id: int | None = None,
    is_active: bool | None = None,
    billing_cycle: BillingCycle | None = None,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return SubscriptionService(db).list_subscriptions(
        owner_id, account_id, is_active, billing_cycle
    )


@router.get("/active", response_model=list[SubscriptionResponse])
def list_active_subscriptions(
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return SubscriptionService(db).active(owner_id)


@router.get("/upcoming", response_model=list[SubscriptionResponse])
def list_upcoming_renewals(
    days: int | None = Query(None, ge=0),
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Active subscriptions renewing in the next `days` days."""
    return SubscriptionService(db).upcoming(owner_id, days)


@router.get("/monthly-cost", response_model=MonthlyCostResponse)
def get_monthly_cost(
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    total = SubscriptionService(db).monthly_cost(owner_id)
    return MonthlyCostResponse(total_monthly_cost=total)


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
def get_subscription(
    subscription_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return SubscriptionService(db).get_subscription(owner_id, subscription_id)


@router.patch("/{subscription_id}", response_model=SubscriptionResponse)
def update_subscription(
    subscription_id: int,
    request: SubscriptionUpdate,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    service = SubscriptionService(db)
    try:
        subscription = service.update_subscription(owner_id, subscription_id, request)
        db.commit()
        return subscription
    except LedgerError:
        db.rollback()
        raise


@router.delete("/{subscription_id}", status_code=204)
def delete_subscription(
    subscription_id: int,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    service = SubscriptionService(db)
    try:
        service.delete_subscription(owner_id, subscription_id)
        db.commit()
    except LedgerError:
        db.rollback()
        raise
    return Response(status_code=204)
