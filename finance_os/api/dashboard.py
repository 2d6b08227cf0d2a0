"""
Dashboard API endpoints.

Read-only. Everything here is computed from committed state
at request time.
"""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from finance_os.api.deps import get_owner_id
from finance_os.models.base import get_db
from finance_os.models.enums import EntryKind
from finance_os.services.aggregation_service import AggregationService
from finance_os.schemas.dashboard import (
    BudgetStatus,
    MonthlySummary,
    MonthOverview,
    Overview,
    TargetProgress,
    Trends,
)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/overview", response_model=Overview)
def get_overview(
    limit: int | None = Query(None, ge=1, le=100),
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    """Balances, this month's progress, and the latest entries."""
    return AggregationService(db).overview(owner_id, limit)


@router.get("/monthly-summary", response_model=MonthlySummary)
def get_monthly_summary(
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12),
    kind: EntryKind = EntryKind.EXPENSE,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return AggregationService(db).monthly_summary(owner_id, year, month, kind)


@router.get("/month", response_model=MonthOverview)
def get_month_overview(
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12),
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return AggregationService(db).month_overview(owner_id, year, month)


@router.get("/budget-status", response_model=list[BudgetStatus])
def get_budget_status(
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return AggregationService(db).budget_status(owner_id)


@router.get("/target-progress", response_model=list[TargetProgress])
def get_target_progress(
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return AggregationService(db).target_progress(owner_id)


@router.get("/trends", response_model=Trends)
def get_trends(
    months: int | None = Query(None, ge=1, le=24),
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
):
    return AggregationService(db).trends(owner_id, months)
