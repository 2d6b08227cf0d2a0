"""
Shared plumbing for the three journal services.

Lookups are always scoped to the owner, so an id that exists
but belongs to someone else reads as "not found".
"""

import math
import uuid

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from finance_os.config import get_settings
from finance_os.errors import NotFoundError
from finance_os.schemas.journal import JournalFilters
from finance_os.services.admission import AdmissionGuard
from finance_os.services.balance_engine import BalanceEngine


def page_bounds(page: int | None, limit: int | None) -> tuple[int, int, int]:
    """Clamp page/limit to sane values; return (page, limit, offset)."""
    settings = get_settings()
    page = max(page or 1, 1)
    limit = limit or settings.DEFAULT_PAGE_SIZE
    limit = min(max(limit, 1), settings.MAX_PAGE_SIZE)
    return page, limit, (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


class JournalService:
    """Base for IncomeService, ExpenseService, and TransferService."""

    model = None
    resource = "Entry"

    def __init__(self, db: Session):
        self.db = db
        self.guard = AdmissionGuard(db)
        self.engine = BalanceEngine(db)

    def get(self, owner_id: uuid.UUID, entry_id: int):
        entry = self.db.execute(
            select(self.model).where(
                self.model.id == entry_id,
                self.model.owner_id == owner_id,
            )
        ).scalar_one_or_none()
        if not entry:
            raise NotFoundError(self.resource, entry_id)
        return entry

    def _filter(self, query, filters: JournalFilters):
        """Apply filters common to every entry kind; subclasses add more."""
        if filters.start_date is not None:
            query = query.where(self.model.date >= filters.start_date)
        if filters.end_date is not None:
            query = query.where(self.model.date <= filters.end_date)
        return query

    def list_entries(
        self,
        owner_id: uuid.UUID,
        filters: JournalFilters | None = None,
        page: int | None = None,
        limit: int | None = None,
    ):
        """
        Owned entries matching the filters, newest date first.

        Returns (items, total, page, limit) where total counts every
        matching entry, not just this page.
        """
        filters = filters or JournalFilters()
        page, limit, offset = page_bounds(page, limit)

        query = self._filter(
            select(self.model).where(self.model.owner_id == owner_id),
            filters,
        )
        total = self.db.execute(
            select(func.count()).select_from(query.subquery())
        ).scalar()

        items = self.db.execute(
            query.order_by(
                self.model.date.desc(),
                self.model.created_at.desc(),
                self.model.id.desc(),
            )
            .offset(offset)
            .limit(limit)
        ).scalars().all()

        return list(items), total, page, limit
