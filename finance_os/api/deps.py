"""
Shared endpoint dependencies.

Authentication happens upstream; by the time a request gets
here the caller's identity is an opaque UUID in the
X-Owner-Id header. Only ownership is checked in this service.
"""

import uuid

from fastapi import Header, Query

from finance_os.schemas.journal import Page
from finance_os.services.journal_service import total_pages


def get_owner_id(x_owner_id: uuid.UUID = Header(...)) -> uuid.UUID:
    return x_owner_id


class PageParams:
    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int | None = Query(None, ge=1),
    ):
        self.page = page
        self.limit = limit


def to_page(schema, items, total: int, page: int, limit: int) -> Page:
    """Wrap one page of ORM rows in a Page of `schema`."""
    return Page[schema](
        items=[schema.model_validate(item) for item in items],
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages(total, limit),
        has_more=page * limit < total,
    )
