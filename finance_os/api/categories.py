"""
Income type and expense type API endpoints.

Both resources share one set of handlers, registered twice.
"""

import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from finance_os.api.deps import get_owner_id
from finance_os.errors import LedgerError
from finance_os.models.base import get_db
from finance_os.services.category_service import IncomeTypeService, ExpenseTypeService
from finance_os.schemas.category import (
    IncomeTypeCreate,
    IncomeTypeUpdate,
    IncomeTypeResponse,
    ExpenseTypeCreate,
    ExpenseTypeUpdate,
    ExpenseTypeResponse,
)


def build_router(prefix, tag, service_class, create_schema, update_schema, response_schema):
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.post("", response_model=response_schema, status_code=201)
    def create_category(
        request: create_schema,
        owner_id: uuid.UUID = Depends(get_owner_id),
        db: Session = Depends(get_db),
    ):
        service = service_class(db)
        try:
            category = service.create(owner_id, request)
            db.commit()
            return category
        except LedgerError:
            db.rollback()
            raise

    @router.get("", response_model=list[response_schema])
    def list_categories(
        is_active: bool | None = None,
        owner_id: uuid.UUID = Depends(get_owner_id),
        db: Session = Depends(get_db),
    ):
        return service_class(db).list_all(owner_id, is_active)

    @router.get("/{category_id}", response_model=response_schema)
    def get_category(
        category_id: int,
        owner_id: uuid.UUID = Depends(get_owner_id),
        db: Session = Depends(get_db),
    ):
        return service_class(db).get(owner_id, category_id)

    @router.patch("/{category_id}", response_model=response_schema)
    def update_category(
        category_id: int,
        request: update_schema,
        owner_id: uuid.UUID = Depends(get_owner_id),
        db: Session = Depends(get_db),
    ):
        service = service_class(db)
        try:
            category = service.update(owner_id, category_id, request)
            db.commit()
            return category
        except LedgerError:
            db.rollback()
            raise

    @router.delete("/{category_id}", status_code=204)
    def delete_category(
        category_id: int,
        owner_id: uuid.UUID = Depends(get_owner_id),
        db: Session = Depends(get_db),
    ):
        """Delete a category no entry uses; otherwise deactivate it."""
        service = service_class(db)
        try:
            service.delete(owner_id, category_id)
            db.commit()
        except LedgerError:
            db.rollback()
            raise
        return Response(status_code=204)

    return router


income_types_router = build_router(
    "/income-types", "Income Types", IncomeTypeService,
    IncomeTypeCreate, IncomeTypeUpdate, IncomeTypeResponse,
)
expense_types_router = build_router(
    "/expense-types", "Expense Types", ExpenseTypeService,
    ExpenseTypeCreate, ExpenseTypeUpdate, ExpenseTypeResponse,
)
