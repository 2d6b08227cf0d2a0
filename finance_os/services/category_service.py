"""
Category services for income types and expense types.

Both kinds behave the same way; they differ only in the
model and in what their monthly goal is called (target for
income, budget for expenses).
"""

import logging
import uuid

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from finance_os.errors import NotFoundError, ValidationError, StorageError
from finance_os.models.category import IncomeType, ExpenseType
from finance_os.models.journal import Income, Expense

logger = logging.getLogger(__name__)


class CategoryService:
    """Shared CRUD for one category kind. Use a subclass."""

    model: type[IncomeType] | type[ExpenseType]
    entry_model: type[Income] | type[Expense]
    entry_fk: str
    amount_field: str

    def __init__(self, db: Session):
        self.db = db

    def _find_by_name(self, owner_id: uuid.UUID, name: str):
        return self.db.execute(
            select(self.model).where(
                self.model.owner_id == owner_id,
                self.model.name == name,
            )
        ).scalar_one_or_none()

    def _flush(self, name: str) -> None:
        # Two concurrent creates can both pass the name check;
        # the unique constraint settles it.
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            if self._is_duplicate(e):
                raise ValidationError(
                    f"{self.model.label} named '{name}' already exists"
                ) from e
            logger.exception("Could not save %s", self.model.label.lower())
            raise StorageError() from e

    @staticmethod
    def _is_duplicate(error: IntegrityError) -> bool:
        text = str(error.orig).lower()
        return "unique" in text or "duplicate" in text

    def create(self, owner_id: uuid.UUID, request):
        """
        Create a category.

        Raises ValidationError if the owner already has one with
        this name, or if the goal amount is not positive.
        """
        if self._find_by_name(owner_id, request.name):
            raise ValidationError(
                f"{self.model.label} named '{request.name}' already exists"
            )

        amount = getattr(request, self.amount_field)
        if amount is not None and amount <= 0:
            raise ValidationError(
                f"{self.amount_field.replace('_', ' ').capitalize()} must be positive"
            )

        category = self.model(
            owner_id=owner_id,
            name=request.name,
            description=request.description,
        )
        category.limit_amount = amount
        self.db.add(category)
        self._flush(request.name)
        return category

    def get(self, owner_id: uuid.UUID, category_id: int):
        category = self.db.execute(
            select(self.model).where(
                self.model.id == category_id,
                self.model.owner_id == owner_id,
            )
        ).scalar_one_or_none()
        if not category:
            raise NotFoundError(self.model.label, category_id)
        return category

    def list_all(self, owner_id: uuid.UUID, is_active: bool | None = None):
        """Owned categories ordered by name."""
        query = select(self.model).where(self.model.owner_id == owner_id)
        if is_active is not None:
            query = query.where(self.model.is_active == is_active)
        return list(
            self.db.execute(query.order_by(self.model.name)).scalars().all()
        )

    def update(self, owner_id: uuid.UUID, category_id: int, request):
        category = self.get(owner_id, category_id)
        changes = request.model_dump(exclude_unset=True)

        name = changes.get("name")
        if name is not None and name != category.name:
            if self._find_by_name(owner_id, name):
                raise ValidationError(
                    f"{self.model.label} named '{name}' already exists"
                )
            category.name = name

        if "description" in changes:
            category.description = changes["description"]

        if self.amount_field in changes:
            amount = changes[self.amount_field]
            if amount is not None and amount <= 0:
                raise ValidationError(
                    f"{self.amount_field.replace('_', ' ').capitalize()} must be positive"
                )
            category.limit_amount = amount

        if changes.get("is_active") is not None:
            category.is_active = changes["is_active"]

        self._flush(category.name)
        return category

    def delete(self, owner_id: uuid.UUID, category_id: int) -> None:
        """
        Delete an unused category.

        A category that entries still reference cannot be deleted;
        deactivate it instead so history keeps its label.
        """
        category = self.get(owner_id, category_id)

        in_use = self.db.execute(
            select(func.count()).select_from(self.entry_model).where(
                getattr(self.entry_model, self.entry_fk) == category.id
            )
        ).scalar()
        if in_use:
            raise ValidationError(
                f"{self.model.label} {category_id} is used by {in_use} "
                f"entries; deactivate it instead"
            )

        self.db.delete(category)
        self.db.flush()


class IncomeTypeService(CategoryService):
    model = IncomeType
    entry_model = Income
    entry_fk = "income_type_id"
    amount_field = "target_amount"


class ExpenseTypeService(CategoryService):
    model = ExpenseType
    entry_model = Expense
    entry_fk = "expense_type_id"
    amount_field = "budget_amount"
