"""
Error taxonomy for the ledger.

Services raise these; the HTTP layer maps each one to a
status code through a single exception handler. Every error
is terminal: nothing in the engine retries a rejected
mutation.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base class for every error the ledger reports to a caller."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(LedgerError):
    """
    The record is missing or belongs to another owner.

    Both cases are reported identically so a caller cannot probe
    for other users' ids.
    """

    code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id=None):
        if resource_id is not None:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(message)
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(LedgerError, ValueError):
    """A business rule rejected the request."""

    code = "VALIDATION_ERROR"

    def __init__(self, reason: str, details: dict | None = None):
        super().__init__(reason, details)
        self.reason = reason


class InsufficientBalanceError(LedgerError):
    """A debit asked for more than the account can give."""

    code = "INSUFFICIENT_BALANCE"

    def __init__(self, account_id: int, required: Decimal, available: Decimal):
        super().__init__(
            f"Insufficient balance in account {account_id}. "
            f"Required: {required}, Available: {available}",
            {
                "account_id": account_id,
                "required": str(required),
                "available": str(available),
            },
        )
        self.account_id = account_id
        self.required = required
        self.available = available


class StorageError(LedgerError):
    """The store failed or rejected a write for an unclassified reason."""

    code = "DATABASE_ERROR"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)
