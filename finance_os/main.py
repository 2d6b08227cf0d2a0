"""
Finance OS FastAPI application.

This is the entry point for the application.
All routers and the ledger error handler are registered here.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from finance_os.config import get_settings
from finance_os.errors import (
    LedgerError,
    NotFoundError,
    ValidationError,
    InsufficientBalanceError,
    StorageError,
)
from finance_os.api.health import router as health_router
from finance_os.api.accounts import router as accounts_router
from finance_os.api.categories import income_types_router, expense_types_router
from finance_os.api.incomes import router as incomes_router
from finance_os.api.expenses import router as expenses_router
from finance_os.api.transfers import router as transfers_router
from finance_os.api.subscriptions import router as subscriptions_router
from finance_os.api.dashboard import router as dashboard_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

STATUS_CODES = {
    NotFoundError: 404,
    ValidationError: 400,
    InsufficientBalanceError: 400,
    StorageError: 500,
}

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Personal finance ledger: accounts, journal, and dashboards",
    debug=settings.DEBUG,
)


@app.exception_handler(LedgerError)
def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Render every ledger error as {"error": {code, message, details}}."""
    status_code = STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.code)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.message,
                "details": exc.details,
            }
        },
    )


# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(income_types_router)
app.include_router(expense_types_router)
app.include_router(incomes_router)
app.include_router(expenses_router)
app.include_router(transfers_router)
app.include_router(subscriptions_router)
app.include_router(dashboard_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("finance_os.main:app", host=settings.HOST, port=settings.PORT)
