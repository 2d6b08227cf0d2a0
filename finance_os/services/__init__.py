"""Business logic services."""

from finance_os.services.balance_engine import BalanceEngine
from finance_os.services.admission import AdmissionGuard
from finance_os.services.account_service import AccountService
from finance_os.services.category_service import IncomeTypeService, ExpenseTypeService
from finance_os.services.income_service import IncomeService
from finance_os.services.expense_service import ExpenseService
from finance_os.services.transfer_service import TransferService
from finance_os.services.aggregation_service import AggregationService
from finance_os.services.subscription_service import SubscriptionService

__all__ = [
    "BalanceEngine",
    "AdmissionGuard",
    "AccountService",
    "IncomeTypeService",
    "ExpenseTypeService",
    "IncomeService",
    "ExpenseService",
    "TransferService",
    "AggregationService",
    "SubscriptionService",
]
