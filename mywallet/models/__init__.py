"""
Data Models Package

This package contains all Pydantic models used in My Wallet.
All data flowing through the system must conform to these schemas.
"""

from mywallet.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from mywallet.models.budget import Budget, BudgetUpdate
from mywallet.models.preferences import UserSettings
from mywallet.models.reference import (
    CATEGORIES,
    PAYMENT_METHODS,
    Category,
    CategoryId,
    PaymentMethod,
    PaymentMethodId,
    TransactionType,
    categories_for,
    get_category,
    get_payment_method,
)
from mywallet.models.reports import (
    BudgetOverview,
    BudgetStatus,
    CashFlowBucket,
    CashFlowSeries,
    CategorySpending,
    CategoryTrendPoint,
    DashboardSummary,
    MonthlyStats,
    TimeFrame,
)
from mywallet.models.snapshot import SNAPSHOT_VERSION, Snapshot
from mywallet.models.transaction import Transaction, TransactionUpdate

__all__ = [
    # Reference data
    "CATEGORIES",
    "PAYMENT_METHODS",
    "Category",
    "CategoryId",
    "PaymentMethod",
    "PaymentMethodId",
    "TransactionType",
    "categories_for",
    "get_category",
    "get_payment_method",
    # Wallet records
    "Budget",
    "BudgetUpdate",
    "Transaction",
    "TransactionUpdate",
    "UserSettings",
    "SNAPSHOT_VERSION",
    "Snapshot",
    # Reports
    "BudgetOverview",
    "BudgetStatus",
    "CashFlowBucket",
    "CashFlowSeries",
    "CategorySpending",
    "CategoryTrendPoint",
    "DashboardSummary",
    "MonthlyStats",
    "TimeFrame",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
