"""
Main Orchestrator for My Wallet

This module ties the components together:
1. Storage backend (chosen from settings)
2. Stores for transactions, budgets and user settings
3. Reports computed from the stores
4. Snapshot export/import
5. Password hashing at the configured bcrypt cost

DESIGN DECISION: Settings are passed in, never looked up from inside the
core. create_app_components() is the only place that reads the
environment, and only when the caller does not hand it a Settings object.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

import structlog

from mywallet.analytics import (
    budget_overview,
    budget_status,
    cash_flow_series,
    category_spending,
    category_trend,
    monthly_change,
    monthly_overview,
    monthly_stats,
    total_balance,
)
from mywallet.analytics.periods import resolve_now
from mywallet.audit import AuditLogger
from mywallet.config import ReportSettings, Settings, get_settings
from mywallet.models.preferences import UserSettings
from mywallet.models.reports import (
    BudgetStatus,
    CashFlowSeries,
    CategoryTrendPoint,
    DashboardSummary,
    TimeFrame,
)
from mywallet.security import PasswordHasher
from mywallet.services.snapshot import SnapshotService
from mywallet.services.storage import KeyValueStore, create_key_value_store
from mywallet.stores import BudgetStore, PreferencesStore, TransactionStore


logger = structlog.get_logger(__name__)


class ReportService:
    """
    Computes the dashboard and report views from the current store contents.

    Window sizes come from ReportSettings; the clock can be pinned with
    `now` on every call.
    """

    def __init__(
        self,
        transactions: TransactionStore,
        budgets: BudgetStore,
        preferences: PreferencesStore,
        report_settings: Optional[ReportSettings] = None,
    ):
        self._transactions = transactions
        self._budgets = budgets
        self._preferences = preferences
        self._settings = report_settings or ReportSettings()

    def _window(self, time_frame: TimeFrame) -> int:
        return {
            TimeFrame.DAILY: self._settings.daily_window,
            TimeFrame.WEEKLY: self._settings.weekly_window,
            TimeFrame.MONTHLY: self._settings.monthly_window,
        }[time_frame]

    def cash_flow(
        self,
        time_frame: Union[TimeFrame, str] = TimeFrame.MONTHLY,
        now: Optional[datetime] = None,
    ) -> CashFlowSeries:
        time_frame = TimeFrame(time_frame)
        return cash_flow_series(
            self._transactions.all(),
            time_frame,
            now=now,
            periods=self._window(time_frame),
        )

    def monthly_overview(self, now: Optional[datetime] = None) -> CashFlowSeries:
        return monthly_overview(
            self._transactions.all(),
            now=now,
            periods=self._settings.monthly_window,
        )

    def category_trend(self, now: Optional[datetime] = None) -> list[CategoryTrendPoint]:
        return category_trend(
            self._transactions.all(),
            now=now,
            months=self._settings.monthly_window,
        )

    def budget_statuses(self, now: Optional[datetime] = None) -> list[BudgetStatus]:
        """Progress of every budget active at `now`."""
        transactions = self._transactions.all()
        return [
            budget_status(budget, transactions)
            for budget in self._budgets.list(as_of=now)
        ]

    def dashboard(
        self,
        now: Optional[datetime] = None,
        time_frame: Optional[Union[TimeFrame, str]] = None,
    ) -> DashboardSummary:
        """
        Everything the dashboard shows, computed against one clock reading.

        The cash-flow series is only included when a time frame is asked for.
        """
        now = resolve_now(now)
        transactions = self._transactions.all()
        budgets = self._budgets.all()

        summary = DashboardSummary(
            generated_at=now,
            currency=self._preferences.get().currency,
            total_balance=total_balance(transactions),
            monthly_change=monthly_change(transactions, now=now),
            monthly_stats=monthly_stats(transactions, now=now),
            category_spending=category_spending(transactions),
            budget_overview=budget_overview(budgets, transactions, now=now),
            budget_statuses=self.budget_statuses(now=now),
            recent_transactions=self._transactions.recent(self._settings.recent_limit),
            cash_flow=self.cash_flow(time_frame, now=now) if time_frame else None,
        )
        logger.debug(
            "dashboard_computed",
            transactions=len(transactions),
            budgets=len(budgets),
        )
        return summary


@dataclass
class WalletComponents:
    """Everything the app needs, wired to one storage backend."""

    settings: Settings
    storage: KeyValueStore
    audit_logger: AuditLogger
    transactions: TransactionStore
    budgets: BudgetStore
    preferences: PreferencesStore
    reports: ReportService
    snapshots: SnapshotService
    passwords: PasswordHasher


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStore] = None,
) -> WalletComponents:
    """
    Factory function to create all application components.

    Args:
        settings: Application settings. Loaded from the environment if None.
        storage: Key-value backend. Built from settings.storage if None;
                 pass a MemoryKeyValueStore for tests.

    Returns:
        WalletComponents sharing one storage backend and audit logger
    """
    settings = settings or get_settings()
    app_settings = settings.app

    if storage is None:
        storage = create_key_value_store(settings.storage)
        if not storage.is_available():
            logger.warning("storage_unavailable", backend=settings.storage.backend)

    audit_logger = AuditLogger(storage, limit=app_settings.audit_log_limit)

    transactions = TransactionStore(storage, audit_logger)
    budgets = BudgetStore(storage, audit_logger)
    preferences = PreferencesStore(
        storage,
        audit_logger,
        defaults=UserSettings(currency=app_settings.default_currency),
    )

    reports = ReportService(transactions, budgets, preferences, settings.report)
    snapshots = SnapshotService(transactions, budgets, preferences, audit_logger)
    passwords = PasswordHasher.from_settings(settings.security)

    logger.info(
        "app_components_created",
        environment=app_settings.app_environment,
        transactions=len(transactions),
        budgets=len(budgets),
    )

    return WalletComponents(
        settings=settings,
        storage=storage,
        audit_logger=audit_logger,
        transactions=transactions,
        budgets=budgets,
        preferences=preferences,
        reports=reports,
        snapshots=snapshots,
        passwords=passwords,
    )
