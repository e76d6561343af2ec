"""
Analytics Package

Pure aggregation functions over transaction and budget lists. Nothing
here touches storage; every function that depends on the clock takes an
optional `now`.
"""

from mywallet.analytics.balances import (
    balance_between,
    monthly_change,
    monthly_stats,
    total_balance,
)
from mywallet.analytics.budgets import budget_overview, budget_spent, budget_status
from mywallet.analytics.cashflow import cash_flow_series, monthly_overview
from mywallet.analytics.categories import category_spending, category_trend
from mywallet.analytics.periods import month_bounds

__all__ = [
    # Balances
    "balance_between",
    "monthly_change",
    "monthly_stats",
    "total_balance",
    # Categories
    "category_spending",
    "category_trend",
    # Cash flow
    "cash_flow_series",
    "monthly_overview",
    # Budgets
    "budget_overview",
    "budget_spent",
    "budget_status",
    # Periods
    "month_bounds",
]
