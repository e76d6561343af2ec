"""
My Wallet - Source Package

A local-first personal finance tracker: record income and expenses,
cap spending with category budgets, and read balances, category
breakdowns and cash-flow series off the raw transaction list.

DESIGN PRINCIPLES:
1. Amounts are magnitudes; the transaction type carries the sign
2. Reports are pure functions of the stored lists
3. Empty data is valid data, never an error
4. Storage is swappable behind one key-value interface
5. Every mutation is logged
"""

__version__ = "1.0.0"
__author__ = "My Wallet Team"
