"""Tests for category spending and category trends."""

from datetime import datetime
from decimal import Decimal

from mywallet.analytics import category_spending, category_trend
from mywallet.models import CategoryId, TransactionType

from conftest import NOW, make_transaction


class TestCategorySpending:
    """Tests for category_spending."""

    def test_scenario_single_category(self):
        """Test the food-plus-salary scenario."""
        transactions = [
            make_transaction("-50", TransactionType.EXPENSE, CategoryId.FOOD, datetime(2024, 1, 5)),
            make_transaction("2000", TransactionType.INCOME, CategoryId.SALARY, datetime(2024, 1, 1)),
        ]
        result = category_spending(transactions)

        assert len(result) == 1
        assert result[0].category_id == CategoryId.FOOD
        assert result[0].amount == Decimal("50")
        assert result[0].percentage == 100.0
        assert result[0].count == 1
        assert result[0].name == "Food & Groceries"
        assert result[0].icon == "restaurant"

    def test_empty_and_income_only(self):
        """Test that no expenses gives an empty list."""
        assert category_spending([]) == []
        only_income = [make_transaction("10", TransactionType.INCOME, CategoryId.SALARY)]
        assert category_spending(only_income) == []

    def test_sorted_with_tie_break(self):
        """Test ordering by amount descending, then category id."""
        transactions = [
            make_transaction("30", category=CategoryId.TRAVEL),
            make_transaction("30", category=CategoryId.BILLS),
            make_transaction("40", category=CategoryId.HEALTH),
        ]
        result = category_spending(transactions)
        assert [c.category_id for c in result] == [
            CategoryId.HEALTH,
            CategoryId.BILLS,
            CategoryId.TRAVEL,
        ]

    def test_amounts_sum_to_total_expense(self):
        """Test that category amounts add up to total expense magnitude."""
        transactions = [
            make_transaction("12.34", category=CategoryId.FOOD),
            make_transaction("-7.66", category=CategoryId.FOOD),
            make_transaction("100", category=CategoryId.HOUSING),
            make_transaction("33.33", category=CategoryId.SHOPPING),
            make_transaction("500", TransactionType.INCOME, CategoryId.SALARY),
        ]
        result = category_spending(transactions)

        assert sum(c.amount for c in result) == Decimal("153.33")
        food = next(c for c in result if c.category_id == CategoryId.FOOD)
        assert food.amount == Decimal("20.00")
        assert food.count == 2
        assert food.percentage == 13.04

    def test_period_bounds(self):
        """Test the optional [start, end) filter."""
        transactions = [
            make_transaction("10", timestamp=datetime(2024, 1, 1)),
            make_transaction("20", timestamp=datetime(2024, 2, 1)),
        ]
        result = category_spending(transactions, start=datetime(2024, 1, 1), end=datetime(2024, 2, 1))
        assert [c.amount for c in result] == [Decimal("10")]


class TestCategoryTrend:
    """Tests for category_trend."""

    def test_dense_monthly_points(self):
        """Test one point per month, oldest first, even without data."""
        points = category_trend([], now=NOW, months=6)
        assert [p.label for p in points] == ["Aug", "Sep", "Oct", "Nov", "Dec", "Jan"]
        assert all(p.totals == {} for p in points)

    def test_totals_per_month(self):
        """Test expenses are split by month and category."""
        transactions = [
            make_transaction("10", category=CategoryId.FOOD, timestamp=datetime(2023, 12, 5)),
            make_transaction("5", category=CategoryId.FOOD, timestamp=datetime(2024, 1, 5)),
            make_transaction("7", category=CategoryId.HEALTH, timestamp=datetime(2024, 1, 6)),
            make_transaction("99", TransactionType.INCOME, CategoryId.SALARY, datetime(2024, 1, 1)),
        ]
        points = category_trend(transactions, now=NOW, months=2)

        assert points[0].start == datetime(2023, 12, 1)
        assert points[0].totals == {CategoryId.FOOD: Decimal("10")}
        assert points[1].totals == {
            CategoryId.FOOD: Decimal("5"),
            CategoryId.HEALTH: Decimal("7"),
        }
