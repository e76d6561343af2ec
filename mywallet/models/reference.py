"""
Reference Data

Categories and payment methods are a fixed table, not user data. They are
modelled as closed enums so a typo in stored data fails validation at the
model boundary instead of silently creating a new category.

DESIGN DECISION: Lookup by id never raises. An id that is not in the
table resolves to the explicit OTHER entry, which the UI renders with the
generic icon.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class TransactionType(str, Enum):
    """Direction of a transaction. Amounts are magnitudes; this carries the sign."""
    INCOME = "income"
    EXPENSE = "expense"


class CategoryId(str, Enum):
    """Supported transaction categories."""
    # Income
    SALARY = "salary"
    FREELANCE = "freelance"
    INVESTMENTS = "investments"
    GIFTS = "gifts"
    INCOME = "income"

    # Expense
    FOOD = "food"
    HOUSING = "housing"
    TRANSPORTATION = "transportation"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    HEALTH = "health"
    EDUCATION = "education"
    BILLS = "bills"
    SUBSCRIPTIONS = "subscriptions"
    PERSONAL = "personal"
    TRAVEL = "travel"
    SAVINGS = "savings"
    OTHER = "other"


class PaymentMethodId(str, Enum):
    """Supported payment methods."""
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    BANK_TRANSFER = "bank_transfer"
    DIGITAL_WALLET = "digital_wallet"
    CHECK = "check"
    OTHER = "other"


class Category(BaseModel):
    """A row of the category reference table."""
    model_config = ConfigDict(frozen=True)

    id: CategoryId
    name: str
    icon: str
    type: TransactionType


class PaymentMethod(BaseModel):
    """A row of the payment method reference table."""
    model_config = ConfigDict(frozen=True)

    id: PaymentMethodId
    name: str
    icon: str


CATEGORIES: tuple[Category, ...] = (
    Category(id=CategoryId.SALARY, name="Salary", icon="account_balance", type=TransactionType.INCOME),
    Category(id=CategoryId.FREELANCE, name="Freelance", icon="work", type=TransactionType.INCOME),
    Category(id=CategoryId.INVESTMENTS, name="Investments", icon="trending_up", type=TransactionType.INCOME),
    Category(id=CategoryId.GIFTS, name="Gifts", icon="card_giftcard", type=TransactionType.INCOME),
    Category(id=CategoryId.INCOME, name="Income", icon="attach_money", type=TransactionType.INCOME),
    Category(id=CategoryId.FOOD, name="Food & Groceries", icon="restaurant", type=TransactionType.EXPENSE),
    Category(id=CategoryId.HOUSING, name="Housing", icon="home", type=TransactionType.EXPENSE),
    Category(id=CategoryId.TRANSPORTATION, name="Transportation", icon="directions_car", type=TransactionType.EXPENSE),
    Category(id=CategoryId.ENTERTAINMENT, name="Entertainment", icon="sports_esports", type=TransactionType.EXPENSE),
    Category(id=CategoryId.SHOPPING, name="Shopping", icon="shopping_bag", type=TransactionType.EXPENSE),
    Category(id=CategoryId.HEALTH, name="Health", icon="favorite", type=TransactionType.EXPENSE),
    Category(id=CategoryId.EDUCATION, name="Education", icon="school", type=TransactionType.EXPENSE),
    Category(id=CategoryId.BILLS, name="Bills & Utilities", icon="receipt", type=TransactionType.EXPENSE),
    Category(id=CategoryId.SUBSCRIPTIONS, name="Subscriptions", icon="subscriptions", type=TransactionType.EXPENSE),
    Category(id=CategoryId.PERSONAL, name="Personal Care", icon="spa", type=TransactionType.EXPENSE),
    Category(id=CategoryId.TRAVEL, name="Travel", icon="flight", type=TransactionType.EXPENSE),
    Category(id=CategoryId.SAVINGS, name="Savings", icon="savings", type=TransactionType.EXPENSE),
    Category(id=CategoryId.OTHER, name="Other", icon="category", type=TransactionType.EXPENSE),
)

PAYMENT_METHODS: tuple[PaymentMethod, ...] = (
    PaymentMethod(id=PaymentMethodId.CASH, name="Cash", icon="payments"),
    PaymentMethod(id=PaymentMethodId.CREDIT_CARD, name="Credit Card", icon="credit_card"),
    PaymentMethod(id=PaymentMethodId.DEBIT_CARD, name="Debit Card", icon="credit_card"),
    PaymentMethod(id=PaymentMethodId.BANK_TRANSFER, name="Bank Transfer", icon="account_balance"),
    PaymentMethod(id=PaymentMethodId.DIGITAL_WALLET, name="Digital Wallet", icon="account_balance_wallet"),
    PaymentMethod(id=PaymentMethodId.CHECK, name="Check", icon="money"),
    PaymentMethod(id=PaymentMethodId.OTHER, name="Other", icon="more_horiz"),
)

_CATEGORIES_BY_ID = {category.id.value: category for category in CATEGORIES}
_PAYMENT_METHODS_BY_ID = {method.id.value: method for method in PAYMENT_METHODS}


def get_category(category_id: Union[CategoryId, str, None]) -> Category:
    """Look up a category, falling back to OTHER for unknown ids."""
    key = category_id.value if isinstance(category_id, CategoryId) else category_id
    return _CATEGORIES_BY_ID.get(key, _CATEGORIES_BY_ID[CategoryId.OTHER.value])


def get_payment_method(method_id: Union[PaymentMethodId, str, None]) -> PaymentMethod:
    """Look up a payment method, falling back to OTHER for unknown ids."""
    key = method_id.value if isinstance(method_id, PaymentMethodId) else method_id
    return _PAYMENT_METHODS_BY_ID.get(key, _PAYMENT_METHODS_BY_ID[PaymentMethodId.OTHER.value])


def categories_for(type_: Optional[TransactionType] = None) -> list[Category]:
    """All categories, or only those of one transaction type."""
    if type_ is None:
        return list(CATEGORIES)
    return [category for category in CATEGORIES if category.type == type_]
