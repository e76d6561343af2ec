"""
Transaction Models

A transaction is a single income or expense event.

DESIGN DECISION: amount is always stored as a positive magnitude and
`type` says which way the money moved. Signed input (expenses recorded as
negative numbers, as older exports do) is normalized here, once, so no
calculation downstream ever has to guess which convention it is looking at.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    AliasChoices,
    Field,
    ValidationInfo,
    field_validator,
)

from mywallet.models.common import WalletModel, date_only_to_datetime, to_naive_local
from mywallet.models.reference import CategoryId, PaymentMethodId, TransactionType


def _new_id() -> str:
    return str(uuid4())


class Transaction(WalletModel):
    """A recorded income or expense."""

    id: str = Field(
        default_factory=_new_id,
        min_length=1,
        description="Local identifier (UUID string)"
    )
    # Declared before amount: the amount validator reads it
    type: TransactionType = Field(
        ...,
        description="income or expense"
    )
    amount: Decimal = Field(
        ...,
        description="Positive magnitude of the transaction"
    )
    category: CategoryId = Field(
        ...,
        description="Category from the reference table"
    )
    description: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Free text note"
    )
    timestamp: datetime = Field(
        ...,
        validation_alias=AliasChoices("timestamp", "date"),
        description="When the transaction happened (naive local time)"
    )
    payment_method: Optional[PaymentMethodId] = Field(
        default=None,
        validation_alias=AliasChoices("paymentMethod", "payment_method", "paymentMethodId"),
        description="How it was paid"
    )

    @field_validator('amount')
    @classmethod
    def normalize_amount(cls, v: Decimal, info: ValidationInfo) -> Decimal:
        """Store the magnitude; reject zero and negative income."""
        if v == 0:
            raise ValueError("Amount must be greater than zero")
        if v < 0:
            if info.data.get("type") == TransactionType.INCOME:
                raise ValueError("Income amount cannot be negative")
            v = -v
        return v

    @field_validator('timestamp', mode='before')
    @classmethod
    def accept_bare_dates(cls, v: Any) -> Any:
        return date_only_to_datetime(v)

    @field_validator('timestamp')
    @classmethod
    def strip_timezone(cls, v: datetime) -> datetime:
        return to_naive_local(v)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with income positive and expense negative."""
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class TransactionUpdate(WalletModel):
    """
    Partial update for a transaction.

    Only the fields that were set are merged onto the stored record, and
    the merged result is validated as a full Transaction again.
    """

    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = None
    category: Optional[CategoryId] = None
    description: Optional[str] = Field(default=None, max_length=500)
    timestamp: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("timestamp", "date"),
    )
    payment_method: Optional[PaymentMethodId] = Field(
        default=None,
        validation_alias=AliasChoices("paymentMethod", "payment_method", "paymentMethodId"),
    )

    @field_validator('timestamp', mode='before')
    @classmethod
    def accept_bare_dates(cls, v: Any) -> Any:
        return date_only_to_datetime(v)
