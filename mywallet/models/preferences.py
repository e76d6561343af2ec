"""User preferences persisted under the "settings" key."""

from typing import Optional

from pydantic import Field

from mywallet.models.common import WalletModel
from mywallet.models.reference import PaymentMethodId


class UserSettings(WalletModel):
    """Per-user display and behaviour preferences."""

    language: str = Field(default="en", min_length=2, max_length=10)
    dark_mode: bool = False
    currency: str = Field(default="$", min_length=1, max_length=4)
    reminder_enabled: bool = False
    cloud_sync_enabled: bool = False
    default_payment_method: Optional[PaymentMethodId] = None
