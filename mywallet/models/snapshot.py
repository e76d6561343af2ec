"""
Snapshot Model

The full exportable state of one wallet as a single JSON document:
transactions, budgets and user settings. The same shape is used for
file export/import and for payloads received from a sync source.
"""

from datetime import datetime

from pydantic import Field

from mywallet.models.budget import Budget
from mywallet.models.common import WalletModel
from mywallet.models.preferences import UserSettings
from mywallet.models.transaction import Transaction


SNAPSHOT_VERSION = 1


class Snapshot(WalletModel):
    """Wholesale wallet state."""

    version: int = Field(default=SNAPSHOT_VERSION, ge=1)
    exported_at: datetime = Field(default_factory=datetime.now)
    transactions: list[Transaction] = Field(default_factory=list)
    budgets: list[Budget] = Field(default_factory=list)
    settings: UserSettings = Field(default_factory=UserSettings)
