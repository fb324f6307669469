"""Ledger state model."""

from decimal import Decimal
from pydantic import BaseModel, Field

from tradeledger.models.trade import Trade
from tradeledger.models.transfer import Deposit, Withdrawal


class LedgerState(BaseModel):
    """The complete, mutable ledger owned by a LedgerStore.

    Collections are kept most-recent-first. Display ordering is re-derived
    from ``(date, time)`` at query time.
    """

    trades: list[Trade] = Field(default_factory=list)
    deposits: list[Deposit] = Field(default_factory=list)
    withdrawals: list[Withdrawal] = Field(default_factory=list)
    starting_balance: Decimal = Field(default=Decimal("0"))
