"""Input models for ledger mutations.

Inputs are validated at the ledger store boundary. They carry only what the
caller supplies; ids and balance snapshots are assigned by the store.
"""

from datetime import date as date_type
from datetime import time as time_type
from decimal import Decimal
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator


class RecordTradeInput(BaseModel):
    """Fields needed to record a trade."""

    date: date_type = Field(..., description="Trade date")
    time: time_type = Field(..., description="Trade time")
    pair: str = Field(..., min_length=1, description="Instrument symbol")
    direction: Literal["buy", "sell"] = Field(..., description="Trade direction")
    pnl: Decimal = Field(..., description="Signed profit/loss")
    trade_number: int = Field(default=1, ge=1, le=4, alias="tradeNumber")
    strategy: Optional[str] = Field(default=None, description="Strategy label")
    notes: Optional[str] = Field(default=None, description="User notes")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }

    @field_validator("direction", mode="before")
    @classmethod
    def _lowercase_direction(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class RecordTransferInput(BaseModel):
    """Fields needed to record a deposit or withdrawal."""

    date: date_type = Field(..., description="Transfer date")
    time: time_type = Field(..., description="Transfer time")
    broker: str = Field(..., min_length=1, description="Broker label")
    amount: Decimal = Field(..., gt=0, description="Amount, must be positive")
    notes: Optional[str] = Field(default=None, description="User notes")

    model_config = {"frozen": True, "str_strip_whitespace": True}


class RecordDepositInput(RecordTransferInput):
    """Fields needed to record a deposit."""


class RecordWithdrawalInput(RecordTransferInput):
    """Fields needed to record a withdrawal."""
