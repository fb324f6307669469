"""Trade data model."""

from datetime import date as date_type
from datetime import time as time_type
from decimal import Decimal
from typing import Literal
from pydantic import BaseModel, Field


class Trade(BaseModel):
    """Represents a recorded trade and its realized P&L."""

    id: int = Field(..., description="Unique, creation-ordered record ID")
    date: date_type = Field(..., description="Trade date")
    time: time_type = Field(..., description="Trade time, orders trades within a day")
    trade_number: int = Field(
        default=1, ge=1, le=4, alias="tradeNumber", description="Position within the day"
    )
    pair: str = Field(..., min_length=1, description="Instrument symbol (e.g., 'EURUSD')")
    direction: Literal["buy", "sell"] = Field(..., description="Trade direction")
    strategy: str = Field(default="Manual", description="Strategy label")
    pnl: Decimal = Field(..., description="Signed profit/loss")
    notes: str = Field(default="No notes", description="User notes")

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def is_win(self) -> bool:
        return self.pnl > 0

    @property
    def is_loss(self) -> bool:
        return self.pnl < 0
