"""Position size calculator."""

from decimal import Decimal
from typing import Union

from pydantic import BaseModel, Field

from tradeledger.errors import ValidationError

# Value of one pip per standard lot
PIP_VALUE_PER_LOT = Decimal("10")


class PositionSize(BaseModel):
    """Result of a position size calculation."""

    risk_amount: Decimal = Field(..., ge=0, description="Money at risk")
    lots: Decimal = Field(..., ge=0, description="Position size in lots")

    model_config = {"frozen": True}


def position_size(
    balance: Union[Decimal, int, str],
    risk_percent: Union[Decimal, int, str],
    stop_loss_pips: Union[Decimal, int, str],
) -> PositionSize:
    """Calculate how large a position can be for a given risk.

    Args:
        balance: Account balance.
        risk_percent: Percentage of the balance to risk.
        stop_loss_pips: Stop-loss distance in pips.

    Returns:
        Risk amount and position size in lots.

    Raises:
        ValidationError: If any value is negative or the stop loss is not positive.
    """
    balance = Decimal(str(balance))
    risk_percent = Decimal(str(risk_percent))
    stop_loss_pips = Decimal(str(stop_loss_pips))

    if stop_loss_pips <= 0:
        raise ValidationError("Stop loss must be positive", fields=["stop_loss_pips"])
    if balance < 0 or risk_percent < 0:
        raise ValidationError(
            "Balance and risk percent must not be negative",
            fields=["balance", "risk_percent"],
        )

    risk_amount = balance * risk_percent / Decimal("100")
    lots = risk_amount / (stop_loss_pips * PIP_VALUE_PER_LOT)
    return PositionSize(risk_amount=risk_amount, lots=lots)
