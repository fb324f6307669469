"""Balance derivation and trade statistics.

Everything here is a pure function of a LedgerState. Nothing is cached;
balances are recomputed on every call.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from tradeledger.models import LedgerState

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class DerivedStats(BaseModel):
    """Summary statistics derived from a ledger."""

    starting_balance: Decimal = Field(..., description="Balance P&L is measured from")
    current_balance: Decimal = Field(..., description="Starting balance + P&L - withdrawals")
    total_pnl: Decimal = Field(..., description="Net P&L across all trades")
    total_profit: Decimal = Field(..., ge=0, description="Sum of winning trade P&L")
    total_loss: Decimal = Field(..., ge=0, description="Absolute sum of losing trade P&L")
    total_trades: int = Field(..., ge=0)
    winning_trades: int = Field(..., ge=0)
    losing_trades: int = Field(..., ge=0)
    win_rate: Decimal = Field(..., ge=0, le=100, description="Win rate percentage")
    buys: int = Field(..., ge=0)
    sells: int = Field(..., ge=0)
    total_deposits: Decimal = Field(..., ge=0)
    total_withdrawals: Decimal = Field(..., ge=0)
    growth: Decimal = Field(..., description="Current balance minus starting balance")
    growth_percent: Decimal = Field(..., description="Growth relative to starting balance")

    model_config = {"frozen": True}


def total_pnl(state: LedgerState) -> Decimal:
    """Sum of P&L over all trades."""
    return sum((t.pnl for t in state.trades), ZERO)


def total_withdrawals(state: LedgerState) -> Decimal:
    """Sum of all withdrawal amounts."""
    return sum((w.amount for w in state.withdrawals), ZERO)


def current_balance(state: LedgerState) -> Decimal:
    """Derive the account balance.

    Deposits are not part of the sum: recording a deposit already set the
    starting balance.

    Args:
        state: Ledger to derive from.

    Returns:
        ``starting_balance + sum(trade.pnl) - sum(withdrawal.amount)``.
    """
    return state.starting_balance + total_pnl(state) - total_withdrawals(state)


def win_rate(winning: int, total: int) -> Decimal:
    """Percentage of winning trades, 0 when there are none."""
    if total == 0:
        return ZERO
    return Decimal(winning) / Decimal(total) * HUNDRED


def derived_stats(state: LedgerState) -> DerivedStats:
    """Calculate summary statistics for a ledger.

    Args:
        state: Ledger to summarize.

    Returns:
        DerivedStats for the ledger.
    """
    pnl_values = [t.pnl for t in state.trades]
    profits = [p for p in pnl_values if p > 0]
    losses = [p for p in pnl_values if p < 0]

    balance = current_balance(state)
    growth = balance - state.starting_balance
    if state.starting_balance > 0:
        growth_percent = growth / state.starting_balance * HUNDRED
    else:
        growth_percent = ZERO

    return DerivedStats(
        starting_balance=state.starting_balance,
        current_balance=balance,
        total_pnl=sum(pnl_values, ZERO),
        total_profit=sum(profits, ZERO),
        total_loss=abs(sum(losses, ZERO)),
        total_trades=len(pnl_values),
        winning_trades=len(profits),
        losing_trades=len(losses),
        win_rate=win_rate(len(profits), len(pnl_values)),
        buys=sum(1 for t in state.trades if t.direction == "buy"),
        sells=sum(1 for t in state.trades if t.direction == "sell"),
        total_deposits=sum((d.amount for d in state.deposits), ZERO),
        total_withdrawals=total_withdrawals(state),
        growth=growth,
        growth_percent=growth_percent,
    )
