"""Activity feeds, calendar and period summaries derived from a ledger."""

import calendar
from datetime import date, timedelta
from datetime import date as date_type
from datetime import time as time_type
from decimal import Decimal
from typing import Literal, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field

from tradeledger.errors import ValidationError
from tradeledger.ledger.balance import ZERO
from tradeledger.models import Deposit, LedgerState, Trade, Withdrawal

R = TypeVar("R")

TransactionKind = Literal["all", "deposits", "withdrawals"]


def newest_first(records: Sequence[R]) -> list[R]:
    """Sort records by (date, time) descending.

    The sort is stable, so records sharing a timestamp keep their stored
    (most-recent-first) order.
    """
    return sorted(records, key=lambda r: (r.date, r.time), reverse=True)


class ActivityItem(BaseModel):
    """One row of the combined activity feed."""

    kind: Literal["trade", "deposit", "withdrawal"]
    id: int
    date: date_type
    time: time_type
    description: str
    amount: Decimal = Field(..., description="Signed effect on the account")
    status: Literal["WIN", "LOSS", "COMPLETED", "PROCESSED"]

    model_config = {"frozen": True}


def _trade_item(trade: Trade) -> ActivityItem:
    return ActivityItem(
        kind="trade",
        id=trade.id,
        date=trade.date,
        time=trade.time,
        description=f"{trade.pair} ({trade.direction.upper()})",
        amount=trade.pnl,
        status="WIN" if trade.pnl >= 0 else "LOSS",
    )


def _deposit_item(deposit: Deposit) -> ActivityItem:
    return ActivityItem(
        kind="deposit",
        id=deposit.id,
        date=deposit.date,
        time=deposit.time,
        description=deposit.broker,
        amount=deposit.amount,
        status="COMPLETED",
    )


def _withdrawal_item(withdrawal: Withdrawal) -> ActivityItem:
    return ActivityItem(
        kind="withdrawal",
        id=withdrawal.id,
        date=withdrawal.date,
        time=withdrawal.time,
        description=withdrawal.broker,
        amount=-withdrawal.amount,
        status="PROCESSED",
    )


def recent_activity(state: LedgerState, limit: int = 10) -> list[ActivityItem]:
    """Merge trades, deposits and withdrawals into one newest-first feed.

    Args:
        state: Ledger to read.
        limit: Maximum number of items to return.

    Returns:
        Up to ``limit`` activity items.
    """
    items = [_trade_item(t) for t in state.trades]
    items += [_deposit_item(d) for d in state.deposits]
    items += [_withdrawal_item(w) for w in state.withdrawals]
    return newest_first(items)[:limit]


def transaction_history(
    state: LedgerState, kind: TransactionKind = "all"
) -> list[ActivityItem]:
    """Deposits and/or withdrawals, newest first.

    Raises:
        ValidationError: If ``kind`` is not 'all', 'deposits' or 'withdrawals'.
    """
    if kind not in ("all", "deposits", "withdrawals"):
        raise ValidationError(f"Unknown transaction filter '{kind}'", fields=["kind"])

    items: list[ActivityItem] = []
    if kind in ("all", "deposits"):
        items += [_deposit_item(d) for d in state.deposits]
    if kind in ("all", "withdrawals"):
        items += [_withdrawal_item(w) for w in state.withdrawals]
    return newest_first(items)


class CalendarDay(BaseModel):
    """Trading outcome of a single calendar day."""

    date: date_type
    trade_count: int = Field(..., ge=0)
    pnl: Decimal
    outcome: Optional[Literal["profit", "loss"]] = None
    is_today: bool = False

    model_config = {"frozen": True}


def calendar_month(
    state: LedgerState, year: int, month: int, today: date
) -> list[CalendarDay]:
    """Per-day trade count and net P&L for one month.

    Days with no trades have no outcome. Days netting to exactly zero count
    as profit days.
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month {month}", fields=["month"])

    days_in_month = calendar.monthrange(year, month)[1]
    days = []
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        day_trades = [t for t in state.trades if t.date == day]
        pnl = sum((t.pnl for t in day_trades), ZERO)
        outcome = None
        if day_trades:
            outcome = "profit" if pnl >= 0 else "loss"
        days.append(
            CalendarDay(
                date=day,
                trade_count=len(day_trades),
                pnl=pnl,
                outcome=outcome,
                is_today=day == today,
            )
        )
    return days


class PeriodStats(BaseModel):
    """Trade counts and P&L for today and trailing windows."""

    today_pnl: Decimal
    today_trades: int = Field(..., ge=0)
    daily_limit: int = Field(..., ge=1)
    remaining_today: int = Field(..., ge=0)
    weekly_pnl: Decimal
    weekly_trades: int = Field(..., ge=0)
    monthly_pnl: Decimal
    monthly_trades: int = Field(..., ge=0)

    model_config = {"frozen": True}


def _since(trades: list[Trade], start: date) -> list[Trade]:
    return [t for t in trades if t.date >= start]


def period_stats(state: LedgerState, today: date, daily_limit: int) -> PeriodStats:
    """Summarize today, the trailing 7 days and the trailing 30 days."""
    today_trades = [t for t in state.trades if t.date == today]
    weekly = _since(state.trades, today - timedelta(days=7))
    monthly = _since(state.trades, today - timedelta(days=30))

    return PeriodStats(
        today_pnl=sum((t.pnl for t in today_trades), ZERO),
        today_trades=len(today_trades),
        daily_limit=daily_limit,
        remaining_today=max(daily_limit - len(today_trades), 0),
        weekly_pnl=sum((t.pnl for t in weekly), ZERO),
        weekly_trades=len(weekly),
        monthly_pnl=sum((t.pnl for t in monthly), ZERO),
        monthly_trades=len(monthly),
    )
