"""Equity curve construction.

Balance-changing events (trade P&L, withdrawals) are bucketed by day or by
month, netted within each bucket and accumulated on top of the starting
balance. Days or months without activity are absent from the series rather
than zero-filled.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Union

from pydantic import BaseModel, Field

from tradeledger.errors import ValidationError
from tradeledger.formatting import format_date
from tradeledger.models import LedgerState

RECENT_WINDOW_DAYS = 30
ANNUAL_WINDOW_MONTHS = 12
START_LABEL = "Start"


class EquityWindow(str, Enum):
    """Time window of an equity series."""

    RECENT = "recent"  # daily buckets, trailing 30 days
    ANNUAL = "annual"  # monthly buckets, latest 12 active months


class EquityPoint(BaseModel):
    """A single labelled balance in the series."""

    label: str = Field(..., description="Bucket label ('Start', 'Jan 2', \"Jan '24\")")
    balance: Decimal = Field(..., description="Running balance after the bucket")

    model_config = {"frozen": True}


class EquitySeries(BaseModel):
    """Cumulative balance series with peak and drawdown statistics."""

    window: EquityWindow
    points: list[EquityPoint] = Field(..., min_length=1)
    peak: Decimal = Field(..., description="Highest balance in the series")
    drawdown: Decimal = Field(..., description="Percent decline from peak to last balance")

    model_config = {"frozen": True}

    @property
    def labels(self) -> list[str]:
        return [p.label for p in self.points]

    @property
    def balances(self) -> list[Decimal]:
        return [p.balance for p in self.points]

    @property
    def last_balance(self) -> Decimal:
        return self.points[-1].balance


def collect_events(state: LedgerState) -> list[tuple[date, Decimal]]:
    """Collect dated balance changes from trades and withdrawals.

    Deposits contribute nothing; their effect is the starting balance.
    Zero-amount events are skipped.
    """
    events = [(t.date, t.pnl) for t in state.trades if t.pnl != 0]
    events.extend((w.date, -w.amount) for w in state.withdrawals if w.amount != 0)
    return events


def monthly_label(month_key: str) -> str:
    """Short label for a 'YYYY-MM' bucket, e.g. "Jan '24"."""
    first = date.fromisoformat(f"{month_key}-01")
    return f"{first:%b} '{first:%y}"


def _daily_buckets(
    events: list[tuple[date, Decimal]], today: date
) -> list[tuple[str, Decimal]]:
    cutoff = today - timedelta(days=RECENT_WINDOW_DAYS)
    sums: dict[date, Decimal] = defaultdict(Decimal)
    for day, amount in events:
        # events dated after today are kept
        if day >= cutoff:
            sums[day] += amount
    return [(format_date(day), sums[day]) for day in sorted(sums)]


def _monthly_buckets(events: list[tuple[date, Decimal]]) -> list[tuple[str, Decimal]]:
    sums: dict[str, Decimal] = defaultdict(Decimal)
    for day, amount in events:
        sums[f"{day:%Y-%m}"] += amount
    months = sorted(sums)[-ANNUAL_WINDOW_MONTHS:]
    return [(monthly_label(month), sums[month]) for month in months]


def parse_window(window: Union[str, EquityWindow]) -> EquityWindow:
    """Coerce a window name to an EquityWindow.

    Raises:
        ValidationError: If the name is not a known window.
    """
    try:
        return EquityWindow(window)
    except ValueError:
        choices = ", ".join(w.value for w in EquityWindow)
        raise ValidationError(
            f"Unknown equity window '{window}' (expected one of: {choices})",
            fields=["window"],
        ) from None


def build_equity_series(
    state: LedgerState,
    window: Union[str, EquityWindow],
    today: date,
) -> EquitySeries:
    """Build the cumulative balance series for a window.

    Args:
        state: Ledger to chart.
        window: 'recent' for daily buckets over the trailing 30 days
            (lower bound inclusive), 'annual' for monthly buckets over the
            latest 12 months with activity.
        today: Reference date for the recent window.

    Returns:
        EquitySeries starting at ``("Start", starting_balance)``.
    """
    window = parse_window(window)
    events = collect_events(state)
    if window is EquityWindow.RECENT:
        buckets = _daily_buckets(events, today)
    else:
        buckets = _monthly_buckets(events)

    running = state.starting_balance
    points = [EquityPoint(label=START_LABEL, balance=running)]
    for label, change in buckets:
        running += change
        points.append(EquityPoint(label=label, balance=running))

    peak = max(p.balance for p in points)
    last = points[-1].balance
    drawdown = (peak - last) / peak * Decimal("100") if peak > 0 else Decimal("0")

    return EquitySeries(window=window, points=points, peak=peak, drawdown=drawdown)
