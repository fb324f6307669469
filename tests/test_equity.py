"""Tests for equity series construction.

**Feature: trade-ledger**
"""

from datetime import date, time, timedelta
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradeledger.errors import ValidationError
from tradeledger.ledger.equity import (
    EquityWindow,
    build_equity_series,
    monthly_label,
)
from tradeledger.models import LedgerState, Trade, Withdrawal

TODAY = date(2024, 3, 31)


def trade(record_id: int, day: date, pnl: str) -> Trade:
    return Trade(
        id=record_id,
        date=day,
        time=time(10, 0),
        pair="EURUSD",
        direction="buy",
        pnl=Decimal(pnl),
    )


def withdrawal(record_id: int, day: date, amount: str) -> Withdrawal:
    return Withdrawal(
        id=record_id,
        date=day,
        time=time(15, 0),
        broker="XM",
        amount=Decimal(amount),
        balance_before=Decimal("0"),
        balance_after=Decimal("0"),
    )


class TestStartingPoint:
    """
    *For any* starting balance and an empty ledger, the series is the
    single 'Start' point.
    """

    @given(
        starting=st.decimals(min_value=0, max_value=100000, places=2),
        window=st.sampled_from(["recent", "annual"]),
    )
    @settings(max_examples=50)
    def test_empty_ledger_single_point(self, starting, window):
        series = build_equity_series(LedgerState(starting_balance=starting), window, TODAY)

        assert series.labels == ["Start"]
        assert series.balances == [starting]
        assert series.peak == starting
        assert series.drawdown == 0


class TestAccumulation:
    """
    *For any* set of events, balances accumulate bucket sums on top of the
    starting balance in chronological order.
    """

    def test_trade_then_withdrawal(self):
        state = LedgerState(
            trades=[trade(1, date(2024, 3, 10), "200")],
            withdrawals=[withdrawal(2, date(2024, 3, 12), "50")],
            starting_balance=Decimal("1000"),
        )
        series = build_equity_series(state, "recent", TODAY)

        assert series.balances == [Decimal("1000"), Decimal("1200"), Decimal("1150")]
        assert series.labels == ["Start", "Mar 10", "Mar 12"]

    def test_same_day_events_net_together(self):
        state = LedgerState(
            trades=[
                trade(2, date(2024, 3, 2), "-20"),
                trade(1, date(2024, 3, 2), "50"),
            ],
            withdrawals=[withdrawal(3, date(2024, 3, 3), "200")],
            starting_balance=Decimal("1000"),
        )
        series = build_equity_series(state, EquityWindow.RECENT, TODAY)

        assert series.balances == [Decimal("1000"), Decimal("1030"), Decimal("830")]
        assert series.last_balance == Decimal("830")

    def test_buckets_sorted_regardless_of_storage_order(self):
        state = LedgerState(
            trades=[
                trade(3, date(2024, 3, 20), "30"),
                trade(1, date(2024, 3, 5), "10"),
                trade(2, date(2024, 3, 15), "20"),
            ],
            starting_balance=Decimal("100"),
        )
        series = build_equity_series(state, "recent", TODAY)
        assert series.balances == [Decimal(v) for v in ("100", "110", "130", "160")]

    def test_deposits_are_not_events(self):
        state = LedgerState(starting_balance=Decimal("500"))
        series = build_equity_series(state, "recent", TODAY)
        assert series.balances == [Decimal("500")]

    def test_zero_pnl_trade_adds_no_point(self):
        state = LedgerState(
            trades=[trade(1, date(2024, 3, 20), "0")],
            starting_balance=Decimal("100"),
        )
        assert len(build_equity_series(state, "recent", TODAY).points) == 1

    @given(pnls=st.lists(
        st.decimals(min_value=-500, max_value=500, places=2).filter(lambda d: d != 0),
        min_size=1,
        max_size=25,
    ))
    @settings(max_examples=50)
    def test_last_point_is_balance_when_all_events_in_window(self, pnls):
        trades = [
            trade(i + 1, TODAY - timedelta(days=i), str(p)) for i, p in enumerate(pnls)
        ]
        state = LedgerState(trades=trades, starting_balance=Decimal("1000"))
        series = build_equity_series(state, "recent", TODAY)

        assert series.last_balance == Decimal("1000") + sum(pnls, Decimal("0"))
        assert len(series.points) == len(pnls) + 1


class TestRecentWindow:
    """
    *For any* event older than 30 days it is left out of the recent
    window; the lower bound itself is included.
    """

    def test_boundary_date_included(self):
        boundary = TODAY - timedelta(days=30)
        state = LedgerState(
            trades=[trade(1, boundary, "25")],
            starting_balance=Decimal("100"),
        )
        series = build_equity_series(state, "recent", TODAY)
        assert series.balances == [Decimal("100"), Decimal("125")]

    def test_older_events_excluded(self):
        state = LedgerState(
            trades=[
                trade(1, TODAY - timedelta(days=31), "500"),
                trade(2, TODAY - timedelta(days=1), "25"),
            ],
            starting_balance=Decimal("100"),
        )
        series = build_equity_series(state, "recent", TODAY)
        assert series.balances == [Decimal("100"), Decimal("125")]

    def test_future_dated_events_included(self):
        state = LedgerState(
            trades=[trade(1, TODAY + timedelta(days=3), "40")],
            starting_balance=Decimal("100"),
        )
        series = build_equity_series(state, "recent", TODAY)

        assert series.labels == ["Start", "Apr 3"]
        assert series.last_balance == Decimal("140")


class TestAnnualWindow:
    """
    *For any* history, the annual window uses monthly buckets and keeps
    the latest 12 months with activity.
    """

    def test_keeps_latest_twelve_months(self):
        trades = []
        day = date(2023, 1, 1)
        for i in range(14):
            trades.append(trade(i + 1, day, "10"))
            day = (day + timedelta(days=32)).replace(day=1)
        state = LedgerState(trades=trades, starting_balance=Decimal("1000"))

        series = build_equity_series(state, "annual", TODAY)

        assert len(series.points) == 13
        assert series.labels[1] == "Mar '23"
        assert series.labels[-1] == "Feb '24"
        assert series.last_balance == Decimal("1120")

    def test_month_nets_trades_and_withdrawals(self):
        state = LedgerState(
            trades=[
                trade(1, date(2024, 1, 5), "100"),
                trade(2, date(2024, 1, 20), "-40"),
                trade(3, date(2024, 2, 1), "10"),
            ],
            withdrawals=[withdrawal(4, date(2024, 1, 25), "30")],
            starting_balance=Decimal("1000"),
        )
        series = build_equity_series(state, "annual", TODAY)

        assert series.labels == ["Start", "Jan '24", "Feb '24"]
        assert series.balances == [Decimal("1000"), Decimal("1030"), Decimal("1040")]

    def test_annual_ignores_recent_cutoff(self):
        state = LedgerState(
            trades=[trade(1, date(2020, 6, 1), "5")],
            starting_balance=Decimal("10"),
        )
        assert build_equity_series(state, "annual", TODAY).last_balance == Decimal("15")
        assert build_equity_series(state, "recent", TODAY).last_balance == Decimal("10")


class TestPeakAndDrawdown:
    """
    *For any* series, the peak is its maximum balance and the drawdown the
    percentage drop from that peak to the last balance.
    """

    def test_drawdown_from_peak(self):
        state = LedgerState(
            trades=[
                trade(1, date(2024, 3, 10), "500"),
                trade(2, date(2024, 3, 11), "-300"),
            ],
            starting_balance=Decimal("1000"),
        )
        series = build_equity_series(state, "recent", TODAY)

        assert series.peak == Decimal("1500")
        assert series.drawdown == 20

    def test_no_drawdown_at_new_high(self):
        state = LedgerState(
            trades=[trade(1, date(2024, 3, 10), "100")],
            starting_balance=Decimal("1000"),
        )
        series = build_equity_series(state, "recent", TODAY)
        assert series.peak == Decimal("1100")
        assert series.drawdown == 0

    def test_zero_peak_has_zero_drawdown(self):
        series = build_equity_series(LedgerState(), "recent", TODAY)
        assert series.peak == 0
        assert series.drawdown == 0

    @given(pnls=st.lists(st.decimals(min_value=-100, max_value=100, places=2), max_size=20))
    @settings(max_examples=50)
    def test_peak_is_max_balance(self, pnls):
        trades = [trade(i + 1, TODAY - timedelta(days=i), str(p)) for i, p in enumerate(pnls)]
        state = LedgerState(trades=trades, starting_balance=Decimal("5000"))
        series = build_equity_series(state, "recent", TODAY)

        assert series.peak == max(series.balances)
        assert 0 <= series.drawdown <= 100


class TestLabelsAndWindows:
    """Bucket labels and window names."""

    def test_daily_label(self):
        state = LedgerState(trades=[trade(1, date(2024, 3, 2), "5")])
        assert build_equity_series(state, "recent", TODAY).labels == ["Start", "Mar 2"]

    def test_monthly_label(self):
        assert monthly_label("2024-01") == "Jan '24"

    def test_unknown_window_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            build_equity_series(LedgerState(), "weekly", TODAY)
        assert excinfo.value.fields == ["window"]
