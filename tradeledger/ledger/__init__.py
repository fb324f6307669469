"""Ledger core: state mutation, balance derivation and equity series."""

from tradeledger.ledger.balance import DerivedStats, current_balance, derived_stats
from tradeledger.ledger.equity import (
    EquityPoint,
    EquitySeries,
    EquityWindow,
    build_equity_series,
)
from tradeledger.ledger.store import LedgerStore

__all__ = [
    "DerivedStats",
    "EquityPoint",
    "EquitySeries",
    "EquityWindow",
    "LedgerStore",
    "build_equity_series",
    "current_balance",
    "derived_stats",
]
