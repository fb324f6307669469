"""TradeLedger - personal trading ledger with balance and equity tracking."""

__version__ = "0.1.0"
