"""CLI commands for TradeLedger.

This package provides the command-line shell around the ledger core:
recording trades and transfers, and reporting balances and equity.
"""

from tradeledger.cli.main import cli, main

__all__ = ["cli", "main"]
