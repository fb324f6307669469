"""Data models for TradeLedger."""

from tradeledger.models.trade import Trade
from tradeledger.models.transfer import Deposit, FundsTransfer, Withdrawal
from tradeledger.models.inputs import (
    RecordDepositInput,
    RecordTradeInput,
    RecordTransferInput,
    RecordWithdrawalInput,
)
from tradeledger.models.state import LedgerState

__all__ = [
    "Deposit",
    "FundsTransfer",
    "LedgerState",
    "RecordDepositInput",
    "RecordTradeInput",
    "RecordTransferInput",
    "RecordWithdrawalInput",
    "Trade",
    "Withdrawal",
]
