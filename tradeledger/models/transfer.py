"""Deposit and Withdrawal data models."""

from datetime import date as date_type
from datetime import time as time_type
from decimal import Decimal
from pydantic import BaseModel, Field


class FundsTransfer(BaseModel):
    """Money moved into or out of the account.

    ``balance_before`` and ``balance_after`` are snapshots taken when the
    record is created and are never recomputed afterwards.
    """

    id: int = Field(..., description="Unique, creation-ordered record ID")
    date: date_type = Field(..., description="Transfer date")
    time: time_type = Field(..., description="Transfer time")
    broker: str = Field(..., min_length=1, description="Broker label")
    amount: Decimal = Field(..., gt=0, description="Transferred amount, always positive")
    notes: str = Field(default="", description="User notes")
    balance_before: Decimal = Field(
        ..., alias="balanceBefore", description="Balance before the transfer"
    )
    balance_after: Decimal = Field(
        ..., alias="balanceAfter", description="Balance after the transfer"
    )

    model_config = {"frozen": True, "populate_by_name": True}


class Deposit(FundsTransfer):
    """A deposit. Redefines the account's starting balance."""

    notes: str = Field(default="Deposit", description="User notes")


class Withdrawal(FundsTransfer):
    """A withdrawal. Subtracted from the running balance."""

    notes: str = Field(default="Withdrawal", description="User notes")
