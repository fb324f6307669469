"""Ledger store: owns the ledger state and enforces its invariants.

Every mutation validates its input, changes the in-memory state and then
writes the affected collections to the key-value store. If a write fails the
in-memory state stays ahead of the stored one; nothing is rolled back.
"""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tradeledger.db.store import KeyValueStore
from tradeledger.errors import (
    DailyLimitExceeded,
    InsufficientBalance,
    NotFound,
    ValidationError,
)
from tradeledger.ledger import activity, balance, equity
from tradeledger.ledger.clock import (
    Clock,
    IdGenerator,
    SystemClock,
    TimestampIdGenerator,
)
from tradeledger.models import (
    Deposit,
    LedgerState,
    RecordDepositInput,
    RecordTradeInput,
    RecordWithdrawalInput,
    Trade,
    Withdrawal,
)

logger = logging.getLogger(__name__)

TRADES_KEY = "trades"
DEPOSITS_KEY = "deposits"
WITHDRAWALS_KEY = "withdrawals"
STARTING_BALANCE_KEY = "startingBalance"

_TRADES = TypeAdapter(list[Trade])
_DEPOSITS = TypeAdapter(list[Deposit])
_WITHDRAWALS = TypeAdapter(list[Withdrawal])

InputT = TypeVar("InputT", bound=BaseModel)


def _parse_input(model: Type[InputT], data: Union[BaseModel, Mapping[str, Any]]) -> InputT:
    """Validate caller input into an input model.

    Raises:
        ValidationError: If a required field is missing or malformed.
    """
    if isinstance(data, model):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        raise ValidationError(
            f"Please fill all required fields with valid values: {', '.join(fields)}",
            fields=fields,
        ) from exc


class LedgerStore:
    """Single-account trading ledger.

    Holds trades, deposits, withdrawals and the starting balance. The
    current balance is always derived, never stored.
    """

    # Maximum trades that may be recorded for one calendar date
    MAX_TRADES_PER_DAY = 4

    def __init__(
        self,
        kv: KeyValueStore,
        clock: Optional[Clock] = None,
        ids: Optional[IdGenerator] = None,
        daily_limit: int = MAX_TRADES_PER_DAY,
    ):
        """Initialize the ledger store and load any persisted state.

        Args:
            kv: Key-value store to load from and persist to.
            clock: Source of today's date. Defaults to the system clock.
            ids: Record id generator. Defaults to millisecond timestamps.
            daily_limit: Maximum trades per calendar date, 1 to 4.

        Raises:
            ValidationError: If ``daily_limit`` is outside 1 to 4.
        """
        if not 1 <= daily_limit <= self.MAX_TRADES_PER_DAY:
            raise ValidationError(
                f"Daily trade limit must be between 1 and {self.MAX_TRADES_PER_DAY}",
                fields=["daily_limit"],
            )
        self._kv = kv
        self._clock = clock or SystemClock()
        self._ids = ids or TimestampIdGenerator()
        self.daily_limit = daily_limit
        self._state = self._load_state()

        for record in (*self._state.trades, *self._state.deposits, *self._state.withdrawals):
            self._ids.observe(record.id)

    # ==================== Loading / Persistence ====================

    def _load_list(self, key: str, adapter: TypeAdapter) -> list:
        raw = self._kv.get(key)
        if not raw:
            return []
        try:
            return adapter.validate_json(raw)
        except PydanticValidationError as exc:
            logger.warning("Ignoring unreadable %s data: %s", key, exc.error_count())
            return []

    def _load_starting_balance(self) -> Decimal:
        raw = self._kv.get(STARTING_BALANCE_KEY)
        if not raw:
            return Decimal("0")
        try:
            value = Decimal(raw)
        except InvalidOperation:
            value = None
        if value is None or not value.is_finite():
            logger.warning("Ignoring unreadable starting balance %r", raw)
            return Decimal("0")
        return value

    def _load_state(self) -> LedgerState:
        state = LedgerState(
            trades=self._load_list(TRADES_KEY, _TRADES),
            deposits=self._load_list(DEPOSITS_KEY, _DEPOSITS),
            withdrawals=self._load_list(WITHDRAWALS_KEY, _WITHDRAWALS),
            starting_balance=self._load_starting_balance(),
        )
        logger.debug(
            "Loaded %d trades, %d deposits, %d withdrawals, starting balance %s",
            len(state.trades),
            len(state.deposits),
            len(state.withdrawals),
            state.starting_balance,
        )
        return state

    def _save_trades(self) -> None:
        self._kv.set(TRADES_KEY, _TRADES.dump_json(self._state.trades, by_alias=True).decode())

    def _save_deposits(self) -> None:
        self._kv.set(
            DEPOSITS_KEY, _DEPOSITS.dump_json(self._state.deposits, by_alias=True).decode()
        )

    def _save_withdrawals(self) -> None:
        self._kv.set(
            WITHDRAWALS_KEY,
            _WITHDRAWALS.dump_json(self._state.withdrawals, by_alias=True).decode(),
        )

    def _save_starting_balance(self) -> None:
        self._kv.set(STARTING_BALANCE_KEY, str(self._state.starting_balance))

    def _save_all(self) -> None:
        self._save_starting_balance()
        self._save_deposits()
        self._save_trades()
        self._save_withdrawals()

    # ==================== Trades ====================

    def trades_on(self, day: date) -> list[Trade]:
        """Get the trades recorded for a calendar date."""
        return [t for t in self._state.trades if t.date == day]

    def remaining_trades_for(self, day: date) -> int:
        """Number of trades that can still be recorded for a date."""
        return max(self.daily_limit - len(self.trades_on(day)), 0)

    def record_trade(self, data: Union[RecordTradeInput, Mapping[str, Any]]) -> Trade:
        """Record a trade.

        Args:
            data: Trade fields: date, time, pair, direction and pnl are
                required; trade_number, strategy and notes are optional.

        Returns:
            The created trade.

        Raises:
            ValidationError: If a required field is missing or invalid.
            DailyLimitExceeded: If the date already holds the maximum trades.
        """
        entry = _parse_input(RecordTradeInput, data)
        if len(self.trades_on(entry.date)) >= self.daily_limit:
            raise DailyLimitExceeded(entry.date, self.daily_limit)

        trade = Trade(
            id=self._ids.next_id(),
            date=entry.date,
            time=entry.time,
            trade_number=entry.trade_number,
            pair=entry.pair,
            direction=entry.direction,
            strategy=entry.strategy or "Manual",
            pnl=entry.pnl,
            notes=entry.notes or "No notes",
        )
        self._state.trades.insert(0, trade)
        self._save_trades()

        logger.info(
            "Recorded trade %d: %s %s pnl=%s", trade.id, trade.pair, trade.direction, trade.pnl
        )
        return trade

    def delete_trade(self, trade_id: int) -> None:
        """Delete a trade by id.

        Raises:
            NotFound: If no trade has this id. The ledger is left unchanged.
        """
        remaining = [t for t in self._state.trades if t.id != trade_id]
        if len(remaining) == len(self._state.trades):
            raise NotFound("trade", trade_id)
        self._state.trades = remaining
        self._save_trades()
        logger.info("Deleted trade %d", trade_id)

    # ==================== Deposits ====================

    def record_deposit(self, data: Union[RecordDepositInput, Mapping[str, Any]]) -> Deposit:
        """Record a deposit, starting a new tracking period.

        The deposit amount becomes the starting balance. The deposit replaces
        any previous one, and all trades and withdrawals are cleared.

        Args:
            data: Deposit fields: date, time, broker and a positive amount.

        Returns:
            The created deposit.

        Raises:
            ValidationError: If a field is missing or the amount is not positive.
        """
        entry = _parse_input(RecordDepositInput, data)

        deposit = Deposit(
            id=self._ids.next_id(),
            date=entry.date,
            time=entry.time,
            broker=entry.broker,
            amount=entry.amount,
            notes=entry.notes or "Deposit",
            balance_before=self._state.starting_balance,
            balance_after=entry.amount,
        )
        self._state.starting_balance = entry.amount
        self._state.deposits = [deposit]
        self._state.trades = []
        self._state.withdrawals = []
        self._save_all()

        logger.info("Recorded deposit %d: starting balance set to %s", deposit.id, deposit.amount)
        return deposit

    def delete_deposit(self, deposit_id: int) -> None:
        """Delete a deposit by id.

        Once no deposit remains the ledger is reset: starting balance 0, no
        trades, no withdrawals.

        Raises:
            NotFound: If no deposit has this id.
        """
        remaining = [d for d in self._state.deposits if d.id != deposit_id]
        if len(remaining) == len(self._state.deposits):
            raise NotFound("deposit", deposit_id)

        self._state.deposits = remaining
        if not remaining:
            self._state.starting_balance = Decimal("0")
            self._state.trades = []
            self._state.withdrawals = []
        self._save_all()
        logger.info("Deleted deposit %d", deposit_id)

    # ==================== Withdrawals ====================

    def record_withdrawal(
        self, data: Union[RecordWithdrawalInput, Mapping[str, Any]]
    ) -> Withdrawal:
        """Record a withdrawal.

        Args:
            data: Withdrawal fields: date, time, broker and a positive amount.

        Returns:
            The created withdrawal.

        Raises:
            ValidationError: If a field is missing or the amount is not positive.
            InsufficientBalance: If the amount exceeds the current balance.
        """
        entry = _parse_input(RecordWithdrawalInput, data)
        available = balance.current_balance(self._state)
        if entry.amount > available:
            raise InsufficientBalance(entry.amount, available)

        withdrawal = Withdrawal(
            id=self._ids.next_id(),
            date=entry.date,
            time=entry.time,
            broker=entry.broker,
            amount=entry.amount,
            notes=entry.notes or "Withdrawal",
            balance_before=available,
            balance_after=available - entry.amount,
        )
        self._state.withdrawals.insert(0, withdrawal)
        self._save_withdrawals()

        logger.info(
            "Recorded withdrawal %d: %s (balance %s -> %s)",
            withdrawal.id,
            withdrawal.amount,
            withdrawal.balance_before,
            withdrawal.balance_after,
        )
        return withdrawal

    def delete_withdrawal(self, withdrawal_id: int) -> None:
        """Delete a withdrawal by id.

        Raises:
            NotFound: If no withdrawal has this id.
        """
        remaining = [w for w in self._state.withdrawals if w.id != withdrawal_id]
        if len(remaining) == len(self._state.withdrawals):
            raise NotFound("withdrawal", withdrawal_id)
        self._state.withdrawals = remaining
        self._save_withdrawals()
        logger.info("Deleted withdrawal %d", withdrawal_id)

    # ==================== Reset ====================

    def clear_all(self) -> None:
        """Delete every record and reset the starting balance to 0."""
        self._state.trades = []
        self._state.deposits = []
        self._state.withdrawals = []
        self._state.starting_balance = Decimal("0")
        self._save_all()
        logger.info("Cleared all ledger data")

    # ==================== Queries ====================

    @property
    def state(self) -> LedgerState:
        """The live ledger state. Mutate only through the store."""
        return self._state

    @property
    def starting_balance(self) -> Decimal:
        return self._state.starting_balance

    def get_current_balance(self) -> Decimal:
        return balance.current_balance(self._state)

    def get_derived_stats(self) -> balance.DerivedStats:
        return balance.derived_stats(self._state)

    def get_equity_series(
        self, window: Union[str, equity.EquityWindow] = equity.EquityWindow.RECENT
    ) -> equity.EquitySeries:
        return equity.build_equity_series(self._state, window, self._clock.today())

    def get_period_stats(self) -> activity.PeriodStats:
        return activity.period_stats(self._state, self._clock.today(), self.daily_limit)

    def get_recent_activity(self, limit: int = 10) -> list[activity.ActivityItem]:
        return activity.recent_activity(self._state, limit)

    def get_transaction_history(
        self, kind: activity.TransactionKind = "all"
    ) -> list[activity.ActivityItem]:
        return activity.transaction_history(self._state, kind)

    def get_calendar_month(self, year: int, month: int) -> list[activity.CalendarDay]:
        return activity.calendar_month(self._state, year, month, self._clock.today())

    def list_trades(self) -> list[Trade]:
        """Trades sorted by (date, time), newest first."""
        return activity.newest_first(self._state.trades)

    def list_deposits(self) -> list[Deposit]:
        """Deposits sorted by (date, time), newest first."""
        return activity.newest_first(self._state.deposits)

    def list_withdrawals(self) -> list[Withdrawal]:
        """Withdrawals sorted by (date, time), newest first."""
        return activity.newest_first(self._state.withdrawals)
