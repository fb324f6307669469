"""Shared helpers for TradeLedger CLI commands."""

from decimal import Decimal

import click
from rich.console import Console
from rich.panel import Panel

from tradeledger.config import AppConfig, load_config
from tradeledger.formatting import format_currency, format_currency_with_sign

console = Console()


def get_config() -> AppConfig:
    """Load configuration for the current invocation."""
    return load_config()


def get_store(config: AppConfig | None = None):
    """Get the ledger store backed by the configured SQLite database."""
    from tradeledger.db.store import SqliteStore
    from tradeledger.ledger.store import LedgerStore

    config = config or get_config()
    kv = SqliteStore(config.db_path, namespace=config.namespace)
    return LedgerStore(kv, daily_limit=config.daily_trade_limit)


def money(amount: Decimal, config: AppConfig) -> str:
    return format_currency(amount, config.currency_symbol)


def signed_money(amount: Decimal, config: AppConfig) -> str:
    """Signed amount with rich colour markup."""
    color = "green" if amount >= 0 else "red"
    return f"[{color}]{format_currency_with_sign(amount, config.currency_symbol)}[/{color}]"


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def warn(message: str) -> None:
    console.print(f"[yellow]{message}[/yellow]")


def time_option(help_text: str):
    """--time option defaulting to the current clock time."""
    from datetime import datetime

    return click.option(
        "--time",
        "at",
        default=lambda: datetime.now().strftime("%H:%M"),
        show_default="now",
        help=help_text,
    )


def date_option(help_text: str):
    """--date option defaulting to today."""
    from datetime import date

    return click.option(
        "--date",
        "day",
        type=click.DateTime(formats=["%Y-%m-%d"]),
        default=lambda: date.today().isoformat(),
        show_default="today",
        help=help_text,
    )
