"""Trade commands for TradeLedger CLI.

Handles recording, listing and deleting trades.
"""

import click
from rich.panel import Panel
from rich.table import Table

from tradeledger.cli.common import (
    console,
    date_option,
    fail,
    get_config,
    get_store,
    money,
    signed_money,
    time_option,
    warn,
)
from tradeledger.errors import LedgerError, NotFound
from tradeledger.formatting import format_date_time


@click.group()
def trade() -> None:
    """Record and review trades.

    \b
    Commands:
      add     - Record a trade (max 4 per day)
      list    - Show all trades, newest first
      delete  - Delete a trade by ID
    """
    pass


@trade.command()
@date_option("Trade date (YYYY-MM-DD).")
@time_option("Trade time (HH:MM).")
@click.option("--pair", required=True, help="Instrument symbol, e.g. EURUSD.")
@click.option(
    "--direction",
    type=click.Choice(["buy", "sell"], case_sensitive=False),
    required=True,
    help="Trade direction.",
)
@click.option("--pnl", required=True, help="Realized profit (positive) or loss (negative).")
@click.option("--number", "trade_number", type=int, default=1, show_default=True,
              help="Trade number within the day (1-4).")
@click.option("--strategy", default=None, help="Strategy label.")
@click.option("--notes", default=None, help="Free text notes.")
def add(day, at, pair, direction, pnl, trade_number, strategy, notes) -> None:
    """Record a trade.

    \b
    Examples:
      tradeledger trade add --pair EURUSD --direction buy --pnl 50
      tradeledger trade add --pair GBPUSD --direction sell --pnl -20 --date 2024-01-02
    """
    config = get_config()
    store = get_store(config)

    try:
        recorded = store.record_trade({
            "date": day.date(),
            "time": at,
            "pair": pair,
            "direction": direction,
            "pnl": pnl,
            "trade_number": trade_number,
            "strategy": strategy,
            "notes": notes,
        })
    except LedgerError as exc:
        fail(str(exc))

    remaining = store.remaining_trades_for(recorded.date)
    console.print(Panel(
        f"[bold]{recorded.pair}[/bold] {recorded.direction.upper()}  "
        f"P&L: {signed_money(recorded.pnl, config)}\n"
        f"Balance: [cyan]{money(store.get_current_balance(), config)}[/cyan]\n"
        f"[dim]{remaining} trade(s) left for {recorded.date.isoformat()}[/dim]",
        title=f"[bold green]Trade {recorded.id} saved[/bold green]",
        border_style="green",
    ))


@trade.command(name="list")
def list_trades() -> None:
    """Show all trades, newest first."""
    config = get_config()
    store = get_store(config)
    trades = store.list_trades()

    if not trades:
        console.print("[dim]No trades recorded yet.[/dim]")
        return

    table = Table(title="Trades")
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("#", justify="right")
    table.add_column("Pair", style="cyan")
    table.add_column("Side")
    table.add_column("Strategy")
    table.add_column("P&L", justify="right")
    table.add_column("Result")

    for t in trades:
        side_color = "green" if t.direction == "buy" else "red"
        result = "[green]WIN[/green]" if t.pnl >= 0 else "[red]LOSS[/red]"
        table.add_row(
            str(t.id),
            format_date_time(t.date, t.time),
            str(t.trade_number),
            t.pair,
            f"[{side_color}]{t.direction.upper()}[/{side_color}]",
            t.strategy,
            signed_money(t.pnl, config),
            result,
        )

    console.print(table)


@trade.command()
@click.argument("trade_id", type=int)
def delete(trade_id: int) -> None:
    """Delete a trade by ID."""
    config = get_config()
    store = get_store(config)

    try:
        store.delete_trade(trade_id)
    except NotFound as exc:
        warn(str(exc))
        return

    console.print(f"[green]Trade {trade_id} deleted.[/green] "
                  f"Balance: {money(store.get_current_balance(), config)}")
