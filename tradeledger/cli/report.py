"""Reporting commands for TradeLedger CLI.

Handles balance, statistics, equity curve, calendar and activity views.
"""

from datetime import date

import click
from rich.panel import Panel
from rich.table import Table

from tradeledger.cli.common import (
    console,
    fail,
    get_config,
    get_store,
    money,
    signed_money,
)
from tradeledger.errors import LedgerError
from tradeledger.formatting import format_date_time, format_percent


@click.command()
def balance() -> None:
    """Show account balance, growth and period P&L."""
    config = get_config()
    store = get_store(config)
    stats = store.get_derived_stats()
    period = store.get_period_stats()

    console.print(Panel(
        f"Current Balance:  [bold cyan]{money(stats.current_balance, config)}[/bold cyan]\n"
        f"Starting Balance: {money(stats.starting_balance, config)}\n"
        f"Deposits:         {money(stats.total_deposits, config)}\n"
        f"Withdrawals:      {money(stats.total_withdrawals, config)}\n"
        f"Growth:           {signed_money(stats.growth, config)} "
        f"({format_percent(stats.growth_percent)})",
        title="[bold]Account[/bold]",
        border_style="cyan",
    ))

    table = Table(title="Period P&L")
    table.add_column("Period")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_row(
        "Today",
        f"{period.today_trades}/{period.daily_limit}",
        signed_money(period.today_pnl, config),
    )
    table.add_row("7 days", str(period.weekly_trades), signed_money(period.weekly_pnl, config))
    table.add_row("30 days", str(period.monthly_trades), signed_money(period.monthly_pnl, config))
    console.print(table)


@click.command()
def stats() -> None:
    """Show win/loss statistics."""
    config = get_config()
    store = get_store(config)
    s = store.get_derived_stats()

    table = Table(title="Trade Statistics", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total Trades", str(s.total_trades))
    table.add_row("Winning Trades", f"[green]{s.winning_trades}[/green]")
    table.add_row("Losing Trades", f"[red]{s.losing_trades}[/red]")
    table.add_row("Win Rate", format_percent(s.win_rate))
    table.add_row("Net P&L", signed_money(s.total_pnl, config))
    table.add_row("Total Profit", f"[green]{money(s.total_profit, config)}[/green]")
    table.add_row("Total Loss", f"[red]{money(s.total_loss, config)}[/red]")
    table.add_row("Buys / Sells", f"{s.buys} / {s.sells}")
    console.print(table)


@click.command()
@click.option(
    "--window",
    type=click.Choice(["recent", "annual"]),
    default="recent",
    show_default=True,
    help="recent: daily over 30 days; annual: monthly over 12 months.",
)
def equity(window: str) -> None:
    """Show the equity curve with peak and drawdown."""
    config = get_config()
    store = get_store(config)

    try:
        series = store.get_equity_series(window)
    except LedgerError as exc:
        fail(str(exc))

    table = Table(title=f"Equity ({window})")
    table.add_column("Point")
    table.add_column("Balance", justify="right")
    previous = None
    for point in series.points:
        if previous is None:
            change = ""
        else:
            change = signed_money(point.balance - previous, config)
        table.add_row(point.label, f"{money(point.balance, config)} {change}".rstrip())
        previous = point.balance
    console.print(table)

    console.print(
        f"Peak: [green]{money(series.peak, config)}[/green]  "
        f"Drawdown: [red]{format_percent(series.drawdown)}[/red]"
    )


@click.command(name="calendar")
@click.option("--month", "month_key", default=None, help="Month as YYYY-MM. Defaults to current.")
def calendar_cmd(month_key: str | None) -> None:
    """Show daily P&L for a month."""
    config = get_config()
    store = get_store(config)

    if month_key:
        try:
            first = date.fromisoformat(f"{month_key}-01")
        except ValueError:
            fail(f"Invalid month '{month_key}', expected YYYY-MM")
    else:
        first = date.today().replace(day=1)

    days = store.get_calendar_month(first.year, first.month)

    table = Table(title=f"{first:%B %Y}")
    table.add_column("Date")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    for day in days:
        if day.trade_count == 0:
            continue
        label = f"{day.date:%a %d}"
        if day.is_today:
            label = f"[bold]{label}[/bold]"
        table.add_row(label, str(day.trade_count), signed_money(day.pnl, config))

    if table.row_count == 0:
        console.print(f"[dim]No trades in {first:%B %Y}.[/dim]")
        return
    console.print(table)


@click.command()
@click.option("--limit", type=int, default=10, show_default=True, help="Number of items.")
def activity(limit: int) -> None:
    """Show recent trades, deposits and withdrawals."""
    config = get_config()
    store = get_store(config)
    items = store.get_recent_activity(limit)

    if not items:
        console.print("[dim]No activity recorded yet.[/dim]")
        return

    colors = {"WIN": "green", "LOSS": "red", "COMPLETED": "green", "PROCESSED": "yellow"}
    table = Table(title="Recent Activity")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Details", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_column("Status")
    for item in items:
        color = colors[item.status]
        table.add_row(
            format_date_time(item.date, item.time),
            item.kind.upper(),
            item.description,
            signed_money(item.amount, config),
            f"[{color}]{item.status}[/{color}]",
        )
    console.print(table)
