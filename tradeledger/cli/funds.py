"""Deposit and withdrawal commands for TradeLedger CLI."""

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
from tradeledger.errors import InsufficientBalance, LedgerError, NotFound
from tradeledger.formatting import format_date_time


def _transfer_fields(day, at, broker, amount, notes) -> dict:
    return {
        "date": day.date(),
        "time": at,
        "broker": broker,
        "amount": amount,
        "notes": notes,
    }


@click.group()
def deposit() -> None:
    """Set the account's starting balance.

    A deposit starts a new tracking period: it replaces any earlier
    deposit and clears all trades and withdrawals.
    """
    pass


@deposit.command(name="add")
@date_option("Deposit date (YYYY-MM-DD).")
@time_option("Deposit time (HH:MM).")
@click.option("--broker", required=True, help="Broker name.")
@click.option("--amount", required=True, help="Deposit amount.")
@click.option("--notes", default=None, help="Free text notes.")
@click.option("--confirm", is_flag=True, help="Skip confirmation prompt.")
def deposit_add(day, at, broker, amount, notes, confirm) -> None:
    """Record a deposit and start a new tracking period."""
    config = get_config()
    store = get_store(config)

    if store.state.trades or store.state.withdrawals:
        console.print("[yellow]A new deposit clears all existing trades and withdrawals.[/yellow]")
        if not confirm and not click.confirm("Continue?"):
            console.print("[dim]Deposit cancelled.[/dim]")
            return

    try:
        recorded = store.record_deposit(_transfer_fields(day, at, broker, amount, notes))
    except LedgerError as exc:
        fail(str(exc))

    console.print(Panel(
        f"Starting balance set to [green]{money(recorded.amount, config)}[/green]\n"
        f"[dim]Previous starting balance: {money(recorded.balance_before, config)}[/dim]",
        title=f"[bold green]Deposit {recorded.id} saved[/bold green]",
        border_style="green",
    ))


@deposit.command(name="delete")
@click.argument("deposit_id", type=int)
@click.option("--confirm", is_flag=True, help="Skip confirmation prompt.")
def deposit_delete(deposit_id: int, confirm: bool) -> None:
    """Delete a deposit. Removing the last deposit resets all data."""
    store = get_store()

    if not confirm and not click.confirm("Delete this deposit? This will reset all data!"):
        console.print("[dim]Delete cancelled.[/dim]")
        return

    try:
        store.delete_deposit(deposit_id)
    except NotFound as exc:
        warn(str(exc))
        return

    console.print(f"[green]Deposit {deposit_id} deleted.[/green]")


@click.group()
def withdraw() -> None:
    """Record and remove withdrawals."""
    pass


@withdraw.command(name="add")
@date_option("Withdrawal date (YYYY-MM-DD).")
@time_option("Withdrawal time (HH:MM).")
@click.option("--broker", required=True, help="Broker name.")
@click.option("--amount", required=True, help="Withdrawal amount.")
@click.option("--notes", default=None, help="Free text notes.")
def withdraw_add(day, at, broker, amount, notes) -> None:
    """Record a withdrawal. Cannot exceed the current balance."""
    config = get_config()
    store = get_store(config)

    try:
        recorded = store.record_withdrawal(_transfer_fields(day, at, broker, amount, notes))
    except InsufficientBalance as exc:
        fail(f"Insufficient balance! Available: {money(exc.available, config)}")
    except LedgerError as exc:
        fail(str(exc))

    console.print(Panel(
        f"Withdrew [red]{money(recorded.amount, config)}[/red]\n"
        f"Balance: {money(recorded.balance_before, config)} -> "
        f"[cyan]{money(recorded.balance_after, config)}[/cyan]",
        title=f"[bold green]Withdrawal {recorded.id} saved[/bold green]",
        border_style="green",
    ))


@withdraw.command(name="delete")
@click.argument("withdrawal_id", type=int)
def withdraw_delete(withdrawal_id: int) -> None:
    """Delete a withdrawal by ID."""
    config = get_config()
    store = get_store(config)

    try:
        store.delete_withdrawal(withdrawal_id)
    except NotFound as exc:
        warn(str(exc))
        return

    console.print(f"[green]Withdrawal {withdrawal_id} deleted.[/green] "
                  f"Balance: {money(store.get_current_balance(), config)}")


@click.command()
@click.option(
    "--filter",
    "kind",
    type=click.Choice(["all", "deposits", "withdrawals"]),
    default="all",
    show_default=True,
    help="Which transactions to show.",
)
def transactions(kind: str) -> None:
    """Show deposit and withdrawal history."""
    config = get_config()
    store = get_store(config)
    items = store.get_transaction_history(kind)

    if not items:
        console.print("[dim]No transactions yet.[/dim]")
        return

    records = {r.id: r for r in (*store.state.deposits, *store.state.withdrawals)}

    table = Table(title="Transactions")
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Broker", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_column("Before", justify="right")
    table.add_column("After", justify="right")
    table.add_column("Notes")

    for item in items:
        record = records[item.id]
        label = "[green]DEPOSIT[/green]" if item.kind == "deposit" else "[red]WITHDRAWAL[/red]"
        table.add_row(
            str(item.id),
            format_date_time(item.date, item.time),
            label,
            item.description,
            signed_money(item.amount, config),
            money(record.balance_before, config),
            money(record.balance_after, config),
            record.notes or "-",
        )

    console.print(table)
