"""Utility commands for TradeLedger CLI: position calculator and data reset."""

import click
from rich.panel import Panel

from tradeledger.calculator import position_size
from tradeledger.cli.common import console, fail, get_config, get_store, money
from tradeledger.errors import LedgerError


@click.command()
@click.option("--balance", "account_balance", default=None,
              help="Account balance. Defaults to the current ledger balance.")
@click.option("--risk", "risk_percent", required=True, help="Percent of balance to risk.")
@click.option("--stop-loss", "stop_loss", required=True, help="Stop-loss distance in pips.")
def calc(account_balance, risk_percent, stop_loss) -> None:
    """Calculate position size from risk and stop loss.

    \b
    Examples:
      tradeledger calc --risk 1 --stop-loss 20
      tradeledger calc --balance 5000 --risk 2 --stop-loss 15
    """
    config = get_config()
    if account_balance is None:
        account_balance = get_store(config).get_current_balance()

    try:
        result = position_size(account_balance, risk_percent, stop_loss)
    except (LedgerError, ArithmeticError) as exc:
        fail(f"Please enter valid values: {exc}")

    console.print(Panel(
        f"Risk Amount:   [yellow]{money(result.risk_amount, config)}[/yellow]\n"
        f"Position Size: [cyan]{result.lots:.2f}[/cyan] lots",
        title="[bold]Position Size[/bold]",
        border_style="cyan",
    ))


@click.command()
@click.option("--confirm", is_flag=True, help="Skip confirmation prompt.")
def clear(confirm: bool) -> None:
    """Delete ALL trades, deposits and withdrawals."""
    config = get_config()
    store = get_store(config)

    console.print("[bold red]This will delete all trades, deposits and withdrawals.[/bold red]")
    console.print(f"Current Balance: [yellow]{money(store.get_current_balance(), config)}[/yellow]\n")

    if not confirm and not click.confirm("Are you sure? This cannot be undone"):
        console.print("[dim]Clear cancelled.[/dim]")
        return

    store.clear_all()
    console.print(Panel(
        "[green]All data cleared.[/green]",
        title="[bold green]Reset Complete[/bold green]",
        border_style="green",
    ))
