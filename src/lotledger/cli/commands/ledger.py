"""Ledger viewing commands."""

import click
from lotledger.cli.account_resolution import resolve_account_or_exit
from lotledger.cli.error_handling import handle_domain_error
from lotledger.domain.account import AccountService
from lotledger.domain.errors import NotFoundError


class _SymbolNames:
    """Caches universe ID to ticker lookups for display."""

    def __init__(self, db):
        self.db = db
        self._names: dict[int, str] = {}

    def __call__(self, universe_id: int | None) -> str:
        if universe_id is None:
            return "-"
        if universe_id not in self._names:
            entry = self.db.get_symbol(universe_id)
            self._names[universe_id] = entry.symbol if entry is not None else f"#{universe_id}"
        return self._names[universe_id]


@click.command("lots")
@click.option("--account", help="Account name")
@click.option("--symbol", help="Ticker symbol")
@click.option("--open", "open_only", is_flag=True, help="Only show open lots")
@click.option("--closed", "closed_only", is_flag=True, help="Only show closed lots")
@click.pass_context
def list_lots(ctx, account: str | None, symbol: str | None, open_only: bool, closed_only: bool):
    """List lots, oldest purchase first."""
    db = ctx.obj["db"]
    if open_only and closed_only:
        click.echo("Error: --open and --closed cannot be combined.", err=True)
        ctx.exit(1)

    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account)

    universe_id = None
    if symbol is not None:
        entry = db.get_symbol_by_ticker(symbol)
        if entry is None:
            handle_domain_error(ctx, NotFoundError(f"Symbol '{symbol}' not found"))
        universe_id = entry.id

    lots = db.list_lots(
        account_id=account_id,
        universe_id=universe_id,
        open_only=open_only,
        closed_only=closed_only,
    )
    if not lots:
        click.echo("No lots found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts()}
    symbol_name = _SymbolNames(db)

    click.echo(
        f"{'ID':>4}  {'Account':20s}  {'Symbol':8s}  {'Quantity':>12}  "
        f"{'Buy':>10}  {'Buy Date':10s}  {'Sell':>10}  Sell Date"
    )
    click.echo("-" * 96)
    for lot in lots:
        sell_date = lot.sell_date.isoformat() if lot.sell_date else "open"
        click.echo(
            f"{lot.id:>4}  {accounts.get(lot.account_id, '?'):20s}  "
            f"{symbol_name(lot.universe_id):8s}  {lot.quantity.normalize():>12f}  "
            f"{lot.buy:>10.2f}  {lot.buy_date.isoformat():10s}  {lot.sell:>10.2f}  {sell_date}"
        )


@click.command("deposits")
@click.option("--account", help="Account name")
@click.pass_context
def list_deposits(ctx, account: str | None):
    """List dividend and cash deposits by date."""
    db = ctx.obj["db"]
    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account)

    deposits = db.list_deposits(account_id=account_id)
    if not deposits:
        click.echo("No deposits found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts()}
    symbol_name = _SymbolNames(db)

    click.echo(f"{'ID':>4}  {'Date':10s}  {'Account':20s}  {'Symbol':8s}  {'Amount':>12}")
    click.echo("-" * 64)
    for deposit in deposits:
        click.echo(
            f"{deposit.id:>4}  {deposit.date.isoformat():10s}  "
            f"{accounts.get(deposit.account_id, '?'):20s}  "
            f"{symbol_name(deposit.universe_id):8s}  {deposit.amount:>12.2f}"
        )


def register_commands(cli):
    """Register ledger view commands with main CLI."""
    cli.add_command(list_lots)
    cli.add_command(list_deposits)
