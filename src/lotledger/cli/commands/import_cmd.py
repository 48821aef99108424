"""CSV import command."""

import click
from lotledger.cli.error_handling import handle_domain_error
from lotledger.domain.csv_import import CSVImportService
from lotledger.domain.errors import DomainError


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--cash-symbol",
    "cash_symbols",
    multiple=True,
    help="Ticker to treat as cash (repeatable; replaces LOTLEDGER_CASH_SYMBOLS)",
)
@click.pass_context
def import_csv(ctx, csv_file: str, cash_symbols: tuple[str, ...]):
    """Import a brokerage transaction export."""
    db = ctx.obj["db"]
    service = CSVImportService(db, cash_equivalents=cash_symbols or None)

    try:
        result = service.import_file(csv_file)
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:" if result.success else "\nImport finished with errors:")
    click.echo(f"  Imported: {result.imported} transactions")
    if result.warnings:
        click.echo(f"  Warnings: {len(result.warnings)}")
        for warning in result.warnings:
            click.echo(f"    {warning}")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
