"""Command-line interface for wallet statement extractor."""
import click
import sys
from decimal import Decimal
from pathlib import Path
from rich.console import Console
from rich.table import Table

from .utils.logger import setup_logger
from .utils import format_currency, to_decimal
from .config import get_template_loader
from .config.settings import EXPORT_FORMATS, DEFAULT_TEMPLATE
from .models import ExtractionStatus
from .parsers import StatementParser

console = Console()
logger = setup_logger()

EXIT_CODES = {
    ExtractionStatus.PARSED: 0,
    ExtractionStatus.REJECTED: 1,
    ExtractionStatus.PASSWORD_REQUIRED: 1,
    ExtractionStatus.EXTRACTION_FAILED: 1,
}


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """Wallet Statement Extractor - Extract transactions from UPI wallet statements."""
    pass


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--password', '-p', help='Password for encrypted PDF statements')
@click.option('--template', '-t', default=DEFAULT_TEMPLATE, show_default=True,
              help='Statement template name, or "auto" to detect')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output file path')
@click.option('--format', '-f', 'export_format', type=click.Choice(EXPORT_FORMATS),
              help='Output format (inferred from --output if omitted)')
@click.option('--limit', type=int, default=20, show_default=True,
              help='Maximum transactions to show in the summary table')
def extract(file_path, password, template, output, export_format, limit):
    """
    Extract transactions from a wallet statement.

    FILE_PATH: Path to the statement (PDF or text dump)
    """
    from .pipeline import ExtractionPipeline

    file_path = Path(file_path)
    console.print(f"\n[bold blue]Wallet Statement Extractor[/bold blue]\n")
    console.print(f"[cyan]Processing:[/cyan] {file_path.name}")

    pipeline = ExtractionPipeline()
    result = pipeline.process(
        file_path=file_path,
        password=password,
        template_name=template,
        output_path=Path(output) if output else None,
        export_format=export_format
    )

    if result.status is ExtractionStatus.PASSWORD_REQUIRED:
        console.print(f"\n[red]✗ Password required or incorrect[/red]")
        console.print(f"  {result.error_message}")
    elif result.status is ExtractionStatus.REJECTED:
        console.print(f"\n[red]✗ Not a recognised statement[/red]")
        console.print(f"  {result.error_message}")
    elif result.status is ExtractionStatus.EXTRACTION_FAILED:
        console.print(f"\n[red]✗ Extraction failed[/red]")
        console.print(f"  Error: {result.error_message}")
    else:
        _print_summary(result, limit)
        if result.error_message:
            console.print(f"\n[yellow]![/yellow] {result.error_message}")
        elif output or export_format:
            console.print(f"\n[green]Output written[/green]")

    sys.exit(EXIT_CODES[result.status])


def _print_summary(result, limit: int) -> None:
    """Print transaction table and totals."""
    console.print(f"\n[green]✓ Extraction successful![/green]")
    console.print(f"  Template: {result.template_name}")
    console.print(f"  Transactions: {result.transaction_count}")
    console.print(f"  Time: {result.processing_time:.2f}s")

    if not result.transactions:
        console.print("\n[yellow]Statement contains no transactions[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Time")
    table.add_column("Details")
    table.add_column("Type")
    table.add_column("Amount", justify="right")

    for txn in result.transactions[:max(limit, 0)]:
        style = "green" if txn.is_credit else "red" if txn.is_debit else None
        table.add_row(
            txn.date,
            txn.time,
            txn.details,
            txn.transaction_type.value,
            format_currency(txn.amount),
            style=style
        )

    console.print(table)
    if result.transaction_count > limit:
        console.print(f"  ... {result.transaction_count - limit} more")

    total_in = sum((to_decimal(t.amount) for t in result.credits), Decimal(0))
    total_out = sum((to_decimal(t.amount) for t in result.debits), Decimal(0))
    console.print(f"\n  Credits: {format_currency(total_in)}")
    console.print(f"  Debits:  {format_currency(total_out)}")


@cli.command()
def templates():
    """List available statement templates."""
    console.print("\n[bold blue]Statement Templates[/bold blue]\n")

    loader = get_template_loader()

    if loader.template_count == 0:
        console.print("[yellow]No statement templates found[/yellow]")
        console.print(f"[yellow]Add YAML files to: {loader.config_dir}[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Template", style="cyan")
    table.add_column("Name")
    table.add_column("Parser")
    table.add_column("Keywords", style="green")
    table.add_column("Window", justify="right")

    supported = StatementParser.get_supported_strategies()

    for name in loader.get_all_templates():
        template = loader.get_template(name)
        keywords = ", ".join(template.statement_keywords[:3])
        if len(template.statement_keywords) > 3:
            keywords += f" (+{len(template.statement_keywords) - 3} more)"
        parser_cell = template.parser
        if template.parser.lower() not in supported:
            parser_cell = f"[red]{template.parser} (unsupported)[/red]"
        table.add_row(name, template.display_name, parser_cell, keywords, str(template.lookahead_window))

    console.print(table)
    console.print(f"\n[cyan]Total templates:[/cyan] {loader.template_count}")


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == '__main__':
    main()
