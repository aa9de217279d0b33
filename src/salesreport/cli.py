"""CLI interface for seller performance reports."""

import json
import logging
import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .analyzer import analyze_sales_data
from .config import get_config
from .exceptions import AnalysisError
from .models import ReportEntry
from .strategies import AnalyzerOptions

app = typer.Typer(
    name="salesreport",
    help="""
    [bold]Seller Performance Report CLI[/bold]

    Rank sellers by profit and compute their bonuses from raw sales records.

    [cyan]Examples:[/cyan]
      salesreport report data.json
      salesreport report data.json --format json --output report.json
      salesreport report data.json --limit 5 --verbose
      salesreport serve --port 8080

    [cyan]Dataset:[/cyan]
      A JSON object with sellers, products, customers and purchase_records.
    """,
    no_args_is_help=True,
)

console = Console()
logger = logging.getLogger(__name__)


@app.command()
def report(
    input_file: Path = typer.Argument(
        ...,
        help="Sales dataset JSON file",
        exists=True,
        dir_okay=False,
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report as JSON to this file",
        resolve_path=True,
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        min=1,
        help="Number of top products listed per seller",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed processing information",
    ),
):
    """Compute the seller report for a dataset file."""
    config = get_config()
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if output_format not in ("table", "json"):
        console.print(
            f"[bold red]✗ Error:[/bold red] Unknown format '{output_format}'"
        )
        raise typer.Exit(code=2)

    options = AnalyzerOptions.from_config(config)
    if limit:
        options.top_products_limit = limit

    if verbose:
        console.print("[bold]Configuration:[/bold]")
        console.print(f"  Top products limit: {options.top_products_limit}")
        for name, rate in config.bonus_rates().items():
            console.print(f"  {name}: {rate:.2%}")
        console.print()

    start_time = time.time()

    try:
        dataset = _load_dataset(input_file)
        entries = analyze_sales_data(dataset, options)
    except (AnalysisError, ValueError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {str(e)}")
        if verbose and isinstance(e, AnalysisError) and e.details:
            console.print(f"[dim white]{json.dumps(e.details, indent=2)}[/dim white]")
        raise typer.Exit(code=1)

    payload = [entry.model_dump(mode="json") for entry in entries]

    if output_file:
        _save_output(payload, output_file)
    elif output_format == "json":
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        console.print(_render_table(entries))

    elapsed = time.time() - start_time
    logger.info(f"Report for {len(entries)} sellers built in {elapsed:.2f}s")


def _load_dataset(input_file: Path) -> dict:
    """Read a dataset JSON file."""
    try:
        with open(input_file, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Could not parse {input_file.name}: {e}") from e


def _save_output(payload: list, output_file: Path):
    """Save report entries to a JSON file."""
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    console.print(f"[dim]Saved output to {output_file}[/dim]")


def _render_table(entries: List[ReportEntry]) -> Table:
    table = Table(title="Seller performance")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Seller")
    table.add_column("Revenue", justify="right")
    table.add_column("Profit", justify="right")
    table.add_column("Sales", justify="right")
    table.add_column("Bonus", justify="right", style="green")
    table.add_column("Top product")

    for rank, entry in enumerate(entries, start=1):
        top = entry.top_products[0] if entry.top_products else None
        table.add_row(
            str(rank),
            f"{entry.name} ({entry.seller_id})",
            f"{entry.revenue:,.2f}",
            f"{entry.profit:,.2f}",
            str(entry.sales_count),
            f"{entry.bonus:,.2f}",
            f"{top.sku} × {top.quantity}" if top else "-",
        )

    return table


@app.command()
def serve(
    host: Optional[str] = typer.Option(
        None, "--host", help="Bind address (default: API_HOST setting)"
    ),
    port: Optional[int] = typer.Option(
        None, "--port", min=1, max=65535, help="Port (default: API_PORT setting)"
    ),
):
    """Serve the report API over HTTP."""
    from .api import main as run_api

    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    run_api(host=host, port=port)


@app.command()
def version():
    """Show version information."""
    console.print(f"salesreport version {__version__}")


if __name__ == "__main__":
    app()
