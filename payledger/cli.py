"""Typer CLI interface for payledger."""

import logging
import sys
from enum import StrEnum
from pathlib import Path

import typer
from rich.console import Console

from payledger.config import LOG_LEVELS, EngineConfig, configure_logging
from payledger.engines.ledger import LedgerEngine
from payledger.exceptions import LedgerError
from payledger.ingestion.csv_reader import CsvTransactionReader
from payledger.reports.accounts import AccountsReport

logger = logging.getLogger(__name__)


class OutputFormat(StrEnum):
    CSV = "csv"
    TABLE = "table"


app = typer.Typer(
    name="payledger",
    help="payledger: replay a transaction file into per-client account balances.",
    add_completion=False,
)


@app.command()
def main(
    input_path: Path = typer.Argument(
        ...,
        help="CSV file with columns type, client, tx, amount",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.CSV,
        "--format",
        "-f",
        help="csv for machine-readable output, table for a terminal view",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="PAYLEDGER_LOG_LEVEL",
        help=f"Logging verbosity on stderr ({', '.join(LOG_LEVELS)})",
    ),
    reject_duplicate_deposits: bool = typer.Option(
        False,
        "--reject-duplicate-deposits",
        envvar="PAYLEDGER_REJECT_DUPLICATE_DEPOSITS",
        help="Ignore deposits whose tx id was already used by an earlier deposit",
    ),
) -> None:
    """Process INPUT_PATH and print the final balance of every client.

    Deposits, withdrawals, disputes, resolves and chargebacks are applied in
    file order. Transactions that reference unknown or mismatched data are
    ignored. A malformed record or a balance overflow aborts the run with no
    output.
    """
    try:
        configure_logging(log_level)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2)

    config = EngineConfig(reject_duplicate_deposits=reject_duplicate_deposits)
    engine = LedgerEngine(config)

    try:
        with CsvTransactionReader(input_path) as reader:
            accounts = engine.process(reader)

        report = AccountsReport(accounts)
        if output_format is OutputFormat.TABLE:
            report.render_table(Console())
        else:
            report.write_csv(sys.stdout)
    except LedgerError as exc:
        logger.debug("Run aborted", exc_info=True)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
