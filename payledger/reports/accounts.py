"""Account snapshot report: CSV output and a rich table for terminals."""

import csv
from collections.abc import Mapping
from decimal import Decimal
from typing import TextIO

from rich.console import Console
from rich.table import Table

from payledger.exceptions import OutputWriteError
from payledger.models.ledger import Account

HEADER = ("client", "available", "held", "total", "locked")


def _plain(value: Decimal) -> str:
    """Positional notation, never an exponent (1E+3 -> 1000, 0E-8 -> 0.00000000)."""
    return f"{value:f}"


class AccountsReport:
    """Renders final balances, one row per client in ascending client id order."""

    def __init__(self, accounts: Mapping[int, Account]) -> None:
        self.accounts = [accounts[client_id] for client_id in sorted(accounts)]

    def rows(self) -> list[tuple[str, ...]]:
        return [
            (
                str(account.client_id),
                _plain(account.available),
                _plain(account.held),
                _plain(account.total),
                "true" if account.locked else "false",
            )
            for account in self.accounts
        ]

    def write_csv(self, stream: TextIO) -> None:
        """Write the snapshot as CSV to ``stream``."""
        try:
            writer = csv.writer(stream, lineterminator="\n")
            writer.writerow(HEADER)
            writer.writerows(self.rows())
            stream.flush()
        # ValueError: stream already closed
        except (OSError, ValueError, csv.Error) as exc:
            raise OutputWriteError(str(exc)) from exc

    def render_table(self, console: Console) -> None:
        """Print the snapshot as a table."""
        tbl = Table(title="Account Balances", show_header=True)
        tbl.add_column("Client", style="cyan", justify="right")
        tbl.add_column("Available", style="green", justify="right")
        tbl.add_column("Held", style="yellow", justify="right")
        tbl.add_column("Total", justify="right")
        tbl.add_column("Locked")
        for row in self.rows():
            locked = row[4]
            tbl.add_row(*row[:4], f"[red]{locked}[/red]" if locked == "true" else locked)
        console.print(tbl)
