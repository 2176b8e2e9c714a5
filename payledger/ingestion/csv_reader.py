"""CSV reader for transaction files.

Expected layout::

    type, client, tx, amount
    deposit, 1, 1, 1.0
    dispute, 1, 1,

Header names and values are whitespace-trimmed. The ``amount`` column may be
empty or missing entirely on dispute/resolve/chargeback rows; extra columns
are ignored.
"""

import csv
import logging
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from payledger.exceptions import RecordParseError, SourceOpenError
from payledger.ingestion.base import BaseReader
from payledger.models.ledger import Transaction

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = ("type", "client", "tx")

# Model field -> CSV column, for error messages
_FIELD_COLUMNS: dict[str, str] = {
    "transaction_type": "type",
    "client_id": "client",
    "tx_id": "tx",
    "amount": "amount",
}


def _describe(exc: ValidationError) -> str:
    """Flatten pydantic errors into ``column: message`` pairs."""
    parts = []
    for error in exc.errors():
        loc = error["loc"]
        column = _FIELD_COLUMNS.get(str(loc[0]), str(loc[0])) if loc else "record"
        parts.append(f"{column}: {error['msg']}")
    return "; ".join(parts)


class CsvTransactionReader(BaseReader):
    """Lazily reads transactions from a CSV file.

    The file is opened on construction and closed once iteration is exhausted,
    on ``close()``, or when leaving a ``with`` block.
    """

    def __init__(self, file_path: Path | str):
        self.file_path = Path(file_path)
        try:
            self._file = self.file_path.open(newline="", encoding="utf-8")
        except OSError as exc:
            raise SourceOpenError(str(self.file_path), exc.strerror or str(exc)) from exc
        logger.info("Reading transactions from %s", self.file_path)

    @property
    def closed(self) -> bool:
        return self._file.closed

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()
            logger.debug("Closed %s", self.file_path)

    def read(self) -> Iterator[Transaction]:
        rows = csv.reader(self._file, skipinitialspace=True)
        try:
            header = next(rows, None)
            if header is None:
                logger.warning("%s is empty", self.file_path)
                return
            columns = self._parse_header(header)

            for row in rows:
                if not any(cell.strip() for cell in row):
                    continue
                yield self._parse_row(columns, row, rows.line_num)
        except (csv.Error, UnicodeDecodeError) as exc:
            raise RecordParseError(str(self.file_path), rows.line_num, str(exc)) from exc
        finally:
            self.close()

    def _parse_header(self, header: list[str]) -> list[str]:
        columns = [name.strip().lower() for name in header]
        missing = [name for name in _REQUIRED_COLUMNS if name not in columns]
        if missing:
            raise RecordParseError(
                str(self.file_path), 1, f"missing column(s): {', '.join(missing)}"
            )
        return columns

    def _parse_row(self, columns: list[str], row: list[str], line: int) -> Transaction:
        record = {name: value.strip() for name, value in zip(columns, row)}
        try:
            return Transaction(
                transaction_type=record.get("type"),
                client_id=record.get("client"),
                tx_id=record.get("tx"),
                amount=record.get("amount"),
            )
        except ValidationError as exc:
            raise RecordParseError(str(self.file_path), line, _describe(exc)) from exc
