"""Custom exceptions for payledger."""

from decimal import Decimal


class LedgerError(Exception):
    """Base exception for errors that abort a ledger run."""


class SourceOpenError(LedgerError):
    """Raised when the event source cannot be opened."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Failed to open file: {path}: {message}")


class RecordParseError(LedgerError):
    """Raised when a record in the event source cannot be interpreted."""

    def __init__(self, path: str, line: int, message: str):
        self.path = path
        self.line = line
        super().__init__(
            f"Failed to parse record at line {line} from: {path}: {message}"
        )


class BalanceOverflowError(LedgerError):
    """Raised when checked balance arithmetic leaves the representable range."""

    def __init__(self, client_id: int, field: str, value: Decimal | None = None):
        self.client_id = client_id
        self.field = field
        self.value = value
        detail = f" (result={value})" if value is not None else ""
        super().__init__(
            f"Arithmetic overflow in {field} balance of client {client_id}{detail}"
        )


class OutputWriteError(LedgerError):
    """Raised when the account snapshot cannot be written out."""

    def __init__(self, message: str):
        super().__init__(f"Failed to write output: {message}")
