"""Shared test fixtures for payledger."""

from collections.abc import Callable
from decimal import Decimal
from pathlib import Path

import pytest

from payledger.engines.ledger import LedgerEngine, LedgerState
from payledger.models.enums import TransactionType
from payledger.models.ledger import Transaction


def deposit(client: int, tx: int, amount: str) -> Transaction:
    return Transaction(
        transaction_type=TransactionType.DEPOSIT,
        client_id=client,
        tx_id=tx,
        amount=Decimal(amount),
    )


def withdrawal(client: int, tx: int, amount: str) -> Transaction:
    return Transaction(
        transaction_type=TransactionType.WITHDRAWAL,
        client_id=client,
        tx_id=tx,
        amount=Decimal(amount),
    )


def dispute(client: int, tx: int) -> Transaction:
    return Transaction(transaction_type=TransactionType.DISPUTE, client_id=client, tx_id=tx)


def resolve(client: int, tx: int) -> Transaction:
    return Transaction(transaction_type=TransactionType.RESOLVE, client_id=client, tx_id=tx)


def chargeback(client: int, tx: int) -> Transaction:
    return Transaction(transaction_type=TransactionType.CHARGEBACK, client_id=client, tx_id=tx)


@pytest.fixture
def engine() -> LedgerEngine:
    return LedgerEngine()


@pytest.fixture
def state() -> LedgerState:
    return LedgerState()


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write CSV lines to a temp file and return its path."""

    def _write(*lines: str, name: str = "transactions.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write
