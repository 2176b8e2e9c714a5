"""Data models for payledger."""

from payledger.models.enums import Outcome, TransactionType
from payledger.models.ledger import (
    MAX_BALANCE,
    MAX_CLIENT_ID,
    MAX_TX_ID,
    Account,
    Transaction,
)

__all__ = [
    "Account",
    "MAX_BALANCE",
    "MAX_CLIENT_ID",
    "MAX_TX_ID",
    "Outcome",
    "Transaction",
    "TransactionType",
]
