"""Enumerations for payledger."""

from enum import StrEnum


class TransactionType(StrEnum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class Outcome(StrEnum):
    """Result of applying one transaction to the ledger state."""

    APPLIED = "applied"
    IGNORED = "ignored"
