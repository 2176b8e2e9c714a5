"""Transaction processing engines."""

from payledger.engines.ledger import (
    LedgerEngine,
    LedgerState,
    Transition,
    process_transactions,
)

__all__ = [
    "LedgerEngine",
    "LedgerState",
    "Transition",
    "process_transactions",
]
