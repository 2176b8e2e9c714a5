"""payledger: replay ledger transactions into per-client account balances."""

from payledger.engines.ledger import LedgerEngine, LedgerState, process_transactions
from payledger.models.ledger import Account, Transaction

__all__ = [
    "Account",
    "LedgerEngine",
    "LedgerState",
    "Transaction",
    "process_transactions",
]
