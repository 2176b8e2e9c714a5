"""Ledger engine: replay transactions into per-client account balances.

Every transaction type maps to a ``Transition``: an ordered tuple of guard
predicates and the effect applied when all of them hold. A transaction whose
guard fails is ignored and leaves the state untouched. Guards short-circuit,
so later guards may assume earlier ones passed (e.g. that the account exists).
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from decimal import Decimal, DecimalException

from pydantic import ValidationError

from payledger.config import EngineConfig
from payledger.exceptions import BalanceOverflowError
from payledger.models.enums import Outcome, TransactionType
from payledger.models.ledger import (
    EXACT_ARITHMETIC,
    MAX_BALANCE,
    ZERO,
    Account,
    Transaction,
)

logger = logging.getLogger(__name__)


@dataclass
class LedgerState:
    """Mutable state threaded through ``LedgerEngine.apply``."""

    accounts: dict[int, Account] = field(default_factory=dict)
    deposits: dict[int, Transaction] = field(default_factory=dict)
    disputed: set[int] = field(default_factory=set)

    def snapshot(self) -> dict[int, Account]:
        """Accounts ordered by client id."""
        return dict(sorted(self.accounts.items()))


Guard = Callable[[LedgerState, Transaction], bool]
Effect = Callable[[LedgerState, Transaction], None]


@dataclass(frozen=True)
class Transition:
    guards: tuple[Guard, ...]
    effect: Effect


# --- Checked arithmetic ---


def _checked(result_of: Callable[[], Decimal], client_id: int, balance: str) -> Decimal:
    try:
        result = result_of()
    except DecimalException as exc:
        raise BalanceOverflowError(client_id, balance) from exc
    if result < ZERO or result > MAX_BALANCE:
        raise BalanceOverflowError(client_id, balance, result)
    return result


def checked_add(left: Decimal, right: Decimal, client_id: int, balance: str) -> Decimal:
    return _checked(lambda: EXACT_ARITHMETIC.add(left, right), client_id, balance)


def checked_sub(left: Decimal, right: Decimal, client_id: int, balance: str) -> Decimal:
    return _checked(lambda: EXACT_ARITHMETIC.subtract(left, right), client_id, balance)


# --- Guards ---


def _account(state: LedgerState, transaction: Transaction) -> Account:
    return state.accounts[transaction.client_id]


def _deposit_amount(state: LedgerState, transaction: Transaction) -> Decimal:
    return state.deposits[transaction.tx_id].amount


def has_account(state: LedgerState, transaction: Transaction) -> bool:
    return transaction.client_id in state.accounts


def covers_withdrawal(state: LedgerState, transaction: Transaction) -> bool:
    return transaction.amount <= _account(state, transaction).available


def deposit_known(state: LedgerState, transaction: Transaction) -> bool:
    return transaction.tx_id in state.deposits


def deposit_is_new(state: LedgerState, transaction: Transaction) -> bool:
    return transaction.tx_id not in state.deposits


def same_client(state: LedgerState, transaction: Transaction) -> bool:
    return state.deposits[transaction.tx_id].client_id == transaction.client_id


def under_dispute(state: LedgerState, transaction: Transaction) -> bool:
    return transaction.tx_id in state.disputed


def available_covers_deposit(state: LedgerState, transaction: Transaction) -> bool:
    return _account(state, transaction).available >= _deposit_amount(state, transaction)


def held_covers_deposit(state: LedgerState, transaction: Transaction) -> bool:
    return _account(state, transaction).held >= _deposit_amount(state, transaction)


# --- Effects ---


def _rebuild(client_id: int, build: Callable[[], Account]) -> Account:
    """Run ``build`` and surface a broken account invariant as overflow."""
    try:
        return build()
    except ValidationError as exc:
        raise BalanceOverflowError(client_id, "account") from exc


def _deposit(state: LedgerState, transaction: Transaction) -> None:
    client_id = transaction.client_id
    account = state.accounts.get(client_id)
    if account is None:
        opening = checked_add(ZERO, transaction.amount, client_id, "available")
        updated = _rebuild(client_id, lambda: Account.opened_with(client_id, opening))
    else:
        available = checked_add(account.available, transaction.amount, client_id, "available")
        total = checked_add(account.total, transaction.amount, client_id, "total")
        updated = _rebuild(
            client_id, lambda: account.updated(available=available, total=total)
        )

    if transaction.tx_id in state.deposits:
        logger.warning(
            "Deposit tx %d reuses an existing tx id; later disputes will refer to it",
            transaction.tx_id,
        )
    state.accounts[client_id] = updated
    state.deposits[transaction.tx_id] = transaction


def _withdraw(state: LedgerState, transaction: Transaction) -> None:
    client_id = transaction.client_id
    account = state.accounts[client_id]
    available = checked_sub(account.available, transaction.amount, client_id, "available")
    total = checked_sub(account.total, transaction.amount, client_id, "total")
    state.accounts[client_id] = _rebuild(
        client_id, lambda: account.updated(available=available, total=total)
    )


def _dispute(state: LedgerState, transaction: Transaction) -> None:
    client_id = transaction.client_id
    account = state.accounts[client_id]
    amount = _deposit_amount(state, transaction)
    available = checked_sub(account.available, amount, client_id, "available")
    held = checked_add(account.held, amount, client_id, "held")
    state.accounts[client_id] = _rebuild(
        client_id, lambda: account.updated(available=available, held=held)
    )
    state.disputed.add(transaction.tx_id)


def _resolve(state: LedgerState, transaction: Transaction) -> None:
    client_id = transaction.client_id
    account = state.accounts[client_id]
    amount = _deposit_amount(state, transaction)
    available = checked_add(account.available, amount, client_id, "available")
    held = checked_sub(account.held, amount, client_id, "held")
    state.accounts[client_id] = _rebuild(
        client_id, lambda: account.updated(available=available, held=held)
    )
    state.disputed.discard(transaction.tx_id)


def _chargeback(state: LedgerState, transaction: Transaction) -> None:
    client_id = transaction.client_id
    account = state.accounts[client_id]
    amount = _deposit_amount(state, transaction)
    held = checked_sub(account.held, amount, client_id, "held")
    total = checked_sub(account.total, amount, client_id, "total")
    state.accounts[client_id] = _rebuild(
        client_id, lambda: account.updated(held=held, total=total, locked=True)
    )
    state.disputed.discard(transaction.tx_id)


_SETTLEMENT_GUARDS = (
    has_account,
    deposit_known,
    same_client,
    under_dispute,
    held_covers_deposit,
)

TRANSITIONS: dict[TransactionType, Transition] = {
    TransactionType.DEPOSIT: Transition(guards=(), effect=_deposit),
    TransactionType.WITHDRAWAL: Transition(
        guards=(has_account, covers_withdrawal),
        effect=_withdraw,
    ),
    TransactionType.DISPUTE: Transition(
        guards=(has_account, deposit_known, same_client, available_covers_deposit),
        effect=_dispute,
    ),
    TransactionType.RESOLVE: Transition(guards=_SETTLEMENT_GUARDS, effect=_resolve),
    TransactionType.CHARGEBACK: Transition(guards=_SETTLEMENT_GUARDS, effect=_chargeback),
}


class LedgerEngine:
    """Applies transactions in order and produces the final account balances."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self._transitions = dict(TRANSITIONS)
        if self.config.reject_duplicate_deposits:
            self._transitions[TransactionType.DEPOSIT] = Transition(
                guards=(deposit_is_new,), effect=_deposit
            )

    def apply(self, state: LedgerState, transaction: Transaction) -> Outcome:
        """Apply one transaction to ``state`` in place.

        Guards are evaluated against the state before the transaction, and the
        effect computes every new balance before writing any of them, so a
        transaction is either applied whole or not at all.

        Raises:
            BalanceOverflowError: checked arithmetic failed; the run must stop.
        """
        transition = self._transitions[transaction.transaction_type]
        for guard in transition.guards:
            if not guard(state, transaction):
                logger.debug(
                    "Ignored %s tx=%d client=%d (%s)",
                    transaction.transaction_type.value,
                    transaction.tx_id,
                    transaction.client_id,
                    guard.__name__,
                )
                return Outcome.IGNORED
        transition.effect(state, transaction)
        return Outcome.APPLIED

    def process(self, transactions: Iterable[Transaction]) -> dict[int, Account]:
        """Replay ``transactions`` from an empty ledger.

        Errors raised by the iterable itself (e.g. a malformed record) propagate
        unchanged and no snapshot is returned.
        """
        state = LedgerState()
        applied = 0
        ignored = 0
        for transaction in transactions:
            if self.apply(state, transaction) is Outcome.APPLIED:
                applied += 1
            else:
                ignored += 1

        logger.info(
            "Processed %d transaction(s): %d applied, %d ignored, %d account(s)",
            applied + ignored,
            applied,
            ignored,
            len(state.accounts),
        )
        return state.snapshot()


def process_transactions(
    transactions: Iterable[Transaction],
    config: EngineConfig | None = None,
) -> dict[int, Account]:
    """Replay ``transactions`` with a fresh engine and return the balances."""
    return LedgerEngine(config).process(transactions)
