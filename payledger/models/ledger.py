"""Transaction and account models."""

from decimal import (
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
)

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from payledger.models.enums import TransactionType

MAX_CLIENT_ID = 2**16 - 1
MAX_TX_ID = 2**32 - 1

# Largest 96-bit magnitude. Balances beyond it are treated as overflow.
MAX_BALANCE = Decimal(2**96 - 1)

ZERO = Decimal("0")

# Wide enough for any balance up to MAX_BALANCE with fractional digits; any
# result that would still need rounding raises instead.
EXACT_ARITHMETIC = Context(
    prec=64,
    traps=[Inexact, InvalidOperation, Overflow, DivisionByZero],
)


class Transaction(BaseModel):
    """One ledger instruction as read from the event source."""

    model_config = ConfigDict(frozen=True)

    transaction_type: TransactionType
    client_id: int = Field(ge=0, le=MAX_CLIENT_ID)
    tx_id: int = Field(ge=0, le=MAX_TX_ID)
    amount: Decimal = Field(default=ZERO, ge=0, allow_inf_nan=False)

    @field_validator("amount", mode="before")
    @classmethod
    def _empty_amount_is_zero(cls, value: object) -> object:
        # dispute/resolve/chargeback rows carry no amount
        if value is None:
            return ZERO
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return ZERO
        return value


class Account(BaseModel):
    """Balance snapshot for a single client."""

    model_config = ConfigDict(frozen=True)

    client_id: int = Field(ge=0, le=MAX_CLIENT_ID)
    available: Decimal = Field(default=ZERO, ge=0, le=MAX_BALANCE)
    held: Decimal = Field(default=ZERO, ge=0, le=MAX_BALANCE)
    total: Decimal = Field(default=ZERO, ge=0, le=MAX_BALANCE)
    locked: bool = False

    @model_validator(mode="after")
    def _total_is_sum(self) -> "Account":
        try:
            expected = EXACT_ARITHMETIC.add(self.available, self.held)
        except DecimalException as exc:
            raise ValueError(
                f"available {self.available} + held {self.held} is not exact"
            ) from exc
        if self.total != expected:
            raise ValueError(
                f"total {self.total} != available {self.available} + held {self.held}"
            )
        return self

    @classmethod
    def opened_with(cls, client_id: int, amount: Decimal) -> "Account":
        """Account created by a client's first deposit."""
        return cls(client_id=client_id, available=amount, total=amount)

    def updated(self, **changes: object) -> "Account":
        """Copy of this account with ``changes`` applied and re-validated."""
        return Account.model_validate({**self.model_dump(), **changes})
