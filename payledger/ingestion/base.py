"""Base reader interface for transaction sources."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from types import TracebackType

from payledger.models.ledger import Transaction


class BaseReader(ABC):
    """Abstract base class for all transaction sources.

    A reader owns whatever resource backs it (usually an open file) and must
    release it on ``close()``. Readers are context managers so callers can
    guarantee that release even when processing stops on an error.
    """

    @abstractmethod
    def read(self) -> Iterator[Transaction]:
        """Yield transactions lazily, in source order."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the underlying resource. Safe to call more than once."""
        ...

    _iterator: Iterator[Transaction] | None = None

    def __iter__(self) -> Iterator[Transaction]:
        # Single pass: iterating again resumes (or re-exhausts) the same stream.
        if self._iterator is None:
            self._iterator = self.read()
        return self._iterator

    def __enter__(self) -> "BaseReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
