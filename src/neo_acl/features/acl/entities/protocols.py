"""Backend contract for the access control engine.

Any storage adapter able to hold set-valued keys grouped in buckets can
back the engine. The bulk ``unions`` query is optional; the engine checks
for it with ``isinstance(backend, SupportsUnions)`` and falls back to one
query per resource when it is missing.
"""

from abc import abstractmethod
from typing import Dict, Protocol, Sequence, Set, runtime_checkable

from .transaction import Transaction


@runtime_checkable
class AclBackend(Protocol):
    """Protocol for set-valued key/value stores."""

    @abstractmethod
    def begin(self) -> Transaction:
        """Start a new batch of mutations."""
        ...

    @abstractmethod
    async def end(self, transaction: Transaction) -> None:
        """Apply the batch."""
        ...

    @abstractmethod
    def add(self, transaction: Transaction, bucket: str, key: str, values: Sequence[str]) -> None:
        """Queue adding ``values`` to ``bucket[key]``."""
        ...

    @abstractmethod
    def remove(self, transaction: Transaction, bucket: str, key: str, values: Sequence[str]) -> None:
        """Queue removing ``values`` from ``bucket[key]``."""
        ...

    @abstractmethod
    def delete(self, transaction: Transaction, bucket: str, keys: Sequence[str]) -> None:
        """Queue dropping every key in ``keys`` from ``bucket``."""
        ...

    @abstractmethod
    async def get(self, bucket: str, key: str) -> Set[str]:
        """Read the members of ``bucket[key]``."""
        ...

    @abstractmethod
    async def union(self, bucket: str, keys: Sequence[str]) -> Set[str]:
        """Union of ``bucket[key]`` over ``keys``."""
        ...


@runtime_checkable
class SupportsUnions(Protocol):
    """Optional bulk capability: one union per bucket over the same keys."""

    @abstractmethod
    async def unions(self, buckets: Sequence[str], keys: Sequence[str]) -> Dict[str, Set[str]]:
        """Map every bucket to the union of its ``keys``."""
        ...
