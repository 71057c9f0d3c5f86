"""Shared base for backends that apply recorded transactions."""

from abc import ABC, abstractmethod
from typing import Sequence, Set

from ..entities.protocols import AclBackend
from ..entities.transaction import Transaction


class TransactionalBackend(AclBackend, ABC):
    """Implements the queueing half of the backend contract.

    Subclasses only decide how a finished :class:`Transaction` is applied
    and how reads are served.
    """

    def begin(self) -> Transaction:
        """Start a new batch of mutations."""
        return Transaction()

    def add(self, transaction: Transaction, bucket: str, key: str, values: Sequence[str]) -> None:
        transaction.add(bucket, key, values)

    def remove(self, transaction: Transaction, bucket: str, key: str, values: Sequence[str]) -> None:
        transaction.remove(bucket, key, values)

    def delete(self, transaction: Transaction, bucket: str, keys: Sequence[str]) -> None:
        transaction.delete(bucket, keys)

    @abstractmethod
    async def end(self, transaction: Transaction) -> None:
        ...

    @abstractmethod
    async def get(self, bucket: str, key: str) -> Set[str]:
        ...

    @abstractmethod
    async def union(self, bucket: str, keys: Sequence[str]) -> Set[str]:
        ...
