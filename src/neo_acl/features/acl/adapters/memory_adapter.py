"""In-memory backend adapter for neo-acl."""

import logging
import threading
from typing import Dict, Sequence, Set

from ..entities.protocols import SupportsUnions
from ..entities.transaction import MutationIntent, MutationKind, Transaction
from .base import TransactionalBackend
from ....core.exceptions.infrastructure import BackendTransactionError

logger = logging.getLogger(__name__)

Store = Dict[str, Dict[str, Set[str]]]


class MemoryBackend(TransactionalBackend, SupportsUnions):
    """Process-local backend keeping every bucket as a dict of sets.

    ``end()`` applies a batch to a working copy under the lock and swaps it
    in only when every intent succeeded, so within a single process a batch
    lands whole or not at all. Sets that become empty are dropped, matching
    how Redis treats empty sets.
    """

    def __init__(self):
        self._store: Store = {}
        self._lock = threading.Lock()

    async def end(self, transaction: Transaction) -> None:
        """Apply every queued intent."""
        with self._lock:
            working = self._copy()
            try:
                for intent in transaction:
                    self._apply(working, intent)
            except Exception as e:
                raise BackendTransactionError(f"Failed to apply transaction: {e}") from e
            self._store = working

    async def get(self, bucket: str, key: str) -> Set[str]:
        with self._lock:
            return set(self._store.get(bucket, {}).get(key, ()))

    async def union(self, bucket: str, keys: Sequence[str]) -> Set[str]:
        with self._lock:
            return self._union(bucket, keys)

    async def unions(self, buckets: Sequence[str], keys: Sequence[str]) -> Dict[str, Set[str]]:
        with self._lock:
            return {bucket: self._union(bucket, keys) for bucket in buckets}

    async def clean(self) -> None:
        """Drop every bucket."""
        with self._lock:
            self._store = {}
        logger.info("Memory ACL backend cleared")

    def snapshot(self) -> Store:
        """Deep copy of the store, for inspection."""
        with self._lock:
            return self._copy()

    def _copy(self) -> Store:
        return {
            bucket: {key: set(members) for key, members in entries.items()}
            for bucket, entries in self._store.items()
        }

    def _union(self, bucket: str, keys: Sequence[str]) -> Set[str]:
        entries = self._store.get(bucket, {})
        result: Set[str] = set()
        for key in keys:
            result.update(entries.get(key, ()))
        return result

    @staticmethod
    def _apply(store: Store, intent: MutationIntent) -> None:
        if intent.kind == MutationKind.DELETE:
            entries = store.get(intent.bucket)
            if entries is not None:
                entries.pop(intent.key, None)
                if not entries:
                    del store[intent.bucket]
            return

        if not intent.values:
            return

        if intent.kind == MutationKind.ADD:
            members = store.setdefault(intent.bucket, {}).setdefault(intent.key, set())
            members.update(intent.values)
        elif intent.kind == MutationKind.REMOVE:
            entries = store.get(intent.bucket)
            if entries is None or intent.key not in entries:
                return
            members = entries[intent.key]
            members.difference_update(intent.values)
            if not members:
                del entries[intent.key]
                if not entries:
                    del store[intent.bucket]
