"""Transaction builder for batched backend mutations.

A transaction only records intents; nothing touches the store until the
backend's ``end()`` applies the batch. Whether the batch lands atomically
depends on the backend.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Sequence, Tuple


class MutationKind(str, Enum):
    """Set operations a transaction can queue."""
    ADD = "add"
    REMOVE = "remove"
    DELETE = "delete"


@dataclass(frozen=True)
class MutationIntent:
    """One queued set mutation.

    ``values`` holds the members for ADD/REMOVE. DELETE drops the whole key
    and ignores ``values``.
    """
    kind: MutationKind
    bucket: str
    key: str
    values: Tuple[str, ...] = ()


@dataclass
class Transaction:
    """Ordered batch of mutation intents."""

    intents: List[MutationIntent] = field(default_factory=list)

    def add(self, bucket: str, key: str, values: Sequence[str]) -> None:
        self.intents.append(MutationIntent(MutationKind.ADD, bucket, key, tuple(values)))

    def remove(self, bucket: str, key: str, values: Sequence[str]) -> None:
        self.intents.append(MutationIntent(MutationKind.REMOVE, bucket, key, tuple(values)))

    def delete(self, bucket: str, keys: Sequence[str]) -> None:
        for key in keys:
            self.intents.append(MutationIntent(MutationKind.DELETE, bucket, key))

    def __iter__(self) -> Iterator[MutationIntent]:
        return iter(self.intents)

    def __len__(self) -> int:
        return len(self.intents)
