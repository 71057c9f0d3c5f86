"""Backend adapters for the access control feature."""

from .base import TransactionalBackend
from .memory_adapter import MemoryBackend
from .redis_adapter import RedisBackend

__all__ = [
    "TransactionalBackend",
    "MemoryBackend",
    "RedisBackend",
]
