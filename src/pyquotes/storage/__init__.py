"""Durable key-value persistence for quote state."""

from pyquotes.storage.adapter import PersistenceAdapter
from pyquotes.storage.backends import BlobStore, JsonFileBlobStore, MemoryBlobStore

__all__ = [
    "BlobStore",
    "JsonFileBlobStore",
    "MemoryBlobStore",
    "PersistenceAdapter",
]
