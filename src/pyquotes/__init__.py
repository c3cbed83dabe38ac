"""pyquotes - Async quote collection with remote reconciliation."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyquotes")
except PackageNotFoundError:
    __version__ = "0+local"
from pyquotes.client import QuoteClient
from pyquotes.config import QuoteConfig
from pyquotes.exceptions import (
    QuoteConfigError,
    QuoteError,
    QuoteImportFormatError,
    QuoteNetworkError,
    QuoteStorageParseError,
    QuoteValidationError,
)
from pyquotes.models import (
    ConflictRecord,
    MergeResult,
    Quote,
    QuoteFields,
    StatusKind,
    StatusMessage,
    SyncOutcome,
    SyncState,
    SyncStatus,
)
from pyquotes.remote import RemoteSyncClient
from pyquotes.scheduler import SyncScheduler
from pyquotes.state import CategoryIndex, QuoteStore, resolve_filter
from pyquotes.storage import JsonFileBlobStore, MemoryBlobStore, PersistenceAdapter

__all__ = [
    "__version__",
    "CategoryIndex",
    "ConflictRecord",
    "JsonFileBlobStore",
    "MemoryBlobStore",
    "MergeResult",
    "PersistenceAdapter",
    "Quote",
    "QuoteClient",
    "QuoteConfig",
    "QuoteConfigError",
    "QuoteError",
    "QuoteFields",
    "QuoteImportFormatError",
    "QuoteNetworkError",
    "QuoteStorageParseError",
    "QuoteStore",
    "QuoteValidationError",
    "RemoteSyncClient",
    "StatusKind",
    "StatusMessage",
    "SyncOutcome",
    "SyncScheduler",
    "SyncState",
    "SyncStatus",
    "resolve_filter",
]
