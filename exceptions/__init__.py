from .configuration import ConfigurationError
from .extraction import PayloadShapeError
from .fetcher import (
    AuthorizationError,
    FetchError,
    NonJsonResponseError,
    SessionError,
    TransientFetchError,
)
from .notifier import NotificationError
from .store import (
    SnapshotLoadError,
    SnapshotPersistError,
    StoreConnectionError,
    TabularStoreError,
)

__all__ = [
    "ConfigurationError",
    "PayloadShapeError",
    "FetchError",
    "TransientFetchError",
    "AuthorizationError",
    "NonJsonResponseError",
    "SessionError",
    "NotificationError",
    "TabularStoreError",
    "StoreConnectionError",
    "SnapshotLoadError",
    "SnapshotPersistError",
]
