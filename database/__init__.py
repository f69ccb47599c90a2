from .core.database_manager import DatabaseManager
from .tabular_store import TableData, TabularStore, header_matches
from .sql_store import SqlTabularStore
from .sheets_store import GoogleSheetsStore
from .snapshot_store import RunLedger, SnapshotStore
from .factory.store_factory import StoreFactory, create_tabular_store
from .schemas import TabularHeader, TabularRow

__all__ = [
    "DatabaseManager",
    "TableData",
    "TabularStore",
    "header_matches",
    "SqlTabularStore",
    "GoogleSheetsStore",
    "RunLedger",
    "SnapshotStore",
    "StoreFactory",
    "create_tabular_store",
    "TabularHeader",
    "TabularRow",
]
