# pylint: disable=unnecessary-pass
"""
Custom exceptions for tabular store operations.
"""


class TabularStoreError(Exception):
    """
    Base class for tabular store exceptions
    """

    pass


class StoreConnectionError(TabularStoreError):
    """
    Exception raised when the backing store cannot be reached
    """

    pass


class SnapshotLoadError(TabularStoreError):
    """
    Exception raised when the previous snapshot cannot be read
    """

    pass


class SnapshotPersistError(TabularStoreError):
    """
    Exception raised when the new snapshot or change log cannot be written
    """

    pass
