# database/schemas/__init__.py
from .tabular_schema import TabularHeader, TabularRow

__all__ = ["TabularHeader", "TabularRow"]
