# database/schemas/tabular_schema.py
"""
Schema for the SQL backed tabular store.

A "table" in the store is a named tab: one header row plus ordered data
rows. Rows are kept as JSON encoded lists so tabs of any width fit.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from database.base import Base


def _utcnow():
    return datetime.now(timezone.utc)


class TabularHeader(Base):
    """
    One tab and its header row
    """

    __tablename__ = "tabular_headers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    table_name = Column(String(255), unique=True, nullable=False)
    # Case-insensitive lookup key
    lookup_name = Column(String(255), unique=True, nullable=False)
    header_json = Column(Text, nullable=False, default="[]")
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<TabularHeader(table_name='{self.table_name}')>"


class TabularRow(Base):
    """
    One data row of a tab
    """

    __tablename__ = "tabular_rows"

    id = Column(Integer, primary_key=True, autoincrement=True)
    header_id = Column(
        Integer, ForeignKey("tabular_headers.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False)
    row_json = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("header_id", "position", name="uq_tabular_row_position"),
        Index("idx_tabular_rows_header", "header_id"),
    )

    def __repr__(self):
        return f"<TabularRow(header_id={self.header_id}, position={self.position})>"
