# database/sql_store.py
"""
SQL backed tabular store.
"""

import json
import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy import func

from .core.database_manager import DatabaseManager
from .schemas import TabularHeader, TabularRow
from .tabular_store import TableData, TabularStore, header_matches, to_cell

logger = logging.getLogger(__name__)


def _encode(row: Sequence[Any]) -> str:
    return json.dumps([to_cell(value) for value in row], ensure_ascii=False)


def _decode(raw: str) -> List[str]:
    value = json.loads(raw or "[]")
    return [to_cell(cell) for cell in value] if isinstance(value, list) else []


class SqlTabularStore(TabularStore):
    """
    Tables live in two SQL tables: tabular_headers and tabular_rows.
    replace_rows runs in a single transaction.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.db_manager.create_tables()

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "SqlTabularStore":
        return cls(DatabaseManager(database_url, echo=echo))

    @property
    def atomic_replace(self) -> bool:
        return True

    def describe(self) -> str:
        return f"SqlTabularStore({self.db_manager.db_type})"

    # ***> Helpers operating inside an open session <***

    def _header(self, session, name: str) -> Optional[TabularHeader]:
        return (
            session.query(TabularHeader)
            .filter(TabularHeader.lookup_name == name.lower())
            .one_or_none()
        )

    def _get_or_create(self, session, name: str) -> TabularHeader:
        header = self._header(session, name)
        if header is None:
            header = TabularHeader(
                table_name=name, lookup_name=name.lower(), header_json="[]"
            )
            session.add(header)
            session.flush()
            logger.info("Created table %s", name)
        return header

    def _next_position(self, session, header_id: int) -> int:
        current = (
            session.query(func.max(TabularRow.position))
            .filter(TabularRow.header_id == header_id)
            .scalar()
        )
        return 0 if current is None else current + 1

    # ***> TabularStore interface <***

    def list_tables(self) -> List[str]:
        with self.db_manager.get_session() as session:
            return [
                name
                for (name,) in session.query(TabularHeader.table_name)
                .order_by(TabularHeader.id)
                .all()
            ]

    def ensure_table(self, name: str) -> str:
        with self.db_manager.get_session() as session:
            return self._get_or_create(session, name).table_name

    def read_rows(self, name: str) -> Optional[TableData]:
        with self.db_manager.get_session() as session:
            header = self._header(session, name)
            if header is None:
                return None
            rows = (
                session.query(TabularRow.row_json)
                .filter(TabularRow.header_id == header.id)
                .order_by(TabularRow.position)
                .all()
            )
            return TableData(
                header=_decode(header.header_json),
                rows=[_decode(raw) for (raw,) in rows],
            )

    def replace_rows(
        self, name: str, header: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> None:
        with self.db_manager.get_session() as session:
            table = self._get_or_create(session, name)
            table.header_json = _encode(header)
            session.query(TabularRow).filter(TabularRow.header_id == table.id).delete(
                synchronize_session=False
            )
            session.add_all(
                TabularRow(header_id=table.id, position=position, row_json=_encode(row))
                for position, row in enumerate(rows)
            )
        logger.debug("Replaced %s with %d rows", name, len(rows))

    def append_rows(self, name: str, rows: Sequence[Sequence[Any]]) -> None:
        if not rows:
            return
        with self.db_manager.get_session() as session:
            table = self._get_or_create(session, name)
            start = self._next_position(session, table.id)
            session.add_all(
                TabularRow(
                    header_id=table.id, position=start + offset, row_json=_encode(row)
                )
                for offset, row in enumerate(rows)
            )
        logger.debug("Appended %d rows to %s", len(rows), name)

    def ensure_header(self, name: str, header: Sequence[str]) -> bool:
        with self.db_manager.get_session() as session:
            table = self._get_or_create(session, name)
            current = _decode(table.header_json)
            if header_matches(current, header):
                return False

            # A non-header first row is kept as the top data row
            if any(cell.strip() for cell in current):
                first = (
                    session.query(func.min(TabularRow.position))
                    .filter(TabularRow.header_id == table.id)
                    .scalar()
                )
                session.add(
                    TabularRow(
                        header_id=table.id,
                        position=(first if first is not None else 1) - 1,
                        row_json=_encode(current),
                    )
                )
            table.header_json = _encode(header)
        logger.info("Installed header on %s", name)
        return True
