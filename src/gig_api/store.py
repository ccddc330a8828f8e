"""Generic row store.

The row store is the only way the rest of the codebase talks to persistent
storage. Rows are plain dictionaries keyed by storage (``snake_case``) column
names; every table is addressed by name and has an ``id`` primary key column.

``SqlRowStore`` reflects tables on first use and runs the blocking SQLAlchemy
calls in a worker thread so the event loop is never blocked.
"""

import asyncio
import threading
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from typing import Any, Protocol

from loguru import logger
from pydantic import BaseModel
from sqlalchemy import MetaData, Table, delete, insert, or_, select, update
from sqlmodel import Session

from gig_api.database import borrow_db_session
from gig_api.utils.pagination import Pagination

Row = dict[str, Any]


class OrderBy(BaseModel):
    """Ordering of a ``find_many`` query."""

    column: str
    ascending: bool = True


class TextSearch(BaseModel):
    """Case-insensitive substring match against any of ``columns``."""

    term: str
    columns: list[str]


class RowStore(Protocol):
    """Contract of the persistent row store."""

    async def find_by_id(self, table: str, id_: str, fields: Sequence[str] | None = None) -> Row | None: ...

    async def find_many(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        pagination: Pagination | None = None,
        order_by: OrderBy | None = None,
        search: TextSearch | None = None,
    ) -> list[Row]: ...

    async def insert(self, table: str, values: Row) -> Row: ...

    async def update_by_id(self, table: str, id_: str, patch: Row) -> Row | None: ...

    async def delete(self, table: str, id_: str) -> bool: ...


class SqlRowStore:
    """Row store backed by SQLAlchemy Core on reflected tables."""

    def __init__(self, session_factory: Callable[[], AbstractContextManager[Session]] = borrow_db_session):
        """Initialize the store.

        Args:
            session_factory: Context manager factory yielding database sessions
        """
        self._session_factory = session_factory
        self._metadata = MetaData()
        self._tables: dict[str, Table] = {}
        self._lock = threading.Lock()

    def _table(self, session: Session, name: str) -> Table:
        with self._lock:
            table = self._tables.get(name)
            if table is None:
                logger.debug(f"Reflecting table '{name}'")
                table = Table(name, self._metadata, autoload_with=session.get_bind())
                self._tables[name] = table
            return table

    async def find_by_id(self, table: str, id_: str, fields: Sequence[str] | None = None) -> Row | None:
        """Fetch one row by primary key, optionally restricted to ``fields``."""

        def _run() -> Row | None:
            with self._session_factory() as session:
                tbl = self._table(session, table)
                columns = [tbl.c[f] for f in fields] if fields else [tbl]
                row = session.exec(select(*columns).where(tbl.c.id == id_)).mappings().first()
                return dict(row) if row is not None else None

        return await asyncio.to_thread(_run)

    async def find_many(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        pagination: Pagination | None = None,
        order_by: OrderBy | None = None,
        search: TextSearch | None = None,
    ) -> list[Row]:
        """Fetch rows matching equality filters (lists become ``IN`` filters) and an optional text search."""

        def _run() -> list[Row]:
            with self._session_factory() as session:
                tbl = self._table(session, table)
                stmt = select(tbl)
                for column, value in (filters or {}).items():
                    if isinstance(value, list | tuple | set):
                        stmt = stmt.where(tbl.c[column].in_(list(value)))
                    else:
                        stmt = stmt.where(tbl.c[column] == value)
                if search is not None and search.columns:
                    stmt = stmt.where(or_(*(tbl.c[c].icontains(search.term, autoescape=True) for c in search.columns)))
                if order_by is not None:
                    col = tbl.c[order_by.column]
                    stmt = stmt.order_by(col.asc() if order_by.ascending else col.desc())
                if pagination is not None:
                    stmt = stmt.offset(pagination.offset).limit(pagination.limit)
                return [dict(row) for row in session.exec(stmt).mappings().all()]

        return await asyncio.to_thread(_run)

    async def insert(self, table: str, values: Row) -> Row:
        """Insert a row and return it as stored."""

        def _run() -> Row:
            with self._session_factory() as session:
                tbl = self._table(session, table)
                row = session.exec(insert(tbl).values(**values).returning(tbl)).mappings().one()
                session.commit()
                return dict(row)

        return await asyncio.to_thread(_run)

    async def update_by_id(self, table: str, id_: str, patch: Row) -> Row | None:
        """Apply ``patch`` to the row with ``id_`` and return the updated row."""

        def _run() -> Row | None:
            with self._session_factory() as session:
                tbl = self._table(session, table)
                stmt = update(tbl).where(tbl.c.id == id_).values(**patch).returning(tbl)
                row = session.exec(stmt).mappings().first()
                session.commit()
                return dict(row) if row is not None else None

        return await asyncio.to_thread(_run)

    async def delete(self, table: str, id_: str) -> bool:
        """Delete the row with ``id_``; returns whether a row was removed."""

        def _run() -> bool:
            with self._session_factory() as session:
                tbl = self._table(session, table)
                result = session.exec(delete(tbl).where(tbl.c.id == id_))
                session.commit()
                return result.rowcount > 0

        return await asyncio.to_thread(_run)
