"""Base repository over the generic row store.

Repositories are where field names cross from the domain (``camelCase``) to
storage (``snake_case``) and back. Nothing outside a repository sees storage
field names.
"""

from typing import Any, ClassVar

from loguru import logger

from gig_api.settings import Settings, get_settings
from gig_api.store import OrderBy, Row, RowStore, TextSearch
from gig_api.utils.case_conversion import map_to_camel_case, map_to_snake_case, to_snake_case
from gig_api.utils.pagination import normalize_pagination


class BaseRepository:
    """CRUD access to one table, with domain-side field names."""

    table: ClassVar[str]
    search_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, store: RowStore, settings: Settings | None = None):
        """Initialize the repository.

        Args:
            store: Row store to query
            settings: Settings providing pagination defaults
        """
        self.store = store
        self.settings = settings or get_settings()

    @staticmethod
    def to_domain(row: Row | None) -> dict[str, Any] | None:
        """Convert a storage row into a domain dict."""
        return map_to_camel_case(row) if row is not None else None

    async def find_by_id(self, id_: str, fields: list[str] | None = None) -> dict[str, Any] | None:
        """Fetch one record, optionally restricted to some domain fields."""
        columns = [to_snake_case(f) for f in fields] if fields else None
        row = await self.store.find_by_id(self.table, id_, fields=columns)
        logger.trace(f"{self.table}: find_by_id({id_}) {'found' if row else 'not found'}")
        return self.to_domain(row)

    async def find_many(
        self,
        filters: dict[str, Any] | None = None,
        page: Any = None,
        page_size: Any = None,
        order_by: str | None = None,
        ascending: bool = True,
        search: str | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch one page of records matching domain-side equality filters.

        ``search`` matches case-insensitively against any of ``search_fields``.
        """
        if search and not self.search_fields:
            raise ValueError(f"{type(self).__name__} does not support text search")
        pagination = normalize_pagination(
            page,
            page_size,
            default_page_size=self.settings.default_page_size,
            max_page_size=self.settings.max_page_size,
        )
        rows = await self.store.find_many(
            self.table,
            filters=map_to_snake_case(filters) if filters else None,
            pagination=pagination,
            order_by=OrderBy(column=to_snake_case(order_by), ascending=ascending) if order_by else None,
            search=TextSearch(term=search, columns=[to_snake_case(f) for f in self.search_fields]) if search else None,
        )
        return [map_to_camel_case(row) for row in rows]

    async def create(self, values: dict[str, Any]) -> dict[str, Any]:
        """Insert a record and return it."""
        row = await self.store.insert(self.table, map_to_snake_case(values))
        return map_to_camel_case(row)

    async def update_by_id(self, id_: str, updates: dict[str, Any]) -> dict[str, Any] | None:
        """Apply domain-side updates and return the updated record."""
        row = await self.store.update_by_id(self.table, id_, map_to_snake_case(updates))
        return self.to_domain(row)

    async def delete_by_id(self, id_: str) -> bool:
        """Delete a record; returns whether it existed."""
        return await self.store.delete(self.table, id_)
