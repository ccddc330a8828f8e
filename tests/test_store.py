"""Tests for the SQL row store over an in-memory SQLite database."""

from collections.abc import Iterator

import pytest
from sqlalchemy import Column, MetaData, String, Table, insert
from sqlalchemy.exc import NoSuchTableError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from gig_api.store import OrderBy, SqlRowStore, TextSearch
from gig_api.utils.pagination import normalize_pagination

USERS = [
    {"id": "u1", "first_name": "Tara", "last_name": "Silva", "username": "tara", "role": "talent", "created_at": "2024-01-01"},
    {"id": "u2", "first_name": "Emil", "last_name": "Berg", "username": "emil_b", "role": "employer", "created_at": "2024-01-02"},
    {"id": "u3", "first_name": "Nia", "last_name": "Tarrant", "username": "nia", "role": "talent", "created_at": "2024-01-03"},
    {"id": "u4", "first_name": "Ada", "last_name": "100%", "username": "ada", "role": None, "created_at": "2024-01-04"},
]


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    metadata = MetaData()
    users = Table(
        "users",
        metadata,
        Column("id", String, primary_key=True),
        Column("first_name", String),
        Column("last_name", String),
        Column("username", String),
        Column("role", String, nullable=True),
        Column("created_at", String),
    )
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(insert(users), USERS)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(engine) -> Iterator[SqlRowStore]:
    yield SqlRowStore(session_factory=lambda: Session(engine))


def ids(rows: list[dict]) -> list[str]:
    return [row["id"] for row in rows]


class TestReads:
    @pytest.mark.asyncio
    async def test_find_by_id(self, sql_store):
        row = await sql_store.find_by_id("users", "u2")

        assert row == USERS[1]
        assert await sql_store.find_by_id("users", "missing") is None

    @pytest.mark.asyncio
    async def test_find_by_id_projection(self, sql_store):
        assert await sql_store.find_by_id("users", "u1", fields=["role", "first_name"]) == {"role": "talent", "first_name": "Tara"}

    @pytest.mark.asyncio
    async def test_unknown_table(self, sql_store):
        with pytest.raises(NoSuchTableError):
            await sql_store.find_by_id("gigs", "g1")

    @pytest.mark.asyncio
    async def test_equality_and_in_filters(self, sql_store):
        assert ids(await sql_store.find_many("users", filters={"role": "talent"}, order_by=OrderBy(column="id"))) == ["u1", "u3"]
        assert sorted(ids(await sql_store.find_many("users", filters={"id": ["u2", "u4", "u9"]}))) == ["u2", "u4"]

    @pytest.mark.asyncio
    async def test_order_and_pagination(self, sql_store):
        newest_first = OrderBy(column="created_at", ascending=False)

        first = await sql_store.find_many("users", pagination=normalize_pagination(1, 3), order_by=newest_first)
        second = await sql_store.find_many("users", pagination=normalize_pagination(2, 3), order_by=newest_first)

        assert ids(first) == ["u4", "u3", "u2"]
        assert ids(second) == ["u1"]

    @pytest.mark.asyncio
    async def test_search_any_column_ignoring_case(self, sql_store):
        search = TextSearch(term="TAR", columns=["first_name", "last_name", "username"])

        rows = await sql_store.find_many("users", search=search, order_by=OrderBy(column="id"))

        assert ids(rows) == ["u1", "u3"]

    @pytest.mark.asyncio
    async def test_search_combined_with_filters(self, sql_store):
        search = TextSearch(term="tar", columns=["first_name", "last_name"])

        assert ids(await sql_store.find_many("users", filters={"role": "employer"}, search=search)) == []

    @pytest.mark.asyncio
    async def test_search_wildcards_are_literal(self, sql_store):
        assert ids(await sql_store.find_many("users", search=TextSearch(term="%", columns=["last_name"]))) == ["u4"]
        assert ids(await sql_store.find_many("users", search=TextSearch(term="_", columns=["username"]))) == ["u2"]


class TestWrites:
    @pytest.mark.asyncio
    async def test_insert_returns_stored_row(self, sql_store):
        values = {"id": "u5", "first_name": "Ola", "last_name": "N", "username": "ola", "role": None, "created_at": "2024-02-01"}

        assert await sql_store.insert("users", values) == values
        assert await sql_store.find_by_id("users", "u5") == values

    @pytest.mark.asyncio
    async def test_update_returns_updated_row(self, sql_store):
        row = await sql_store.update_by_id("users", "u4", {"role": "employer"})

        assert row is not None
        assert row["role"] == "employer"
        assert row["first_name"] == "Ada"
        assert (await sql_store.find_by_id("users", "u4"))["role"] == "employer"

    @pytest.mark.asyncio
    async def test_update_missing_row(self, sql_store):
        assert await sql_store.update_by_id("users", "missing", {"role": "talent"}) is None

    @pytest.mark.asyncio
    async def test_delete_reports_whether_a_row_was_removed(self, sql_store):
        assert await sql_store.delete("users", "u1") is True
        assert await sql_store.delete("users", "u1") is False
        assert await sql_store.find_by_id("users", "u1") is None
