"""Shared fixtures: in-memory collaborators and a wired service registry."""

import uuid
from collections.abc import Iterator, Sequence
from datetime import UTC, datetime
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from gig_api.api.api_router import router as api_router
from gig_api.api.ping import router as ping_router
from gig_api.authorization import AuthorizationModel, OwnershipEvaluator, PermissionEvaluator
from gig_api.event_bus import EventBus
from gig_api.events import register_event_handlers
from gig_api.exception_handlers import register_exception_handlers
from gig_api.identity import ExternalUser, IdentityProvider
from gig_api.pipeline import PipelineExecutor
from gig_api.services.di import register_all_services
from gig_api.services.registry import ServiceRegistry, get_service_registry
from gig_api.store import OrderBy, Row, RowStore, TextSearch
from gig_api.utils.pagination import Pagination

TALENT_ID = "11111111-1111-4111-8111-111111111111"
EMPLOYER_ID = "22222222-2222-4222-8222-222222222222"
ADMIN_ID = "33333333-3333-4333-8333-333333333333"
NEWCOMER_ID = "44444444-4444-4444-8444-444444444444"

TOKENS = {
    "talent-token": TALENT_ID,
    "employer-token": EMPLOYER_ID,
    "admin-token": ADMIN_ID,
    "newcomer-token": NEWCOMER_ID,
}


class InMemoryRowStore:
    """Row store keeping tables as dicts of rows keyed by id."""

    def __init__(self):
        self.tables: dict[str, dict[str, Row]] = {}
        self.failing_tables: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def _rows(self, table: str) -> dict[str, Row]:
        self.calls.append(("access", table))
        if table in self.failing_tables:
            raise RuntimeError(f"store unavailable for {table}")
        return self.tables.setdefault(table, {})

    def seed(self, table: str, *rows: Row) -> None:
        for row in rows:
            self.tables.setdefault(table, {})[str(row["id"])] = dict(row)

    async def find_by_id(self, table: str, id_: str, fields: Sequence[str] | None = None) -> Row | None:
        row = self._rows(table).get(str(id_))
        if row is None:
            return None
        return {f: row.get(f) for f in fields} if fields else dict(row)

    async def find_many(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        pagination: Pagination | None = None,
        order_by: OrderBy | None = None,
        search: TextSearch | None = None,
    ) -> list[Row]:
        rows = [dict(r) for r in self._rows(table).values() if all(r.get(k) == v for k, v in (filters or {}).items())]
        if search is not None:
            term = search.term.lower()
            rows = [r for r in rows if any(term in str(r.get(c) or "").lower() for c in search.columns)]
        if order_by is not None:
            rows.sort(key=lambda r: str(r.get(order_by.column)), reverse=not order_by.ascending)
        if pagination is not None:
            rows = rows[pagination.offset : pagination.offset + pagination.limit]
        return rows

    async def insert(self, table: str, values: Row) -> Row:
        row = {"id": str(uuid.uuid4()), "created_at": datetime.now(UTC), **values}
        self._rows(table)[str(row["id"])] = row
        return dict(row)

    async def update_by_id(self, table: str, id_: str, patch: Row) -> Row | None:
        row = self._rows(table).get(str(id_))
        if row is None:
            return None
        row.update(patch)
        return dict(row)

    async def delete(self, table: str, id_: str) -> bool:
        return self._rows(table).pop(str(id_), None) is not None


class FakeIdentityProvider:
    """Identity provider accepting a fixed set of tokens."""

    def __init__(self, tokens: dict[str, str] | None = None):
        self.tokens = dict(tokens or {})
        self.calls: list[str] = []

    async def get_user(self, token: str) -> ExternalUser | None:
        self.calls.append(token)
        user_id = self.tokens.get(token)
        return ExternalUser(id=user_id) if user_id else None


def user_row(id_: str, role: str | None, first_name: str = "Ada", created_at: str = "2024-01-01T00:00:00Z") -> Row:
    return {
        "id": id_,
        "email": f"{first_name.lower()}@example.test",
        "first_name": first_name,
        "last_name": "Example",
        "role": role,
        "status": "active",
        "created_at": created_at,
    }


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def store() -> InMemoryRowStore:
    store = InMemoryRowStore()
    store.seed(
        "users",
        user_row(TALENT_ID, "talent", "Tara", "2024-01-01T00:00:00Z"),
        user_row(EMPLOYER_ID, "employer", "Emil", "2024-01-02T00:00:00Z"),
        user_row(ADMIN_ID, "ADMIN", "Ada", "2024-01-03T00:00:00Z"),
        user_row(NEWCOMER_ID, None, "Nia", "2024-01-04T00:00:00Z"),
    )
    return store


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider(TOKENS)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def authorization_model(store: InMemoryRowStore) -> AuthorizationModel:
    return AuthorizationModel(store)


@pytest.fixture
def executor(
    store: InMemoryRowStore,
    identity_provider: FakeIdentityProvider,
    event_bus: EventBus,
    authorization_model: AuthorizationModel,
) -> PipelineExecutor:
    return PipelineExecutor(
        event_bus,
        identity_provider,
        PermissionEvaluator(authorization_model, event_bus),
        OwnershipEvaluator(authorization_model),
    )


@pytest.fixture
def registry(
    store: InMemoryRowStore,
    identity_provider: FakeIdentityProvider,
    event_bus: EventBus,
) -> Iterator[ServiceRegistry]:
    """Global registry wired like the app, with in-memory collaborators."""
    registry = get_service_registry()
    registry.clear()
    register_all_services(registry)
    registry.register_singleton(EventBus, event_bus)
    registry.register_singleton(RowStore, store)
    registry.register_singleton(IdentityProvider, identity_provider)
    register_event_handlers(event_bus)
    yield registry
    registry.clear()


@pytest.fixture
def client(registry: ServiceRegistry) -> Iterator[TestClient]:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(ping_router)
    app.include_router(api_router, prefix="/api/v1")
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
