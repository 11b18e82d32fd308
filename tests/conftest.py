from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import main
from businesses.backends import BusinessBackend
from core.settings import Settings


class FakeBackend(BusinessBackend):
    """In-memory backend recording every fetch."""

    name = "fake"

    def __init__(self, rows: list[dict] | None = None, error: Exception | None = None) -> None:
        self.rows = rows or []
        self.error = error
        self.calls: list[dict] = []
        self.closed = False

    async def fetch_recent(self, *, limit: int, authorization: str | None = None) -> list[dict]:
        self.calls.append({"limit": limit, "authorization": authorization})
        if self.error is not None:
            raise self.error
        return list(self.rows)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_backend():
    return FakeBackend


@pytest.fixture
def make_client():
    """
    Build a TestClient with the lifespan running (so app.state is populated).
    """
    clients: list[TestClient] = []

    def _make(
        *,
        allowed_origins: tuple[str, ...] = (),
        backend: BusinessBackend | None = None,
        raise_server_exceptions: bool = True,
    ) -> TestClient:
        app = main.create_app(
            Settings(allowed_origins=tuple(allowed_origins)),
            business_backend=backend or FakeBackend(),
        )
        client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
