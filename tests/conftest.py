"""
Test configuration and fixtures for the Concierge SMS API.

Points the app at a throwaway SQLite database before it is imported, and swaps
Redis, outbound HTTP and the LLM for in-process fakes through FastAPI
dependency overrides.
"""

import os
import tempfile
import time
from typing import Dict, Generator, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, inspect, text

test_db_path = tempfile.mktemp(suffix=".db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["LLM_API_KEY"] = ""
os.environ["OPENROUTER_API_KEY"] = ""
os.environ["CHITTYCONNECT_URL"] = "https://connect.test"
os.environ["TWILIO_API_BASE"] = "https://twilio.test/2010-04-01"


TEST_CREDENTIALS = {
    "accountSid": "AC123",
    "authToken": "secret-token",
    "phoneNumber": "+15550001111",
}


class FakeCache:
    """In-memory stand-in for the async Redis client with TTL support."""

    def __init__(self):
        self.store: Dict[str, Tuple[str, Optional[float]]] = {}
        self.set_calls: List[Tuple[str, str, Optional[int]]] = []

    async def get(self, key: str) -> Optional[str]:
        entry = self.store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            del self.store[key]
            return None
        return value

    async def set(self, key: str, value: str, ex: Optional[int] = None) -> bool:
        expires_at = time.monotonic() + ex if ex else None
        self.store[key] = (value, expires_at)
        self.set_calls.append((key, value, ex))
        return True

    def expire_all(self) -> None:
        self.store = {key: (value, 0.0) for key, (value, _) in self.store.items()}


class UpstreamStub:
    """Answers ChittyConnect and Twilio requests and records them."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.credentials_status = 200
        self.credentials_payload: dict = dict(TEST_CREDENTIALS)
        self.twilio_status = 201
        self.twilio_payload: dict = {"sid": "SM0001"}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/api/credentials/twilio"):
            return httpx.Response(self.credentials_status, json=self.credentials_payload)
        if request.url.path.endswith("/Messages.json"):
            return httpx.Response(self.twilio_status, json=self.twilio_payload)
        return httpx.Response(404, text="not found")

    def calls_to(self, suffix: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(suffix)]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture
def clean_db():
    """Empty the leads table (sync engine on the same SQLite file)."""
    engine = create_engine(f"sqlite:///{test_db_path}")
    with engine.begin() as conn:
        if inspect(conn).has_table("leads"):
            conn.execute(text("DELETE FROM leads"))
    engine.dispose()
    yield


@pytest.fixture
def client(test_app, fake_cache, upstream, clean_db) -> Generator[TestClient, None, None]:
    """
    TestClient with Redis, outbound HTTP and the LLM replaced.
    The categorizer runs rules only.
    """
    from app.features.leads.services.categorizer import CategorizerService, get_categorizer
    from app.platform.cache.redis import get_cache
    from app.platform.http import get_http_client

    async def override_get_cache():
        return fake_cache

    async def override_get_http_client():
        async with upstream.client() as http_client:
            yield http_client

    test_app.dependency_overrides[get_cache] = override_get_cache
    test_app.dependency_overrides[get_http_client] = override_get_http_client
    test_app.dependency_overrides[get_categorizer] = lambda: CategorizerService(llm_client=None)

    with TestClient(test_app) as test_client:
        yield test_client

    test_app.dependency_overrides.clear()
