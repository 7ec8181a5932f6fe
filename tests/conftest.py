"""
Shared fixtures.

- In-memory SQLite for the saved-text slot, fresh per test
- Upstream services (LLM, AnkiConnect) answered by an httpx.MockTransport
- The FastAPI app is exercised through TestClient, the real "unit"
"""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from wortschatz.deps import get_upstream_transport
from wortschatz.main import create_app
from wortschatz.models import Base
from wortschatz.services.text_store import TextStore
from wortschatz.settings import Settings, get_settings

LLM_HOST = "llm.test"
ANKI_HOST = "anki.test"

HAUS_ANALYSIS = {
    "grammarDetailsAndUsage": "<i>das Haus</i> (neuter noun)",
    "example": {"german": "Das Haus ist groß.", "russian": "Дом большой."},
}


def llm_envelope(content: Optional[str], shape: str = "message") -> Dict[str, Any]:
    """Chat-completion body carrying ``content`` as message content or raw text."""
    if shape == "text":
        return {"choices": [{"text": content}]}
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeUpstream:
    """Answers outbound requests per host and records what was sent."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._replies: Dict[str, Tuple[int, Dict[str, Any]]] = {}
        self._failures: Dict[str, Exception] = {}
        self.transport = httpx.MockTransport(self._handle)

    def reply(self, host: str, status_code: int = 200, *, json: Any = None, text: Optional[str] = None):
        kwargs: Dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if text is not None:
            kwargs["text"] = text
        self._replies[host] = (status_code, kwargs)

    def fail(self, host: str, exc: Exception):
        self._failures[host] = exc

    def requests_to(self, host: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    def sent_json(self, host: str, i: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests_to(host)[i].content)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if host in self._failures:
            raise self._failures[host]
        if host not in self._replies:
            raise httpx.ConnectError(f"no route to {host}", request=request)
        status_code, kwargs = self._replies[host]
        return httpx.Response(status_code, **kwargs)


@pytest.fixture
def db_engine():
    """In-memory SQLite shared across threads (TestClient runs the app in another one)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def store(session_factory):
    s = TextStore(session_factory)
    s.load()
    return s


@pytest.fixture
def settings():
    return Settings(
        llm_api_key="test-key",
        llm_base_url=f"https://{LLM_HOST}/v1",
        llm_model="deepseek-chat",
        anki_connect_url=f"http://{ANKI_HOST}:8765",
        anki_deck_name="German::Reader",
        upstream_timeout_sec=5.0,
    )


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def app(session_factory, settings, upstream):
    application = create_app(session_factory=session_factory)
    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_upstream_transport] = lambda: upstream.transport
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
