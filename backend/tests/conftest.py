import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from designtaste.config import settings
from designtaste.database import SessionLocal, engine as default_engine, get_db, init_db
from designtaste.main import app
from designtaste.services import ai_service
from designtaste.services.ai_providers import AIProvider


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def tmp_data_dir(tmp_path):
    data_dir = tmp_path / "DesignTaste"
    data_dir.mkdir()
    original = settings.data_dir
    settings.data_dir = data_dir
    yield data_dir
    settings.data_dir = original


@pytest.fixture
def test_db(tmp_data_dir):
    db_path = tmp_data_dir / "designtaste.db"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    # The background worker opens its own sessions from SessionLocal.
    SessionLocal.configure(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    SessionLocal.configure(bind=default_engine)
    engine.dispose()


@pytest.fixture
def client(test_db):
    with TestClient(app) as c:
        yield c


class FakeChatClient:
    """Records prompts and replays canned replies; raises when given an exception."""

    def __init__(self, *replies, provider=None):
        self.provider = provider or AIProvider.ANTHROPIC
        self.replies = list(replies)
        self.calls = []

    async def complete(self, system, prompt, image_url=None, model="text", temperature=0.7, max_tokens=2000):
        self.calls.append({"system": system, "prompt": prompt, "image_url": image_url, "model": model})
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def fake_ai(monkeypatch):
    """Route every AI service call through a FakeChatClient; set ``.replies`` in the test."""
    fake = FakeChatClient("")
    monkeypatch.setattr(ai_service, "get_client", lambda provider: fake)
    return fake


@pytest.fixture
def element_data():
    return {
        "tagName": "BUTTON",
        "textContent": "Sign up now",
        "classList": ["btn", "btn-primary", "px-4"],
        "tailwindClasses": ["px-4"],
        "html": '<button class="btn btn-primary px-4">Sign up now</button>',
        "css": "",
        "computedStyles": {
            "color": "rgb(255, 255, 255)",
            "background-color": "rgb(59, 130, 246)",
            "padding": "8px 16px",
            "margin": "0px",
            "font-size": "14px",
        },
        "boundingBox": {"x": 10, "y": 20, "width": 120, "height": 40},
    }
