# tests/conftest.py
from __future__ import annotations

import os
import tempfile

# Settings and the engine are built at import time, so the environment has
# to be in place before anything under homepro is imported.
_DB_DIR = tempfile.mkdtemp(prefix="homepro-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["RATE_LIMIT_DISABLED"] = "true"
os.environ["AUTH_MODE"] = "dev"
os.environ["APP_ENV"] = "local"
for _key in (
    "CRON_SECRET",
    "RESEND_API_KEY",
    "ONESIGNAL_APP_ID",
    "ONESIGNAL_REST_API_KEY",
    "BLOB_READ_WRITE_TOKEN",
    "CLOUDINARY_URL",
    "RENTCAST_API_KEY",
    "RAPIDAPI_KEY",
):
    os.environ[_key] = ""

from dataclasses import dataclass, field  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from homepro import models  # noqa: E402,F401
from homepro.db import Base, engine  # noqa: E402
from homepro.deps import get_email_sender, get_push_sender  # noqa: E402
from homepro.main import create_app  # noqa: E402
from homepro.notifications.base import SendResult  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@dataclass
class FakeEmail:
    ok: bool = True
    sent: list[tuple[str, Any]] = field(default_factory=list)

    def enabled(self) -> bool:
        return True

    def send(self, to, message):
        self.sent.append((to, message))
        return SendResult(ok=self.ok, provider_id="email-1" if self.ok else None)


@dataclass
class FakePush:
    ok: bool = True
    sent: list[tuple[list[str], Any]] = field(default_factory=list)

    def enabled(self) -> bool:
        return True

    def send(self, player_ids, message):
        self.sent.append((list(player_ids), message))
        return SendResult(ok=self.ok, provider_id="push-1" if self.ok else None)


@pytest.fixture
def email() -> FakeEmail:
    return FakeEmail()


@pytest.fixture
def push() -> FakePush:
    return FakePush()


@pytest.fixture
def app(email, push):
    app = create_app()
    app.dependency_overrides[get_email_sender] = lambda: email
    app.dependency_overrides[get_push_sender] = lambda: push
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def auth_headers(user: str = "user_a", email: str | None = None) -> dict[str, str]:
    return {"X-User-Id": user, "X-User-Email": email or f"{user}@example.com"}


@pytest.fixture
def headers():
    return auth_headers


@pytest.fixture
def make_home(client):
    def _make(h: dict[str, str], **overrides) -> dict:
        body = {
            "address": "123 Main St",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
            "yearBuilt": 1990,
            "homeType": "single-family",
        }
        body.update(overrides)
        r = client.post("/api/homes", json=body, headers=h)
        assert r.status_code in (200, 201), r.text
        return r.json()["home"]

    return _make
