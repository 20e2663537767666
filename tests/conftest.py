from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from textvault.api.main import create_app
from textvault.core.settings import APISettings, MongoSettings, SecuritySettings, Settings
from textvault.crypto import CipherCodec, KeyDeriver
from textvault.documents import DocumentService, InMemoryDocumentStore

SECRET = "test-secret"
CLIENT_URL = "http://localhost:3000"


class StepClock:
    """Returns a new timestamp one second later on every call."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def settings():
    return Settings(
        security=SecuritySettings(SECRET_KEY=SECRET),
        mongo=MongoSettings(),
        api=APISettings(CLIENT_URL=CLIENT_URL),
    )


@pytest.fixture
def codec():
    return CipherCodec(KeyDeriver(SECRET))


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store(clock):
    return InMemoryDocumentStore(clock=clock)


@pytest.fixture
def service(codec, store):
    return DocumentService(codec, store)


@pytest.fixture
def client(settings, store):
    app = create_app(settings, store=store)
    with TestClient(app) as c:
        yield c
