"""
Tests for server runner helpers and default MongoDB wiring.
"""
from textvault import run
from textvault.api.main import create_app
from textvault.core.db import create_mongo_client, documents_collection
from textvault.core.settings import MongoSettings
from textvault.documents import MongoDocumentStore


def test_env_bool(monkeypatch):
    monkeypatch.delenv("RELOAD", raising=False)
    assert run.env_bool("RELOAD") is False
    assert run.env_bool("RELOAD", True) is True
    monkeypatch.setenv("RELOAD", " Yes ")
    assert run.env_bool("RELOAD") is True
    monkeypatch.setenv("RELOAD", "0")
    assert run.env_bool("RELOAD", True) is False


def test_get_port(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    assert run.get_port() == 8080
    monkeypatch.setenv("PORT", "not-a-port")
    assert run.get_port() == 3001


def test_main_starts_uvicorn_with_factory(monkeypatch):
    captured = {}
    monkeypatch.setattr(run.uvicorn, "run", lambda target, **kwargs: captured.update(target=target, **kwargs))
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.setenv("HOST", "127.0.0.1")
    run.main()
    assert captured["target"] == "textvault.api.main:create_app"
    assert captured["factory"] is True
    assert captured["port"] == 4000
    assert captured["host"] == "127.0.0.1"


def test_documents_collection_uses_configured_names():
    mongo = MongoSettings(DB_NAME="vault_test", DB_COLLECTION="docs")
    client = create_mongo_client(mongo)
    try:
        collection = documents_collection(client, mongo)
        assert collection.name == "docs"
        assert collection.database.name == "vault_test"
    finally:
        client.close()


def test_create_app_defaults_to_mongo_store(settings):
    app = create_app(settings)
    assert isinstance(app.state.document_service._store, MongoDocumentStore)
