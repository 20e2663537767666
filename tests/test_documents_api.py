"""
HTTP tests for the documents API against an in-memory store.
"""
import re

from pymongo.errors import ServerSelectionTimeoutError

ENVELOPE_RE = re.compile(r"^[0-9a-f]{32}:[0-9a-f]+$")


def test_root_reports_running(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "Server is running!!"


def test_save_and_fetch_document(client, store):
    r = client.post("/api/documents", json={"textId": "doc1", "data": "hello world"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Document saved successfully"
    assert body["document"]["textId"] == "doc1"
    assert body["document"]["data"] == "hello world"
    assert "createdAt" in body["document"] and "updatedAt" in body["document"]
    assert ENVELOPE_RE.match(store.find("doc1").data)

    r = client.get("/api/documents/doc1")
    assert r.status_code == 200
    body = r.json()
    assert body == {"success": True, "document": body["document"]}
    assert body["document"]["data"] == "hello world"


def test_update_replaces_data(client):
    created = client.post("/api/documents", json={"textId": "doc1", "data": "hello world"}).json()["document"]
    updated = client.post("/api/documents", json={"textId": "doc1", "data": "updated"}).json()["document"]
    assert updated["createdAt"] == created["createdAt"]
    assert updated["updatedAt"] != created["updatedAt"]
    assert client.get("/api/documents/doc1").json()["document"]["data"] == "updated"


def test_empty_data_is_accepted(client):
    r = client.post("/api/documents", json={"textId": "blank", "data": ""})
    assert r.status_code == 200
    assert r.json()["document"]["data"] == ""


def test_missing_text_id_is_rejected(client):
    r = client.post("/api/documents", json={"data": "hello"})
    assert r.status_code == 400
    assert r.json() == {"error": "textId is required"}

    r = client.post("/api/documents", json={"textId": "", "data": "hello"})
    assert r.status_code == 400


def test_missing_data_is_rejected(client):
    for payload in ({"textId": "doc1"}, {"textId": "doc1", "data": None}):
        r = client.post("/api/documents", json=payload)
        assert r.status_code == 400
        assert r.json() == {"error": "data field is required"}


def test_unknown_document_is_404(client):
    r = client.get("/api/documents/missing")
    assert r.status_code == 404
    assert r.json() == {"error": "Document not found"}


def test_unreadable_document_is_generic_500(client, store):
    store.upsert("doc1", "not-a-valid-envelope")
    r = client.get("/api/documents/doc1")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error", "message": "Failed to decrypt data"}


def test_storage_failure_is_500(client, store, monkeypatch):
    def boom(text_id):
        raise ServerSelectionTimeoutError("no servers available")

    monkeypatch.setattr(store, "find", boom)
    r = client.get("/api/documents/doc1")
    assert r.status_code == 500
    assert r.json()["error"] == "Internal server error"


def test_request_id_is_echoed(client):
    r = client.get("/", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"
    assert client.get("/").headers.get("X-Request-ID")


def test_cors_allows_only_client_url(client):
    r = client.options(
        "/api/documents",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:3000"

    r = client.options(
        "/api/documents",
        headers={"Origin": "http://evil.example", "Access-Control-Request-Method": "POST"},
    )
    assert "access-control-allow-origin" not in r.headers


def test_empty_body_is_missing_text_id(client):
    r = client.post("/api/documents")
    assert r.status_code == 400
    assert r.json() == {"error": "textId is required"}


def test_unparseable_body_is_missing_text_id(client):
    r = client.post("/api/documents", content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "textId is required"}


def test_non_string_data_is_rejected(client):
    r = client.post("/api/documents", json={"textId": "doc1", "data": {"nested": True}})
    assert r.status_code == 400
    assert r.json() == {"error": "data field is required"}


def test_numeric_text_id_is_used_as_text(client):
    r = client.post("/api/documents", json={"textId": 5, "data": "five"})
    assert r.status_code == 200
    assert r.json()["document"]["textId"] == "5"
    assert client.get("/api/documents/5").json()["document"]["data"] == "five"
