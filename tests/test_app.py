from fastapi.testclient import TestClient

from before_you_sign.main import app
from before_you_sign.services import accounts


def test_home_page(client):
    res = client.get("/")
    assert res.status_code == 200
    assert "Before You Sign" in res.text


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
    assert client.get("/health/db").json() == {"database": "ok", "error": None}


def test_unknown_route_renders_404_page(client):
    res = client.get("/no/such/page")
    assert res.status_code == 404
    assert res.headers["content-type"].startswith("text/html")
    assert "Page Not Found" in res.text


def test_request_id_header(client):
    res = client.get("/", headers={"X-Request-ID": "abc123"})
    assert res.headers["x-request-id"] == "abc123"
    assert client.get("/").headers["x-request-id"]


def test_unhandled_error_renders_500_page(monkeypatch):
    def explode(db, username, password):
        raise RuntimeError("boom")

    monkeypatch.setattr(accounts, "authenticate_user", explode)

    with TestClient(app, raise_server_exceptions=False) as c:
        res = c.post("/login", data={"username": "a", "password": "b"})

    assert res.status_code == 500
    assert "Something went wrong" in res.text
