import logging

from sqlalchemy.exc import OperationalError

from todo_backend import services
from todo_backend.security import create_access_token


def _broken(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("connection refused: db-host-internal"))


def test_store_failure_is_collapsed_to_500(client, settings, monkeypatch, caplog):
    monkeypatch.setattr(services, "list_tasks", _broken)
    hdrs = {"Authorization": create_access_token(1, settings.jwt_secret)}

    with caplog.at_level(logging.ERROR, logger="todo_backend"):
        resp = client.get("/tasks", headers=hdrs)

    assert resp.status_code == 500
    assert resp.text == "Server error"
    assert "db-host-internal" not in resp.text
    # подробности остаются в серверном логе
    assert "db-host-internal" in caplog.text


def test_register_store_failure_is_500(client, monkeypatch):
    monkeypatch.setattr(services, "register_user", _broken)
    resp = client.post("/register", json={"username": "alice", "password": "pw1"})
    assert resp.status_code == 500
    assert resp.text == "Server error"
