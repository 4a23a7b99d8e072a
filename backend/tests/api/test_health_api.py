"""Tests for the health routes."""

from sqlalchemy.exc import OperationalError


class TestHealth:

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}

    def test_db_health(self, client):
        resp = client.get("/health/db")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_db_unavailable(self, client, monkeypatch):
        def boom():
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr("fittrack.main.healthcheck", boom)

        assert client.get("/health/db").status_code == 503
