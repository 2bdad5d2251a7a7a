"""
HTTP tests for admin login, the platform endpoints and store failures.
"""

from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError
from structlog.testing import capture_logs

from backend.main import create_app
from tests.fakes import ADMIN_PASSWORD, ADMIN_USERNAME, FakeMongoClient, make_settings


class TestLogin:
    def test_login_and_session(self, client):
        login = client.post("/api/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
        token = login.json()["access_token"]

        session = client.get("/api/auth/session", headers={"Authorization": f"Bearer {token}"})

        assert login.json()["token_type"] == "bearer"
        assert session.status_code == 200
        assert session.json()["user"]["username"] == ADMIN_USERNAME

    def test_wrong_password_is_401(self, client):
        response = client.post("/api/auth/login", json={"username": ADMIN_USERNAME, "password": "wrong"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid username or password"}

    def test_login_disabled_without_configured_credentials(self):
        app = create_app(make_settings(admin_username="", admin_password=""), client_factory=FakeMongoClient)

        with TestClient(app) as client:
            response = client.post("/api/auth/login", json={"username": "", "password": ""})

        assert response.status_code == 401


class TestPlatform:
    def test_health(self, client, mongo_client):
        response = client.get("/api/platform/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert mongo_client.commands == ["ping", "ping"]

    def test_config_reports_connection_state(self, client):
        before = client.get("/api/platform/config").json()
        client.get("/api/awards")
        after = client.get("/api/platform/config").json()

        assert before["connected"] is False
        assert after["connected"] is True
        assert after["connection_attempts"] == 1
        assert "jwt_secret" not in after

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/awards", headers={"X-Request-ID": "abc123"})

        assert response.headers["x-request-id"] == "abc123"


class UnreachableClient(FakeMongoClient):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        async def fail(name):
            raise ServerSelectionTimeoutError("connection refused")

        self.admin.command = fail


class TestStoreUnavailable:
    def test_unreachable_store_is_generic_500(self):
        app = create_app(make_settings(), client_factory=UnreachableClient)

        with TestClient(app) as client:
            response = client.get("/api/publications")
            retry = client.get("/api/publications")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert retry.status_code == 500
        assert app.state.mongo.attempts == 2


class TestErrorLogging:
    def test_store_failure_is_logged_as_error(self):
        # Arrange
        app = create_app(make_settings(), client_factory=UnreachableClient)

        # Act
        with TestClient(app) as client:
            with capture_logs() as logs:
                response = client.get("/api/awards")

        # Assert
        assert response.status_code == 500
        connect = next(e for e in logs if e["event"] == "mongo_connect_failed")
        failed = next(e for e in logs if e["event"] == "request_failed")
        assert connect["log_level"] == "error"
        assert isinstance(connect["exc_info"], ServerSelectionTimeoutError)
        assert failed["log_level"] == "error"
        assert failed["status"] == 500
        assert failed["exc_info"] is not None

    def test_unhandled_exception_keeps_traceback(self, app):
        @app.get("/api/explode")
        async def explode():
            raise RuntimeError("boom")

        with TestClient(app, raise_server_exceptions=False) as client:
            with capture_logs() as logs:
                response = client.get("/api/explode")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        entry = next(e for e in logs if e["event"] == "unhandled_exception")
        assert entry["log_level"] == "error"
        assert isinstance(entry["exc_info"], RuntimeError)
        assert entry["error_class"] == "RuntimeError"

    def test_client_errors_stay_at_info(self, client):
        with capture_logs() as logs:
            response = client.get("/api/awards/not-an-id")

        assert response.status_code == 404
        entry = next(e for e in logs if e["event"] == "request_failed")
        assert entry["log_level"] == "info"
