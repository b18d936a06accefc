"""End-to-end tests for service startup checks."""

import pytest
from fastapi.testclient import TestClient

from levelup.config import Settings
from levelup.interface.api.app import create_app, create_recall_app
from levelup.util.error import ConfigurationError
from tests.di import build_test_container


class TestConfigurationRefusal:
    """The factory refuses to build a service with missing configuration."""

    def test_linking_without_secret(self, monkeypatch):
        monkeypatch.setenv("AUTH__JWT_SECRET", "")

        with pytest.raises(ConfigurationError, match="AUTH__JWT_SECRET"):
            create_app("linking", container=build_test_container())

    def test_linking_without_facebook_app(self):
        settings = Settings(facebook={"app_id": "", "app_secret": ""})

        with pytest.raises(ConfigurationError) as exc_info:
            create_app("linking", container=build_test_container(), settings=settings)

        assert exc_info.value.variables == ["FACEBOOK__APP_ID", "FACEBOOK__APP_SECRET"]

    def test_recall_without_key_file(self, monkeypatch):
        monkeypatch.delenv("RECALL__KEY_FILE_PATH", raising=False)

        with pytest.raises(ConfigurationError, match="RECALL__KEY_FILE_PATH"):
            create_recall_app(container=build_test_container())

    def test_recall_with_absent_key_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RECALL__KEY_FILE_PATH", str(tmp_path / "missing.json"))

        with pytest.raises(ConfigurationError, match="file not found"):
            create_recall_app(container=build_test_container())

    def test_recall_with_key_file(self, service_account_key_file):
        client = TestClient(create_recall_app(container=build_test_container()))

        assert client.get("/health").json()["service"] == "recall"


class TestCors:
    """CORS preflight for browser-hosted clients."""

    def test_preflight(self):
        client = TestClient(create_app("linking", container=build_test_container()))

        response = client.options(
            "/post_count",
            headers={
                "Origin": "https://game.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization",
            },
        )

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers
