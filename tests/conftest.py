"""Test configuration and fixtures."""

import json
import os

import logfire
import pytest

from tests.keys import generate_rsa_private_key, private_key_pem

# Test defaults; real environment values win
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("PERSISTENCE__BACKEND", "memory")
os.environ.setdefault("AUTH__JWT_SECRET", "test-session-secret-0123456789abcdef0123456789")
os.environ.setdefault("GOOGLE__CLIENT_ID", "test-client.apps.googleusercontent.com")
os.environ.setdefault("GOOGLE__CLIENT_SECRET", "test-google-secret")
os.environ.setdefault("FACEBOOK__APP_ID", "424242")
os.environ.setdefault("FACEBOOK__APP_SECRET", "test-facebook-secret")

logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def service_account_key_file(tmp_path, monkeypatch):
    """Write a service account key file and point RECALL__KEY_FILE_PATH at it."""
    path = tmp_path / "service-account.json"
    path.write_text(
        json.dumps(
            {
                "type": "service_account",
                "client_email": "recall@levelup-test.iam.gserviceaccount.com",
                "private_key_id": "test-key-1",
                "private_key": private_key_pem(generate_rsa_private_key()),
                "token_uri": "https://oauth2.googleapis.com/token",
            }
        )
    )
    monkeypatch.setenv("RECALL__KEY_FILE_PATH", str(path))
    return path
