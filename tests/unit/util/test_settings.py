"""Unit tests for Settings.missing_for()."""

from levelup.config import (
    AuthSettings,
    FacebookSettings,
    GoogleSettings,
    RecallSettings,
    Settings,
)


def _settings(**overrides) -> Settings:
    values = {
        "auth": AuthSettings(jwt_secret="s" * 40),
        "google": GoogleSettings(client_id="cid", client_secret="csecret"),
        "facebook": FacebookSettings(app_id="1", app_secret="fsecret"),
        "recall": RecallSettings(key_file_path=""),
    }
    values.update(overrides)
    return Settings(**values)


class TestMissingFor:
    """Tests for required configuration per service."""

    def test_linking_complete(self):
        """Nothing missing when all linking variables are set."""
        assert _settings().missing_for("linking") == []

    def test_linking_lists_every_absent_variable(self):
        """Should name each absent variable."""
        settings = _settings(
            auth=AuthSettings(jwt_secret=""),
            facebook=FacebookSettings(app_id="", app_secret=""),
        )

        assert settings.missing_for("linking") == [
            "AUTH__JWT_SECRET",
            "FACEBOOK__APP_ID",
            "FACEBOOK__APP_SECRET",
        ]

    def test_recall_requires_key_file_path(self):
        assert _settings().missing_for("recall") == ["RECALL__KEY_FILE_PATH"]

    def test_recall_requires_existing_key_file(self, tmp_path):
        """A path to nothing counts as missing."""
        settings = _settings(
            recall=RecallSettings(key_file_path=str(tmp_path / "absent.json"))
        )

        missing = settings.missing_for("recall")

        assert len(missing) == 1
        assert missing[0].startswith("RECALL__KEY_FILE_PATH")

    def test_recall_ok_with_key_file(self, tmp_path):
        key_file = tmp_path / "key.json"
        key_file.write_text("{}")
        settings = _settings(recall=RecallSettings(key_file_path=str(key_file)))

        assert settings.missing_for("recall") == []

    def test_recall_ignores_linking_variables(self, tmp_path):
        """Recall service starts without provider credentials."""
        key_file = tmp_path / "key.json"
        key_file.write_text("{}")
        settings = _settings(
            auth=AuthSettings(jwt_secret=""),
            google=GoogleSettings(),
            recall=RecallSettings(key_file_path=str(key_file)),
        )

        assert settings.missing_for("recall") == []

    def test_nested_env_variables(self, monkeypatch):
        """Nested settings should load with the __ delimiter."""
        monkeypatch.setenv("AUTH__JWT_EXPIRY_DAYS", "3")
        monkeypatch.setenv("PERSISTENCE__BACKEND", "postgres")

        settings = Settings()

        assert settings.auth.jwt_expiry_days == 3
        assert settings.persistence.backend == "postgres"
