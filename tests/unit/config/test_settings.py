"""Unit tests for Settings defaults and environment overrides."""

from app.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("ADMIN_SECRET", "AGENT_ACCESS_LEVEL", "WEBHOOK_SECRET", "PORT"):
            monkeypatch.delenv(name, raising=False)

        config = Settings(_env_file=None)

        assert config.port == 3001
        assert config.webhook_secret == "demo-secret"
        assert config.agent_access_level == "medium"
        assert config.admin_auth_enabled is False
        assert config.analysis_delay_scale == 1.0
        assert config.trigger_delay_seconds == 1.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DOCS_REPO_OWNER", "acme")
        monkeypatch.setenv("DOCS_REPO", "handbook")
        monkeypatch.setenv("ADMIN_SECRET", "s3cret")
        monkeypatch.setenv("AGENT_ACCESS_LEVEL", "high")

        config = Settings(_env_file=None)

        assert config.docs_repo_full_name == "acme/handbook"
        assert config.admin_auth_enabled is True
        assert config.agent_access_level == "high"
