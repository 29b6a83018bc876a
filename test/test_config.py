"""
Tests for application settings
"""

from crowdfunding_fields.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CROWDFUNDING_FIELDS_DATABASE_URL", raising=False)
        s = Settings(_env_file=None)
        assert s.app_name == "Crowdfunding Fields"
        assert s.database_url == "sqlite:///./crowdfunding_fields.db"
        assert s.log_level == "INFO"
        assert s.plugins_config_file == "data/plugins_config.json"

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("CROWDFUNDING_FIELDS_DATABASE_URL", "sqlite:///:memory:")
        monkeypatch.setenv("CROWDFUNDING_FIELDS_LOG_JSON", "true")
        s = Settings(_env_file=None)
        assert s.database_url == "sqlite:///:memory:"
        assert s.log_json is True

    def test_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("crowdfunding_fields_environment", "production")
        s = Settings(_env_file=None)
        assert s.environment == "production"

    def test_init_kwargs_override(self):
        s = Settings(_env_file=None, debug=True)
        assert s.debug is True
