"""
Blog API: Settings Tests
==========================

What:  Tests for environment-driven configuration parsing and validation.
"""

import pytest
from pydantic import ValidationError

from blog_api.config import Settings


class TestSettings:

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Invalid log_level"):
            Settings(log_level="chatty")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.example, http://b.example,")
        assert settings.cors_origins_list == ["http://a.example", "http://b.example"]

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./other.db")
        monkeypatch.setenv("BACKEND_PORT", "9090")

        settings = Settings()

        assert settings.database_url == "sqlite+aiosqlite:///./other.db"
        assert settings.backend_port == 9090
