"""
Unit tests for application settings.
"""
import pytest

from app.config import Settings, get_settings


class TestSettings:

    @pytest.mark.unit
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    @pytest.mark.unit
    def test_test_environment_loaded(self):
        settings = get_settings()
        assert settings.ADMIN_EMAILS == ["admin@example.com"]
        assert settings.ENABLE_ADMIN_ROUTES is True

    @pytest.mark.unit
    def test_cors_config(self):
        cors = Settings().cors_config
        assert cors["allow_credentials"] is True
        assert "X-Request-ID" in cors["expose_headers"]


class TestIsAdminEmail:

    @pytest.mark.unit
    @pytest.mark.parametrize("email,expected", [
        ("admin@example.com", True),
        ("  Admin@Example.com ", True),
        ("someone@example.com", False),
        ("", False),
        (None, False),
    ])
    def test_is_admin_email(self, email, expected):
        settings = Settings()
        settings.ADMIN_EMAILS = ["admin@example.com"]
        assert settings.is_admin_email(email) is expected


class TestValidateConfiguration:
    """Test cases for Settings.validate_configuration."""

    def _settings(self, **overrides):
        settings = Settings()
        settings.DATABASE_URL = "sqlite:///./test.db"
        settings.ADMIN_EMAILS = ["admin@example.com"]
        settings.ENABLE_ADMIN_ROUTES = True
        settings.RECOMMENDATION_MAX_RESULTS = 10
        settings.RECOMMENDATION_MIN_SCORE = 50
        settings.EVENT_MATCH_MAX_PER_APPLICANT = 5
        settings.EVENT_MATCH_MIN_SCORE = 60
        for name, value in overrides.items():
            setattr(settings, name, value)
        return settings

    @pytest.mark.unit
    def test_valid(self):
        assert self._settings().validate_configuration() == []

    @pytest.mark.unit
    def test_missing_database_url(self):
        issues = self._settings(DATABASE_URL="").validate_configuration()
        assert issues == ["DATABASE_URL must be set"]

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["RECOMMENDATION_MAX_RESULTS", "EVENT_MATCH_MAX_PER_APPLICANT"])
    def test_non_positive_limits(self, name):
        issues = self._settings(**{name: 0}).validate_configuration()
        assert issues == [f"{name} must be a positive integer"]

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [-1, 101])
    def test_min_score_out_of_range(self, value):
        issues = self._settings(EVENT_MATCH_MIN_SCORE=value).validate_configuration()
        assert len(issues) == 1
        assert issues[0].startswith("EVENT_MATCH_MIN_SCORE must be between 0 and 100")

    @pytest.mark.unit
    def test_admin_routes_without_admins(self):
        issues = self._settings(ADMIN_EMAILS=[]).validate_configuration()
        assert len(issues) == 1
        assert "ADMIN_EMAILS" in issues[0]

    @pytest.mark.unit
    def test_admin_routes_disabled_without_admins(self):
        settings = self._settings(ADMIN_EMAILS=[], ENABLE_ADMIN_ROUTES=False)
        assert settings.validate_configuration() == []
