import pytest
from pydantic import ValidationError

from restaurant_platform.restaurant_service.auth import validate_auth_settings
from restaurant_platform.restaurant_service.config import Settings, settings


def test_issuer_and_jwks_url_from_base_url():
    s = Settings(AUTH0_ISSUER_BASE_URL="https://tenant.auth0.com", AUTH0_AUDIENCE="api")
    assert s.auth0_issuer == "https://tenant.auth0.com/"
    assert s.auth0_jwks_url == "https://tenant.auth0.com/.well-known/jwks.json"


def test_trailing_slash_is_not_doubled():
    s = Settings(AUTH0_ISSUER_BASE_URL="https://tenant.auth0.com/")
    assert s.auth0_issuer == "https://tenant.auth0.com/"
    assert s.auth0_jwks_url == "https://tenant.auth0.com/.well-known/jwks.json"


def test_issuer_base_url_must_be_absolute_url():
    with pytest.raises(ValidationError):
        Settings(AUTH0_ISSUER_BASE_URL="tenant.auth0.com")


def test_auth0_configured_needs_audience_and_issuer():
    assert Settings(AUTH0_AUDIENCE="api", AUTH0_ISSUER_BASE_URL="https://tenant.auth0.com").auth0_configured
    assert not Settings(AUTH0_AUDIENCE="", AUTH0_ISSUER_BASE_URL="https://tenant.auth0.com").auth0_configured
    assert not Settings(AUTH0_AUDIENCE="api", AUTH0_ISSUER_BASE_URL="").auth0_configured


def test_startup_check_rejects_missing_identity_provider(monkeypatch):
    monkeypatch.setattr(settings, "AUTH0_ISSUER_BASE_URL", "")
    with pytest.raises(RuntimeError):
        validate_auth_settings()


def test_startup_check_accepts_configured_identity_provider():
    validate_auth_settings()
