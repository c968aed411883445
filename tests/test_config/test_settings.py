"""Testes de carregamento e validação das settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.bootstrap import validate_runtime_settings
from config.settings import (
    BaseSettings,
    BookingSettings,
    EmailSettings,
    FirestoreSettings,
    StripeSettings,
    get_base_settings,
    get_booking_settings,
    get_email_settings,
    get_firestore_settings,
    get_stripe_settings,
)

_PRODUCTION_ENV = {
    "ENVIRONMENT": "production",
    "DOCUMENT_STORE_BACKEND": "firestore",
    "GCP_PROJECT": "bookit-prod",
    "STRIPE_SECRET_KEY": "sk_live_x",
    "STRIPE_WEBHOOK_SECRET": "whsec_x",
    "EMAILJS_SERVICE_ID": "svc",
    "EMAILJS_PROVIDER_TEMPLATE_ID": "tpl_p",
    "EMAILJS_BOOKER_TEMPLATE_ID": "tpl_b",
    "EMAILJS_PUBLIC_KEY": "pk",
    "CORS_ALLOWED_ORIGINS": "https://bookit.example.com",
}


class TestBookingSettings:
    def test_defaults(self) -> None:
        settings = BookingSettings()

        assert settings.cancellation_cutoff_minutes == 60
        assert settings.meeting_link_base_url == "https://meet.jit.si/bookit-"
        assert settings.revalidate_on_create is True
        assert settings.slot_days_ahead == 14
        assert settings.validate_settings() == []

    def test_loads_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("BOOKING_CANCELLATION_CUTOFF_MINUTES", "120")
        monkeypatch.setenv("BOOKING_REVALIDATE_ON_CREATE", "false")
        monkeypatch.setenv("BOOKING_SLOT_DAYS_AHEAD", "30")

        settings = get_booking_settings()

        assert settings.cancellation_cutoff_minutes == 120
        assert settings.revalidate_on_create is False
        assert settings.slot_days_ahead == 30
        assert get_booking_settings() is settings

    def test_rejects_out_of_range_values(self) -> None:
        with pytest.raises(ValidationError):
            BookingSettings(slot_days_ahead=0)
        with pytest.raises(ValidationError):
            BookingSettings(cancellation_cutoff_minutes=-1)

    def test_meeting_link_must_be_https(self) -> None:
        errors = BookingSettings(meeting_link_base_url="http://meet.example/").validate_settings()
        assert errors == ["BOOKING_MEETING_LINK_BASE_URL deve usar https"]


class TestInfraSettings:
    def test_firestore_defaults_to_memory_backend(self) -> None:
        settings = get_firestore_settings()

        assert settings.backend == "memory"
        assert settings.collection_bookings == "bookings"
        assert settings.validate("") == []

    def test_firestore_backend_requires_project(self) -> None:
        settings = FirestoreSettings(backend="firestore")

        assert settings.validate("") != []
        assert settings.validate("bookit-prod") == []

    def test_stripe_and_email_validation(self) -> None:
        assert len(StripeSettings().validate()) == 2
        assert StripeSettings(secret_key="sk", webhook_secret="whsec").validate() == []
        assert EmailSettings().is_configured is False
        assert len(EmailSettings().validate()) == 3

    def test_env_loading(self, monkeypatch) -> None:
        monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", "whsec_abc")
        monkeypatch.setenv("EMAILJS_SERVICE_ID", "svc")
        monkeypatch.setenv("ENVIRONMENT", "prod")

        assert get_stripe_settings().webhook_secret == "whsec_abc"
        assert get_email_settings().service_id == "svc"
        assert get_base_settings().environment == "production"


class TestValidateRuntimeSettings:
    def test_development_only_reports_errors(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)

        errors = validate_runtime_settings()

        assert any(error.startswith("stripe:") for error in errors)

    def test_production_fails_fast(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)

        with pytest.raises(RuntimeError, match="production"):
            validate_runtime_settings()

    def test_production_with_complete_env_passes(self, monkeypatch) -> None:
        for key, value in _PRODUCTION_ENV.items():
            monkeypatch.setenv(key, value)

        assert validate_runtime_settings() == []


class TestBaseSettings:
    def test_server_parameters_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://a.example.com, https://b.example.com,")
        monkeypatch.setenv("PORT", "9000")

        settings = get_base_settings()

        assert settings.log_level == "DEBUG"
        assert settings.cors_allowed_origins == ("https://a.example.com", "https://b.example.com")
        assert settings.port == 9000

    def test_wildcard_cors_is_rejected_in_production(self) -> None:
        assert BaseSettings(environment="production").validate() == [
            "CORS_ALLOWED_ORIGINS não pode ser '*' em produção"
        ]
        assert BaseSettings().validate() == []
