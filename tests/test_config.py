"""Tests for configuration parsing."""

from intake_tracker.config import Settings, parse_cors_origins


def test_parse_cors_origins_strips_and_dedupes() -> None:
    raw = " http://localhost:3000/, https://app.example.com ,http://localhost:3000"

    assert parse_cors_origins(raw) == [
        "http://localhost:3000",
        "https://app.example.com",
    ]


def test_parse_cors_origins_wildcard_and_empty() -> None:
    assert parse_cors_origins("*") == ["*"]
    assert parse_cors_origins("") == []
    assert parse_cors_origins(None) == []


def test_settings_defaults(settings: Settings) -> None:
    assert settings.fdc_base_url == "https://api.nal.usda.gov/fdc/v1"
    assert settings.fdc_timeout_seconds == 10.0
