from __future__ import annotations

from services.telemetry import build_default_service
from settings import get_settings


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test ,")
    monkeypatch.setenv("TELEMETRY_SEED_READINGS_PER_DEVICE", "2")
    monkeypatch.setenv("TELEMETRY_SEED_MAX_AGE_HOURS", "0.25")
    monkeypatch.setenv("TELEMETRY_SEED_RANDOM_SEED", "99")

    get_settings.cache_clear()
    build_default_service.cache_clear()

    try:
        settings = get_settings()
        assert settings.log_level == "DEBUG"
        assert settings.cors_allow_origins == ("http://a.test", "http://b.test")
        assert settings.seed_readings_per_device == 2
        assert settings.seed_max_age_hours == 0.25
        assert settings.seed_random_seed == 99

        service = build_default_service()
        assert service.readings.count() == 2 * len(service.devices)
        # every seeded reading is at most 15 minutes old
        assert {s.status.value for s in service.list_devices_with_status()} == {"online"}
    finally:
        build_default_service.cache_clear()
        get_settings.cache_clear()


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "  ")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", " , ")
    monkeypatch.setenv("TELEMETRY_SEED_READINGS_PER_DEVICE", "-4")
    monkeypatch.setenv("TELEMETRY_SEED_MAX_AGE_HOURS", "soon")
    monkeypatch.setenv("TELEMETRY_SEED_RANDOM_SEED", "")

    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.log_level == "INFO"
        assert settings.cors_allow_origins == ("http://localhost:5173",)
        assert settings.seed_readings_per_device == 5
        assert settings.seed_max_age_hours == 6.0
        assert settings.seed_random_seed == 1
    finally:
        get_settings.cache_clear()
