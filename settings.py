from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple


_LOG_LEVEL_ENV = "LOG_LEVEL"
_CORS_ORIGINS_ENV = "CORS_ALLOW_ORIGINS"
_SEED_READINGS_ENV = "TELEMETRY_SEED_READINGS_PER_DEVICE"
_SEED_MAX_AGE_ENV = "TELEMETRY_SEED_MAX_AGE_HOURS"
_SEED_RANDOM_ENV = "TELEMETRY_SEED_RANDOM_SEED"


@dataclass(frozen=True)
class Settings:
    log_level: str
    cors_allow_origins: Tuple[str, ...]
    seed_readings_per_device: int
    seed_max_age_hours: float
    seed_random_seed: int


def _read_origins(default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(_CORS_ORIGINS_ENV)
    if value is None:
        return default
    origins = tuple(part.strip() for part in value.split(",") if part.strip())
    return origins or default


def _read_int(name: str, default: int, minimum: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        log_level=_read_log_level("INFO"),
        cors_allow_origins=_read_origins(("http://localhost:5173",)),
        seed_readings_per_device=_read_int(_SEED_READINGS_ENV, 5, minimum=0),
        seed_max_age_hours=_read_positive_float(_SEED_MAX_AGE_ENV, 6.0),
        seed_random_seed=_read_int(_SEED_RANDOM_ENV, 1, minimum=0),
    )
