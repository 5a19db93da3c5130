from __future__ import annotations

import logging
import os
from dataclasses import dataclass

ENV_PREFIX = "JSON_DISTILLER_"


@dataclass(frozen=True)
class AppConfig:
    host: str = "127.0.0.1"
    port: int = 7860
    log_level: str = "INFO"
    # Upper bound of the samples-per-category control in the UI.
    max_samples: int = 10

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"{ENV_PREFIX}PORT out of range: {self.port}")
        if self.max_samples < 1:
            raise ValueError(f"{ENV_PREFIX}MAX_SAMPLES must be at least 1: {self.max_samples}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL is not a logging level: {self.log_level}")

    def clamp_samples(self, value) -> int:
        """Clamp a UI samples-per-category value into [1, max_samples]."""
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            number = 1
        return max(1, min(self.max_samples, number))


def env_text(name: str, default: str = "") -> str:
    return os.getenv(ENV_PREFIX + name, default).strip()


def env_int(name: str, default: int) -> int:
    raw = env_text(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def load_config() -> AppConfig:
    defaults = AppConfig()
    return AppConfig(
        host=env_text("HOST", defaults.host) or defaults.host,
        port=env_int("PORT", defaults.port),
        log_level=(env_text("LOG_LEVEL", defaults.log_level) or defaults.log_level).upper(),
        max_samples=env_int("MAX_SAMPLES", defaults.max_samples),
    )
