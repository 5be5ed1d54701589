from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

from .cleaning import RetryPolicy


DEFAULT_OUTPUT_DIR = "./telemetry-data"


@dataclass(frozen=True)
class CleanerSettings:
    output_directory: str = DEFAULT_OUTPUT_DIR
    log_level: str = "INFO"
    api_port: int = 9200
    clear_interval_seconds: int = 0
    delete_max_attempts: int = 3
    delete_retry_delay_ms: int = 100

    def retry_policy(self) -> RetryPolicy:
        delay = self.delete_retry_delay_ms / 1000.0
        return RetryPolicy(max_attempts=self.delete_max_attempts, base_delay=delay, max_delay=max(delay, 1.0))


def _read_int(values: Mapping[str, str | None], key: str, default: int, *, minimum: int) -> int:
    raw = str(values.get(key) or "").strip()
    if not raw:
        return default
    try:
        parsed = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got '{raw}'") from None
    if parsed < minimum:
        raise ValueError(f"{key} must be >= {minimum}")
    return parsed


def load_settings(env_file: str | Path | None = None, environ: Mapping[str, str] | None = None) -> CleanerSettings:
    """Build settings from an optional .env file overlaid with environment variables."""
    values: dict[str, str | None] = {}
    if env_file is not None and Path(env_file).exists():
        values.update(dotenv_values(env_file))
    values.update(os.environ if environ is None else environ)

    api_port = _read_int(values, "TC_API_PORT", 9200, minimum=1)
    if api_port > 65535:
        raise ValueError("TC_API_PORT must be in range 1-65535")

    return CleanerSettings(
        output_directory=str(values.get("TC_OUTPUT_DIR") or "").strip() or DEFAULT_OUTPUT_DIR,
        log_level=str(values.get("TC_LOG_LEVEL") or "INFO").upper().strip(),
        api_port=api_port,
        clear_interval_seconds=_read_int(values, "TC_CLEAR_INTERVAL_SECONDS", 0, minimum=0),
        delete_max_attempts=_read_int(values, "TC_DELETE_MAX_ATTEMPTS", 3, minimum=1),
        delete_retry_delay_ms=_read_int(values, "TC_DELETE_RETRY_DELAY_MS", 100, minimum=0),
    )
