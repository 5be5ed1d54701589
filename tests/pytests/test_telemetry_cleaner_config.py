from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).parents[2]
TELEMETRY_CLEANER_ROOT = REPO_ROOT / "docker" / "telemetry-cleaner"
if str(TELEMETRY_CLEANER_ROOT) not in sys.path:
    sys.path.append(str(TELEMETRY_CLEANER_ROOT))

config = importlib.import_module("telemetry_cleaner.config")


def test_load_settings_defaults() -> None:
    settings = config.load_settings(environ={})

    assert settings.output_directory == "./telemetry-data"
    assert settings.log_level == "INFO"
    assert settings.api_port == 9200
    assert settings.clear_interval_seconds == 0
    assert settings.delete_max_attempts == 3
    assert settings.delete_retry_delay_ms == 100


def test_environment_overrides_dotenv_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "TC_OUTPUT_DIR=/from/dotenv\nTC_LOG_LEVEL=debug\nTC_CLEAR_INTERVAL_SECONDS=60\n",
        encoding="utf-8",
    )

    settings = config.load_settings(env_file=env_file, environ={"TC_OUTPUT_DIR": "/from/env"})

    assert settings.output_directory == "/from/env"
    assert settings.log_level == "DEBUG"
    assert settings.clear_interval_seconds == 60


def test_missing_dotenv_file_is_ignored(tmp_path: Path) -> None:
    settings = config.load_settings(env_file=tmp_path / "absent.env", environ={"TC_API_PORT": "9300"})

    assert settings.api_port == 9300


def test_blank_output_dir_falls_back_to_default() -> None:
    settings = config.load_settings(environ={"TC_OUTPUT_DIR": "   "})

    assert settings.output_directory == "./telemetry-data"


@pytest.mark.parametrize(
    ("environ", "message"),
    [
        ({"TC_API_PORT": "abc"}, "TC_API_PORT must be an integer"),
        ({"TC_API_PORT": "70000"}, "TC_API_PORT must be in range 1-65535"),
        ({"TC_DELETE_MAX_ATTEMPTS": "0"}, "TC_DELETE_MAX_ATTEMPTS must be >= 1"),
        ({"TC_DELETE_RETRY_DELAY_MS": "-5"}, "TC_DELETE_RETRY_DELAY_MS must be >= 0"),
    ],
)
def test_invalid_values_raise(environ: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        config.load_settings(environ=environ)


def test_retry_policy_uses_configured_attempts_and_delay() -> None:
    settings = config.load_settings(
        environ={"TC_DELETE_MAX_ATTEMPTS": "5", "TC_DELETE_RETRY_DELAY_MS": "20"}
    )

    policy = settings.retry_policy()

    assert policy.max_attempts == 5
    assert policy.base_delay == pytest.approx(0.02)
    assert len(policy.delays()) == 4
