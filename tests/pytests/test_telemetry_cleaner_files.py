from __future__ import annotations

import importlib
import logging
import sys
import threading
from pathlib import Path


REPO_ROOT = Path(__file__).parents[2]
TELEMETRY_CLEANER_ROOT = REPO_ROOT / "docker" / "telemetry-cleaner"
if str(TELEMETRY_CLEANER_ROOT) not in sys.path:
    sys.path.append(str(TELEMETRY_CLEANER_ROOT))

files = importlib.import_module("telemetry_cleaner.files")
retry = importlib.import_module("telemetry_cleaner.cleaning.retry")


def _write_file(path: Path, size: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)


def _manager():
    return files.TelemetryFileManager(retry_policy=retry.RetryPolicy(base_delay=0.0, max_delay=0.0))


def test_clear_all_files_deletes_and_logs_summary(tmp_path: Path, caplog) -> None:
    _write_file(tmp_path / "traces.T1.ndjson", 10)
    _write_file(tmp_path / "logs.T2.errors.ndjson", 20)
    _write_file(tmp_path / "readme.txt", 5)

    with caplog.at_level(logging.INFO, logger="telemetry_cleaner"):
        result = _manager().clear_all_files(str(tmp_path))

    assert result.files_before_count == 2
    assert result.files_deleted == 2
    assert result.space_freed_bytes == 30
    assert (tmp_path / "readme.txt").exists() is True
    assert "Deleted 2 of 2 NDJSON files" in caplog.text


def test_clear_all_files_warns_on_missing_directory(tmp_path: Path, caplog) -> None:
    missing = tmp_path / "missing"

    with caplog.at_level(logging.WARNING, logger="telemetry_cleaner"):
        result = _manager().clear_all_files(str(missing))

    assert result.files_deleted == 0
    assert "Output directory does not exist" in caplog.text


def test_clear_all_files_honours_cancel_event(tmp_path: Path) -> None:
    _write_file(tmp_path / "a.ndjson", 1)
    cancel_event = threading.Event()
    cancel_event.set()

    result = _manager().clear_all_files(str(tmp_path), cancel_event)

    assert result.files_before_count == 1
    assert result.files_deleted == 0


def test_get_statistics_counts_top_level_ndjson_only(tmp_path: Path) -> None:
    _write_file(tmp_path / "a.ndjson", 100)
    _write_file(tmp_path / "b.ndjson", 50)
    _write_file(tmp_path / "notes.txt", 999)
    _write_file(tmp_path / "nested" / "c.ndjson", 999)

    stats = _manager().get_statistics(str(tmp_path))

    assert stats == files.FileStatistics(count=2, total_size_bytes=150)


def test_get_statistics_for_missing_directory_is_zero(tmp_path: Path) -> None:
    stats = _manager().get_statistics(str(tmp_path / "missing"))

    assert stats.count == 0
    assert stats.total_size_bytes == 0
