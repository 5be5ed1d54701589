from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass

from .cleaning import ClearResult, RetryPolicy, clear_files_blocking, list_telemetry_files


LOGGER = logging.getLogger("telemetry_cleaner")


@dataclass(frozen=True)
class FileStatistics:
    count: int
    total_size_bytes: int


class TelemetryFileManager:
    """Entry point used by the API and the scheduler to purge telemetry files.

    Sweeps over the same directory must not overlap, so calls to
    ``clear_all_files`` are serialized.
    """

    def __init__(self, *, logger: logging.Logger | None = None, retry_policy: RetryPolicy | None = None):
        self._logger = logger or logging.getLogger("telemetry_cleaner.cleaner")
        self._retry_policy = retry_policy
        self._lock = threading.Lock()

    def clear_all_files(self, output_directory: str, cancel_event: threading.Event | None = None) -> ClearResult:
        if output_directory and not os.path.isdir(output_directory):
            LOGGER.warning("[TELEMETRY]: Output directory does not exist: %s", output_directory)

        with self._lock:
            LOGGER.info("[TELEMETRY]: Clearing all NDJSON files in %s", output_directory)
            result = clear_files_blocking(
                self._logger,
                output_directory,
                cancel_event,
                retry_policy=self._retry_policy,
            )

        LOGGER.info(
            "[TELEMETRY]: Deleted %d of %d NDJSON files (%d bytes)",
            result.files_deleted,
            result.files_before_count,
            result.space_freed_bytes,
        )
        return result

    def get_statistics(self, output_directory: str) -> FileStatistics:
        try:
            if not os.path.isdir(output_directory):
                return FileStatistics(count=0, total_size_bytes=0)
            files = list_telemetry_files(output_directory)
        except OSError:
            return FileStatistics(count=0, total_size_bytes=0)

        total = 0
        for item in files:
            try:
                total += int(item.stat().st_size)
            except OSError:
                continue
        return FileStatistics(count=len(files), total_size_bytes=total)
