from __future__ import annotations

import logging
import threading

from apscheduler.schedulers.background import BackgroundScheduler

from .cleaning import ClearResult
from .files import TelemetryFileManager


LOGGER = logging.getLogger("telemetry_cleaner")


class CleanupScheduler:
    def __init__(
        self,
        *,
        file_manager: TelemetryFileManager,
        output_directory: str,
        interval_seconds: int = 0,
    ):
        self._file_manager = file_manager
        self._output_directory = output_directory
        self._interval_seconds = int(interval_seconds)
        self._cancel_event = threading.Event()
        self._scheduler = BackgroundScheduler()
        self._running = False
        self._last_result: ClearResult | None = None
        if self.enabled:
            self._scheduler.add_job(
                self.run_once,
                "interval",
                seconds=self._interval_seconds,
                max_instances=1,
                coalesce=True,
            )

    @property
    def enabled(self) -> bool:
        return self._interval_seconds > 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def last_result(self) -> ClearResult | None:
        return self._last_result

    def start(self) -> None:
        if self._running or not self.enabled:
            return
        self._cancel_event.clear()
        self._scheduler.start()
        self._running = True

    def stop(self) -> None:
        if not self._running:
            return
        # Lets an in-flight sweep stop at its next checkpoint.
        self._cancel_event.set()
        self._scheduler.shutdown(wait=False)
        self._running = False

    def run_once(self) -> None:
        try:
            self._last_result = self._file_manager.clear_all_files(self._output_directory, self._cancel_event)
        except Exception:
            LOGGER.warning(
                "[TELEMETRY]: Scheduled clear failed for %s",
                self._output_directory,
                exc_info=True,
            )
