"""Sweep that purges NDJSON telemetry files from an output directory.

The sweep lists the top-level ``*.ndjson`` files once, then deletes them one
by one. Per-file failures are logged and skipped, cancellation ends the sweep
early, and the returned ``ClearResult`` always reflects what was actually
removed.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
from enum import Enum

from .base import CandidateFile, ClearResult
from .retry import RetryPolicy, WaitFunc, wait_for_cancel
from .utils import collect_candidates, is_transient_error, validate_clear_request


class DeleteOutcome(Enum):
    DELETED = "deleted"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"


async def clear_files(
    logger: logging.Logger,
    output_directory: str,
    cancel_event: threading.Event | None = None,
    *,
    retry_policy: RetryPolicy | None = None,
    wait: WaitFunc = wait_for_cancel,
) -> ClearResult:
    """Delete every top-level NDJSON file in ``output_directory``.

    Args:
        logger: Receives warnings about files that could not be removed
        output_directory: Directory the telemetry writer fills
        cancel_event: Set it to stop the sweep; checked before each file and
            during retry pauses
        retry_policy: Attempts and pauses for locked files
        wait: Interruptible sleeper, replaceable in tests

    Returns:
        ClearResult with the number of files found, deleted and bytes freed

    Raises:
        MissingLoggerError: logger is None
        InvalidDirectoryError: output_directory is empty or whitespace
    """
    validate_clear_request(logger, output_directory)
    if cancel_event is None:
        cancel_event = threading.Event()
    policy = retry_policy or RetryPolicy()

    if not os.path.isdir(output_directory):
        return ClearResult.empty(output_directory)

    try:
        candidates = await collect_candidates(logger, output_directory)
    except OSError:
        logger.warning("[TELEMETRY]: Could not list telemetry files in %s", output_directory, exc_info=True)
        return ClearResult.empty(output_directory)

    files_deleted = 0
    space_freed = 0

    for candidate in candidates:
        if cancel_event.is_set():
            logger.info(
                "[TELEMETRY]: Clear cancelled after deleting %d of %d files in %s",
                files_deleted,
                len(candidates),
                output_directory,
            )
            break

        outcome = await _try_delete_file(logger, candidate, cancel_event, policy, wait)
        if outcome is DeleteOutcome.DELETED:
            files_deleted += 1
            space_freed += candidate.size_bytes
        elif outcome is DeleteOutcome.CANCELLED:
            logger.info("[TELEMETRY]: Clear cancelled while retrying %s", candidate.path)
            break

    return ClearResult(
        directory_path=output_directory,
        files_before_count=len(candidates),
        files_deleted=files_deleted,
        space_freed_bytes=space_freed,
    )


async def _try_delete_file(
    logger: logging.Logger,
    candidate: CandidateFile,
    cancel_event: threading.Event,
    policy: RetryPolicy,
    wait: WaitFunc,
) -> DeleteOutcome:
    for attempt in range(1, policy.max_attempts + 1):
        try:
            await asyncio.to_thread(os.remove, candidate.path)
            return DeleteOutcome.DELETED
        except OSError as exc:
            if not is_transient_error(exc):
                logger.warning("[TELEMETRY]: Skipping %s, delete failed: %s", candidate.path, exc)
                return DeleteOutcome.SKIPPED

            if attempt >= policy.max_attempts:
                logger.warning(
                    "[TELEMETRY]: Failed to delete %s after %d attempts (file locked): %s",
                    candidate.path,
                    policy.max_attempts,
                    exc,
                )
                return DeleteOutcome.SKIPPED

            delay = policy.delay_for(attempt)
            logger.debug(
                "[TELEMETRY]: File locked on attempt %d/%d: %s, retrying after %.3fs",
                attempt,
                policy.max_attempts,
                candidate.path,
                delay,
            )
        except Exception:
            logger.error("[TELEMETRY]: Unexpected error deleting %s", candidate.path, exc_info=True)
            return DeleteOutcome.SKIPPED

        try:
            cancelled = await wait(cancel_event, delay)
        except Exception:
            logger.error("[TELEMETRY]: Retry wait failed for %s", candidate.path, exc_info=True)
            return DeleteOutcome.SKIPPED
        if cancelled:
            return DeleteOutcome.CANCELLED

    return DeleteOutcome.SKIPPED


def clear_files_blocking(
    logger: logging.Logger,
    output_directory: str,
    cancel_event: threading.Event | None = None,
    *,
    retry_policy: RetryPolicy | None = None,
) -> ClearResult:
    """Run ``clear_files`` to completion from synchronous code."""
    return asyncio.run(
        clear_files(logger, output_directory, cancel_event, retry_policy=retry_policy)
    )
