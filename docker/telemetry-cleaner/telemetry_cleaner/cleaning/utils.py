from __future__ import annotations

import asyncio
import errno
import logging
import os
from pathlib import Path

from .base import CandidateFile, InvalidDirectoryError, MissingLoggerError


TELEMETRY_FILE_SUFFIX = ".ndjson"

# Windows ERROR_SHARING_VIOLATION and ERROR_LOCK_VIOLATION.
_SHARING_VIOLATION_WINERRORS = {32, 33}
_PERMANENT_ERRNOS = {errno.EROFS, errno.ENAMETOOLONG}


def validate_clear_request(logger: logging.Logger | None, output_directory: str | None) -> None:
    if logger is None:
        raise MissingLoggerError("logger is required")
    if output_directory is None or not str(output_directory).strip():
        raise InvalidDirectoryError("output_directory cannot be empty or whitespace")


def is_telemetry_file(name: str) -> bool:
    return name.endswith(TELEMETRY_FILE_SUFFIX)


def list_telemetry_files(output_directory: str) -> list[Path]:
    root = Path(output_directory)
    return sorted(
        (item for item in root.iterdir() if is_telemetry_file(item.name) and item.is_file()),
        key=lambda item: item.name,
    )


def is_transient_error(exc: OSError) -> bool:
    """Return True when a failed delete is worth retrying.

    Files that vanished, directories, real permission denials and read-only
    filesystems will not change within one sweep. Windows reports a file held
    open by a writer as a PermissionError carrying a sharing-violation code,
    so that case is retried like any other I/O error.
    """
    if isinstance(exc, (FileNotFoundError, IsADirectoryError, NotADirectoryError)):
        return False
    if isinstance(exc, PermissionError):
        return getattr(exc, "winerror", None) in _SHARING_VIOLATION_WINERRORS
    return exc.errno not in _PERMANENT_ERRNOS


def entry_size(path: str) -> int:
    # Deleting a symlink frees the link, not its target.
    return int(os.lstat(path).st_size)


async def probe_size(logger: logging.Logger, path: str) -> int:
    try:
        return await asyncio.to_thread(entry_size, path)
    except OSError as exc:
        logger.debug("[TELEMETRY]: Failed to read size of %s, counting it as 0 bytes: %s", path, exc)
        return 0


async def collect_candidates(logger: logging.Logger, output_directory: str) -> list[CandidateFile]:
    files = await asyncio.to_thread(list_telemetry_files, output_directory)
    candidates: list[CandidateFile] = []
    for item in files:
        path = os.path.abspath(str(item))
        candidates.append(CandidateFile(path=path, size_bytes=await probe_size(logger, path)))
    return candidates
