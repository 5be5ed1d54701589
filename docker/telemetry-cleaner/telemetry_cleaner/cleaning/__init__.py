from .base import (
    CandidateFile,
    ClearResult,
    InvalidArgumentError,
    InvalidDirectoryError,
    MissingLoggerError,
)
from .cleaner import DeleteOutcome, clear_files, clear_files_blocking
from .retry import BackoffStrategy, RetryPolicy, wait_for_cancel
from .utils import TELEMETRY_FILE_SUFFIX, is_telemetry_file, list_telemetry_files


__all__ = [
    "CandidateFile",
    "ClearResult",
    "InvalidArgumentError",
    "InvalidDirectoryError",
    "MissingLoggerError",
    "DeleteOutcome",
    "clear_files",
    "clear_files_blocking",
    "BackoffStrategy",
    "RetryPolicy",
    "wait_for_cancel",
    "TELEMETRY_FILE_SUFFIX",
    "is_telemetry_file",
    "list_telemetry_files",
]
