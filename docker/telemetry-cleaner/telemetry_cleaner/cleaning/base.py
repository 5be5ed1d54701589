from dataclasses import dataclass
from typing import Any


class InvalidArgumentError(ValueError):
    """Raised when a clear request violates the caller contract."""


class MissingLoggerError(InvalidArgumentError):
    pass


class InvalidDirectoryError(InvalidArgumentError):
    pass


@dataclass(frozen=True)
class CandidateFile:
    path: str
    size_bytes: int


@dataclass(frozen=True)
class ClearResult:
    directory_path: str
    files_before_count: int
    files_deleted: int
    space_freed_bytes: int

    @classmethod
    def empty(cls, directory_path: str) -> "ClearResult":
        return cls(directory_path=directory_path, files_before_count=0, files_deleted=0, space_freed_bytes=0)

    @property
    def files_remaining(self) -> int:
        return self.files_before_count - self.files_deleted

    def to_dict(self) -> dict[str, Any]:
        return {
            "directory_path": self.directory_path,
            "files_before_count": self.files_before_count,
            "files_deleted": self.files_deleted,
            "space_freed_bytes": self.space_freed_bytes,
        }
