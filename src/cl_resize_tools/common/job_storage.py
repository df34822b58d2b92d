"""
JobStorage Protocol - job-scoped storage for source images and thumbnails.

Callers address files only by job_id and a job-relative path; the storage
implementation owns the root directory and layout.
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class JobStorageError(Exception):
    """Base class for storage-related errors."""


class JobDirectoryCreationError(JobStorageError):
    def __init__(self, job_id: str):
        self.job_id: str = job_id
        super().__init__(f"Failed to create storage directory for job '{job_id}'")


class InvalidStoragePathError(JobStorageError, ValueError):
    def __init__(self, job_id: str, relative_path: str):
        self.job_id: str = job_id
        self.relative_path: str = relative_path
        super().__init__(
            f"Invalid relative path '{relative_path}' for job '{job_id}' (path traversal)"
        )


class SavedJobFile(BaseModel):
    """Metadata of a file written into job storage."""

    relative_path: str = Field(..., description="Path relative to the job directory")
    size: int = Field(..., ge=0, description="File size in bytes")
    hash: str | None = Field(None, description="SHA256 of the content")

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


class AsyncFileLike(Protocol):
    """Minimal async reader, e.g. FastAPI's UploadFile."""

    async def read(self, size: int, /) -> bytes: ...


FileLike = AsyncFileLike | bytes | str | PathLike[str]


@runtime_checkable
class JobStorage(Protocol):
    def create_directory(self, job_id: str) -> None:
        """Create the job directory if missing.

        Raises:
            JobDirectoryCreationError: If the directory cannot be created
        """
        ...

    def remove(self, job_id: str) -> bool:
        """Remove every file of a job. Returns False on failure."""
        ...

    async def save(
        self,
        job_id: str,
        relative_path: str,
        file: FileLike,
        *,
        mkdirs: bool = True,
    ) -> SavedJobFile:
        """Store bytes, a copy of an existing file, or an async upload stream."""
        ...

    def allocate_path(
        self,
        job_id: str,
        relative_path: str,
        *,
        mkdirs: bool = True,
    ) -> Path:
        """Absolute path a filesystem-bound writer (Pillow) may write to."""
        ...

    def resolve_path(
        self,
        job_id: str,
        relative_path: str | None = None,
    ) -> Path:
        """Absolute path of a stored file, or of the job directory."""
        ...
