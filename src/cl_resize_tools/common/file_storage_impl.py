from __future__ import annotations

import hashlib
import shutil
from collections.abc import AsyncIterator
from os import PathLike
from pathlib import Path
from typing import Final

import aiofiles
from loguru import logger
from typing_extensions import override

from .job_storage import (
    FileLike,
    InvalidStoragePathError,
    JobDirectoryCreationError,
    JobStorage,
    SavedJobFile,
)


class LocalFileStorage(JobStorage):
    """
    JobStorage backed by one directory per job under base_dir.

        base_dir/
            <job_id>/
                input/<uploaded file>
                output/thumbnail.jpg

    Job ids and job-relative paths must both stay inside base_dir.
    """

    _CHUNK_SIZE: Final[int] = 1024 * 1024

    def __init__(self, base_dir: str | PathLike[str]):
        self._base_dir: Path = Path(base_dir).expanduser().resolve()
        self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _job_dir(self, job_id: str) -> Path:
        job_dir = (self._base_dir / job_id).resolve()
        if job_dir.parent != self._base_dir:
            raise InvalidStoragePathError(job_id, "")
        return job_dir

    def _safe_path(self, job_id: str, relative_path: str | None = None) -> Path:
        job_dir = self._job_dir(job_id)
        if relative_path is None:
            return job_dir

        resolved = (job_dir / relative_path).resolve()
        if job_dir not in resolved.parents:
            raise InvalidStoragePathError(job_id, relative_path)
        return resolved

    async def _chunks(self, file: FileLike) -> AsyncIterator[bytes]:
        if isinstance(file, (bytes, bytearray)):
            yield bytes(file)
            return

        if isinstance(file, (str, PathLike)):
            async with aiofiles.open(Path(file).expanduser(), "rb") as f:
                while chunk := await f.read(self._CHUNK_SIZE):
                    yield chunk
            return

        while chunk := await file.read(self._CHUNK_SIZE):
            yield chunk

    @override
    def create_directory(self, job_id: str) -> None:
        job_dir = self._job_dir(job_id)
        try:
            job_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise JobDirectoryCreationError(job_id) from exc

    @override
    def remove(self, job_id: str) -> bool:
        try:
            shutil.rmtree(self._job_dir(job_id))
        except OSError as exc:
            logger.warning(f"Failed to remove storage for job {job_id}: {exc}")
            return False
        return True

    @override
    async def save(
        self,
        job_id: str,
        relative_path: str,
        file: FileLike,
        *,
        mkdirs: bool = True,
    ) -> SavedJobFile:
        if isinstance(file, (str, PathLike)) and not Path(file).expanduser().is_file():
            raise FileNotFoundError(file)

        dst = self.allocate_path(job_id, relative_path, mkdirs=mkdirs)

        size = 0
        hasher = hashlib.sha256()
        async with aiofiles.open(dst, "wb") as out:
            async for chunk in self._chunks(file):
                _ = await out.write(chunk)
                size += len(chunk)
                hasher.update(chunk)

        logger.debug(f"Stored {size} bytes for job {job_id} at {relative_path}")
        return SavedJobFile(relative_path=relative_path, size=size, hash=hasher.hexdigest())

    @override
    def allocate_path(
        self,
        job_id: str,
        relative_path: str,
        *,
        mkdirs: bool = True,
    ) -> Path:
        self.create_directory(job_id)
        path = self._safe_path(job_id, relative_path)
        if mkdirs:
            path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @override
    def resolve_path(
        self,
        job_id: str,
        relative_path: str | None = None,
    ) -> Path:
        return self._safe_path(job_id, relative_path)
