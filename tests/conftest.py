"""Test configuration and fixtures for cl_resize_tools.

This module provides:
- Pytest configuration (markers)
- Synthetic image fixtures (generated with Pillow, no media checked in)
- Mock service fixtures (in-memory job repository, local file storage)
- Integration fixtures (API client, worker)
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw
from typing_extensions import override

from cl_resize_tools.common.file_storage_impl import LocalFileStorage
from cl_resize_tools.common.job_repository import JobRepository
from cl_resize_tools.common.schema_job import JobRecord, JobRecordUpdate, JobStatus
from cl_resize_tools.config import get_settings
from cl_resize_tools.master import create_master_router
from cl_resize_tools.plugins.image_resize.algo.resize_planner import ResizePlanner
from cl_resize_tools.worker import Worker

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: full integration tests (API → Worker)",
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are lru_cached; make every test read the environment afresh."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================================
# Image Fixtures
# ============================================================================


def make_image(path: Path, size: tuple[int, int], mode: str = "RGB", fmt: str = "JPEG") -> Path:
    """Write a patterned test image so crops and scales are visible."""
    width, height = size
    color = (73, 109, 137, 255) if mode == "RGBA" else (73, 109, 137)
    img = Image.new(mode, size, color=color)
    draw = ImageDraw.Draw(img)

    for x in range(0, width, 50):
        draw.line([(x, 0), (x, height)], fill="white", width=2)
    for y in range(0, height, 50):
        draw.line([(0, y), (width, y)], fill="white", width=2)
    draw.ellipse([width // 4, height // 4, 3 * width // 4, 3 * height // 4], fill="red")

    img.save(path, fmt)
    return path


@pytest.fixture
def sample_image_path(tmp_path: Path) -> Path:
    """800x600 landscape JPEG."""
    return make_image(tmp_path / "sample.jpg", (800, 600))


@pytest.fixture
def landscape_image_path(tmp_path: Path) -> Path:
    """600x400 landscape JPEG."""
    return make_image(tmp_path / "landscape.jpg", (600, 400))


@pytest.fixture
def portrait_image_path(tmp_path: Path) -> Path:
    """100x200 portrait JPEG."""
    return make_image(tmp_path / "portrait.jpg", (100, 200))


@pytest.fixture
def rgba_image_path(tmp_path: Path) -> Path:
    """400x400 PNG with alpha channel."""
    return make_image(tmp_path / "alpha.png", (400, 400), mode="RGBA", fmt="PNG")


# ============================================================================
# Mock Service Fixtures
# ============================================================================


class InMemoryJobRepository(JobRepository):
    """In-memory JobRepository for testing."""

    def __init__(self):
        self._jobs: dict[str, JobRecord] = {}
        self.priorities: dict[str, int | None] = {}

    @override
    def add_job(
        self,
        job: JobRecord,
        created_by: str | None = None,
        priority: int | None = None,
    ) -> bool:
        self._jobs[job.job_id] = job
        self.priorities[job.job_id] = priority
        return True

    @override
    def get_job(self, job_id: str) -> JobRecord | None:
        return self._jobs.get(job_id)

    @override
    def update_job(self, job_id: str, updates: JobRecordUpdate) -> bool:
        if job_id not in self._jobs:
            return False
        job = self._jobs[job_id]
        updates_dict: dict[str, Any] = updates.model_dump(exclude_none=True)
        for key, value in updates_dict.items():
            setattr(job, key, value)
        return True

    @override
    def fetch_next_job(self, task_types: Sequence[str]) -> JobRecord | None:
        for job in self._jobs.values():
            if job.status == JobStatus.queued and job.task_type in task_types:
                job.status = JobStatus.processing
                return job
        return None

    @override
    def delete_job(self, job_id: str) -> bool:
        return self._jobs.pop(job_id, None) is not None


@pytest.fixture
def job_repository() -> InMemoryJobRepository:
    """Provide in-memory job repository for testing."""
    return InMemoryJobRepository()


@pytest.fixture
def file_storage(tmp_path: Path) -> LocalFileStorage:
    """Provide local file storage rooted in the test's tmp dir."""
    return LocalFileStorage(base_dir=tmp_path / "file_storage")


@pytest.fixture
def fill_planner() -> ResizePlanner:
    return ResizePlanner(mode="fill")


@pytest.fixture
def worker(job_repository: InMemoryJobRepository, file_storage: LocalFileStorage) -> Worker:
    """Provide Worker instance for integration tests."""
    return Worker(repository=job_repository, job_storage=file_storage)


@pytest.fixture
def api_client(
    job_repository: InMemoryJobRepository,
    file_storage: LocalFileStorage,
    fill_planner: ResizePlanner,
) -> TestClient:
    """Provide FastAPI TestClient for route testing."""
    app = FastAPI()

    def get_current_user():
        return None

    app.include_router(
        create_master_router(
            repository=job_repository,
            file_storage=file_storage,
            get_current_user=get_current_user,
            planner=fill_planner,
        )
    )
    return TestClient(app)
