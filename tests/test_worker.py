"""Tests for the worker runtime and the master router."""

from pathlib import Path
from typing import Callable

import pytest
from typing_extensions import override

from cl_resize_tools.common.compute_module import ComputeModule
from cl_resize_tools.common.job_storage import JobStorage
from cl_resize_tools.common.schema_job import BaseJobParams, Job, JobRecordUpdate, JobStatus, TaskOutput
from cl_resize_tools.common.file_storage_impl import LocalFileStorage
from cl_resize_tools.master import get_available_plugins
from cl_resize_tools.worker import Worker, get_task_registry

from conftest import InMemoryJobRepository


class EchoOutput(TaskOutput):
    input_path: str


class EchoTask(ComputeModule[BaseJobParams, EchoOutput]):
    schema: type[BaseJobParams] = BaseJobParams

    @property
    @override
    def task_type(self) -> str:
        return "echo"

    @override
    async def run(
        self,
        job_id: str,
        params: BaseJobParams,
        storage: JobStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> EchoOutput:
        if progress_callback:
            progress_callback(50)
        if params.input_path == "boom":
            raise RuntimeError("echo failed")
        return EchoOutput(input_path=params.input_path)


def queue(repository: InMemoryJobRepository, job_id: str, task_type: str, input_path: str):
    job = Job[BaseJobParams, EchoOutput](
        job_id=job_id,
        task_type=task_type,
        params=BaseJobParams(input_path=input_path, output_path="output/x"),
    )
    _ = repository.add_job(job.to_record())


@pytest.fixture
def echo_worker(job_repository: InMemoryJobRepository, file_storage: LocalFileStorage) -> Worker:
    return Worker(job_repository, file_storage, task_registry={"echo": EchoTask()})  # pyright: ignore[reportArgumentType]


def test_default_registry_contains_image_resize():
    assert "image_resize" in get_task_registry()


def test_worker_supported_task_types(worker: Worker):
    assert "image_resize" in worker.get_supported_task_types()


def test_worker_defaults_to_configured_storage(
    monkeypatch: pytest.MonkeyPatch,
    job_repository: InMemoryJobRepository,
    tmp_path: Path,
):
    monkeypatch.setenv("CL_RESIZE_STORAGE_DIR", str(tmp_path / "worker_jobs"))

    worker = Worker(job_repository, task_registry={})

    assert isinstance(worker.job_storage, LocalFileStorage)
    assert worker.job_storage.base_dir == (tmp_path / "worker_jobs").resolve()


@pytest.mark.asyncio
async def test_run_once_without_jobs(echo_worker: Worker):
    assert await echo_worker.run_once() is False


@pytest.mark.asyncio
async def test_run_once_ignores_unknown_task_types(
    echo_worker: Worker, job_repository: InMemoryJobRepository
):
    queue(job_repository, "j1", "echo", "a.jpg")

    assert await echo_worker.run_once(task_types=["image_resize"]) is False
    assert job_repository.get_job("j1").status == JobStatus.queued  # pyright: ignore[reportOptionalMemberAccess]


@pytest.mark.asyncio
async def test_run_once_completes_job(echo_worker: Worker, job_repository: InMemoryJobRepository):
    queue(job_repository, "j2", "echo", "a.jpg")

    assert await echo_worker.run_once() is True

    job = job_repository.get_job("j2")
    assert job is not None
    assert job.status == JobStatus.completed
    assert job.progress == 100
    assert job.output == {"input_path": "a.jpg"}


@pytest.mark.asyncio
async def test_run_once_records_task_error(
    echo_worker: Worker, job_repository: InMemoryJobRepository
):
    queue(job_repository, "j3", "echo", "boom")

    assert await echo_worker.run_once() is True

    job = job_repository.get_job("j3")
    assert job is not None
    assert job.status == JobStatus.error
    assert job.error_message == "echo failed"
    assert job.progress == 100


def test_job_record_round_trip():
    job = Job[BaseJobParams, EchoOutput](
        job_id="j4",
        task_type="echo",
        params=BaseJobParams(input_path="a", output_path="b"),
        output=EchoOutput(input_path="a"),
    )

    restored = Job.from_record(job.to_record(), BaseJobParams, EchoOutput)

    assert restored.params == job.params
    assert restored.output == job.output


def test_no_route_plugins_registered_by_default():
    assert get_available_plugins() == []


@pytest.mark.parametrize(("reported", "stored"), [(-5, 0), (40, 40), (100, 99), (250, 99)])
def test_running_update_caps_progress_below_completion(reported: int, stored: int):
    assert JobRecordUpdate.running(reported).progress == stored


def test_completed_update_serializes_output():
    update = JobRecordUpdate.completed(EchoOutput(input_path="input/a.jpg"))

    assert update.status == JobStatus.completed
    assert update.progress == 100
    assert update.output == {"input_path": "input/a.jpg"}


def test_failed_update():
    update = JobRecordUpdate.failed("decoder error")

    assert update.status == JobStatus.error
    assert update.error_message == "decoder error"
    assert update.progress == 100


def test_job_record_keeps_status_and_progress():
    job = Job[BaseJobParams, EchoOutput](
        job_id="j5",
        task_type="echo",
        params=BaseJobParams(input_path="input/a.jpg", output_path="output/thumbnail.jpg"),
        status=JobStatus.processing,
        progress=40,
    )

    record = job.to_record()

    assert record.status == JobStatus.processing
    assert record.progress == 40
    assert record.output is None
    assert record.params == {"input_path": "input/a.jpg", "output_path": "output/thumbnail.jpg"}
