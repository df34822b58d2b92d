"""Worker runtime - claims resize jobs and runs them."""

from importlib.metadata import entry_points
from typing import cast

from loguru import logger

from .common.compute_module import ComputeModule
from .common.job_repository import JobRepository
from .common.job_storage import JobStorage
from .common.schema_job import BaseJobParams, JobRecordUpdate, JobStatus, TaskOutput
from .config import get_file_storage
from .plugins.image_resize.task import ImageResizeTask

TaskRegistry = dict[str, ComputeModule[BaseJobParams, TaskOutput]]

TASK_ENTRY_POINT_GROUP = "cl_resize_tools.tasks"


def get_task_registry() -> TaskRegistry:
    """Built-in image_resize task plus tasks registered as entry points.

    Third-party packages add tasks under
    [project.entry-points."cl_resize_tools.tasks"].

    Raises:
        RuntimeError: If a plugin fails to load (missing dependency, etc.)
    """
    builtin = cast(ComputeModule[BaseJobParams, TaskOutput], ImageResizeTask())
    registry: TaskRegistry = {builtin.task_type: builtin}

    for ep in entry_points(group=TASK_ENTRY_POINT_GROUP):
        try:
            task_class = cast(type[ComputeModule[BaseJobParams, TaskOutput]], ep.load())
            task = task_class()
        except Exception as e:
            # Plugin dependency missing = exception (fail fast)
            raise RuntimeError(f"Failed to load task '{ep.name}': {e}") from e
        if task.task_type in registry:
            continue
        registry[task.task_type] = task
        logger.debug(f"Registered task '{task.task_type}' from entry point '{ep.name}'")

    return registry


class Worker:
    """Worker runtime that orchestrates job execution.

    Example:
        worker = Worker(repository)  # storage under CL_RESIZE_STORAGE_DIR

        while True:
            if not await worker.run_once():
                await asyncio.sleep(1.0)
    """

    def __init__(
        self,
        repository: JobRepository,
        job_storage: JobStorage | None = None,
        task_registry: TaskRegistry | None = None,
    ):
        self.repository: JobRepository = repository
        self.job_storage: JobStorage = (
            job_storage if job_storage is not None else get_file_storage()
        )
        self.task_registry: TaskRegistry = (
            task_registry if task_registry is not None else get_task_registry()
        )

    def get_supported_task_types(self) -> list[str]:
        return list(self.task_registry.keys())

    async def run_once(self, task_types: list[str] | None = None) -> bool:
        """Process one job.

        Args:
            task_types: Task types to take, None = every registered type

        Returns:
            True if a job was processed, False if none was available.
        """
        if task_types is None:
            valid_types = self.get_supported_task_types()
        else:
            valid_types = [t for t in task_types if t in self.task_registry]

        if not valid_types:
            return False

        # fetch_next_job() claims the job (status=processing) atomically
        job_record = self.repository.fetch_next_job(valid_types)
        if not job_record:
            return False

        task = self.task_registry[job_record.task_type]
        logger.info(f"Processing {job_record.task_type} job {job_record.job_id}")

        def progress_callback(pct: int) -> None:
            _ = self.repository.update_job(
                job_record.job_id, JobRecordUpdate.running(pct)
            )

        try:
            result = await task.execute(job_record, self.job_storage, progress_callback)
        except Exception as e:
            logger.exception(f"Job {job_record.job_id} crashed")
            result = JobRecordUpdate.failed(str(e))

        _ = self.repository.update_job(job_record.job_id, result)
        if result.status == JobStatus.error:
            logger.warning(f"Job {job_record.job_id} failed: {result.error_message}")
        else:
            logger.info(f"Job {job_record.job_id} completed")

        # A failed job is reported on the job, not as a worker error
        return True
