"""ComputeModule - abstract base class for job tasks."""

from abc import ABC, abstractmethod
from typing import Callable, Generic

from loguru import logger
from pydantic import ValidationError

from .job_storage import JobStorage
from .schema_job import JobRecord, JobRecordUpdate, P, Q


class ComputeModule(ABC, Generic[P, Q]):
    """
    Stateless, template-method based compute module.

    - params are validated once from the job record and passed to run()
    - run() owns persistence through the job storage
    - Q carries metadata only, never file content
    """

    schema: type[P]

    @property
    @abstractmethod
    def task_type(self) -> str: ...

    def setup(self) -> None:
        """Optional per-execution setup."""
        pass

    @abstractmethod
    async def run(
        self,
        job_id: str,
        params: P,
        storage: JobStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> Q: ...

    async def execute(
        self,
        job_record: JobRecord,
        storage: JobStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> JobRecordUpdate:
        """Run the task for a claimed job and turn the outcome into an update.

        Task failures never escape: they are reported as an error update so
        the worker can persist them against the job.
        """
        try:
            params = self.schema.model_validate(job_record.params)
        except ValidationError as exc:
            logger.warning(f"Job {job_record.job_id}: invalid params: {exc}")
            return JobRecordUpdate.failed(f"Invalid parameters: {exc}")

        try:
            self.setup()
            output = await self.run(job_record.job_id, params, storage, progress_callback)
        except Exception as exc:
            logger.error(f"Job {job_record.job_id} ({self.task_type}) failed: {exc}")
            return JobRecordUpdate.failed(str(exc))

        return JobRecordUpdate.completed(output)
