from typing import Callable
from uuid import uuid4

from fastapi import UploadFile
from loguru import logger

from .job_repository import JobRepository
from .job_storage import JobStorage
from .schema_job import Job, JobCreatedResponse, JobStatus, P, Q
from .user import UserLike


class JobCreationError(RuntimeError):
    pass


async def create_job_from_upload(
    *,
    task_type: str,
    repository: JobRepository,
    file_storage: JobStorage,
    file: UploadFile,
    params_factory: Callable[[str], P],
    output_type: type[Q],
    priority: int,
    user: UserLike | None,
) -> JobCreatedResponse:
    """Store an uploaded source image under a new job and queue the job."""
    _ = output_type

    if not file.filename:
        raise ValueError("Uploaded file has no filename")

    job_id = str(uuid4())
    file_storage.create_directory(job_id)
    file_info = await file_storage.save(job_id, f"input/{file.filename}", file)

    job = Job[P, Q](
        job_id=job_id,
        task_type=task_type,
        params=params_factory(file_info.relative_path),
        status=JobStatus.queued,
        progress=0,
    )

    created_by = user.id if user else None
    if not repository.add_job(job.to_record(), created_by=created_by, priority=priority):
        _ = file_storage.remove(job_id)
        raise JobCreationError(f"Failed to create {task_type} job")

    logger.info(f"Queued {task_type} job {job_id} ({file_info.size} bytes)")
    return JobCreatedResponse(
        job_id=job_id,
        status=job.status,
        task_type=task_type,
        output_path=job.params.output_path,
    )
