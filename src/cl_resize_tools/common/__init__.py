"""Common module - protocols, schemas, and base classes for resize jobs."""

from .compute_module import ComputeModule
from .file_storage_impl import LocalFileStorage
from .job_repository import JobRepository
from .job_storage import JobStorage, SavedJobFile
from .schema_job import (
    BaseJobParams,
    Job,
    JobCreatedResponse,
    JobRecord,
    JobRecordUpdate,
    JobStatus,
    TaskOutput,
)

__all__ = [
    "Job",
    "BaseJobParams",
    "TaskOutput",
    "JobRecord",
    "JobRecordUpdate",
    "JobStatus",
    "JobCreatedResponse",
    "ComputeModule",
    "JobRepository",
    "JobStorage",
    "LocalFileStorage",
    "SavedJobFile",
]
