"""cl_resize_tools - thumbnail geometry planning and master-worker resize jobs."""

from .common.compute_module import ComputeModule
from .common.file_storage_impl import LocalFileStorage
from .common.job_repository import JobRepository
from .common.job_storage import AsyncFileLike, FileLike, JobStorage, SavedJobFile
from .common.schema_job import (
    BaseJobParams,
    Job,
    JobRecord,
    JobRecordUpdate,
    JobStatus,
    TaskOutput,
)
from .config import ResizeSettings, configure_logging, get_file_storage, get_settings
from .master import create_master_router
from .plugins.image_resize.algo import (
    ResizeMode,
    ResizePlan,
    ResizePlanner,
    SourceImageDescriptor,
    TargetSpec,
    plan_resize,
)
from .worker import Worker

__version__ = "0.1.0"

__all__ = [
    "Job",
    "BaseJobParams",
    "TaskOutput",
    "JobRecord",
    "JobRecordUpdate",
    "JobStatus",
    "AsyncFileLike",
    "FileLike",
    "SavedJobFile",
    "ComputeModule",
    "JobRepository",
    "JobStorage",
    "LocalFileStorage",
    "ResizeSettings",
    "configure_logging",
    "get_file_storage",
    "get_settings",
    "ResizeMode",
    "ResizePlan",
    "ResizePlanner",
    "SourceImageDescriptor",
    "TargetSpec",
    "plan_resize",
    "Worker",
    "create_master_router",
    "__version__",
]
