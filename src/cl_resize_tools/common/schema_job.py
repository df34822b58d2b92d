"""Job models: typed runtime jobs and their persisted JSON records.

A resize job lives in two shapes. `Job[P, Q]` carries validated params and
output models while the worker runs it; `JobRecord` is the JSON-only form a
JobRepository stores. Status changes travel as `JobRecordUpdate` objects.
"""

from enum import Enum
from typing import ClassVar, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, JsonValue

JsonRecord = dict[str, JsonValue]

# A running job never reports 100 before its output is recorded
MAX_RUNNING_PROGRESS = 99


class JobStatus(str, Enum):
    queued = "queued"
    processing = "processing"
    completed = "completed"
    error = "error"


class BaseJobParams(BaseModel):
    input_path: str = Field(description="job-relative path to the source image")
    output_path: str = Field(description="job-relative path for the thumbnail")


class TaskOutput(BaseModel):
    pass


class JobRecord(BaseModel):
    """Stored form of a job; params and output are plain JSON."""

    job_id: str
    task_type: str

    params: JsonRecord
    output: JsonRecord | None = None

    status: JobStatus = JobStatus.queued
    progress: int = Field(0, ge=0, le=100)
    error_message: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


class JobRecordUpdate(BaseModel):
    """Partial update applied to a JobRecord; None fields are left untouched."""

    status: JobStatus | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    output: JsonRecord | None = None
    error_message: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    @classmethod
    def running(cls, progress: int) -> Self:
        return cls(progress=max(0, min(MAX_RUNNING_PROGRESS, progress)))

    @classmethod
    def completed(cls, output: TaskOutput) -> Self:
        return cls(status=JobStatus.completed, output=output.model_dump(mode="json"), progress=100)

    @classmethod
    def failed(cls, message: str) -> Self:
        return cls(status=JobStatus.error, error_message=message, progress=100)


class JobCreatedResponse(BaseModel):
    job_id: str
    status: JobStatus
    task_type: str
    output_path: str = Field(description="job-relative path the thumbnail will be written to")


P = TypeVar("P", bound=BaseJobParams)
Q = TypeVar("Q", bound=TaskOutput)


class Job(BaseModel, Generic[P, Q]):
    """Runtime, strongly-typed job."""

    job_id: str
    task_type: str

    params: P
    output: Q | None = None

    status: JobStatus = JobStatus.queued
    progress: int = Field(0, ge=0, le=100)
    error_message: str | None = None

    def to_record(self) -> JobRecord:
        return JobRecord.model_validate(
            self.model_dump(mode="json", exclude={"params", "output"})
            | {
                "params": self.params.model_dump(mode="json"),
                "output": (
                    self.output.model_dump(mode="json") if self.output is not None else None
                ),
            }
        )

    @classmethod
    def from_record(
        cls,
        record: JobRecord,
        params_cls: type[P],
        output_cls: type[Q],
    ) -> "Job[P, Q]":
        return cls(
            **record.model_dump(exclude={"params", "output"}),
            params=params_cls.model_validate(record.params),
            output=(
                output_cls.model_validate(record.output) if record.output is not None else None
            ),
        )

