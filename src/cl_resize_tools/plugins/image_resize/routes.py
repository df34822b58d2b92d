"""Image resize route factory."""

from typing import Annotated, Callable

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, ValidationError

from ...common.job_creator import create_job_from_upload
from ...common.job_repository import JobRepository
from ...common.job_storage import JobStorage
from ...common.schema_job import JobCreatedResponse
from ...common.user import UserLike
from ...config import get_settings
from .algo.errors import MissingDimensionError, ResizeError
from .algo.geometry import ResizePlan, SourceImageDescriptor, TargetSpec
from .algo.resize_planner import ResizePlanner
from .schema import ImageResizeOutput, ImageResizeParams


class PlanRequest(BaseModel):
    source: SourceImageDescriptor
    target: TargetSpec


def create_router(
    repository: JobRepository,
    file_storage: JobStorage,
    get_current_user: Callable[[], UserLike | None],
    planner: ResizePlanner | None = None,
) -> APIRouter:
    """Create router with injected dependencies.

    Args:
        repository: JobRepository implementation
        file_storage: JobStorage implementation
        get_current_user: Callable that returns current user (for auth)
        planner: Planner for /image_resize/plan, built from settings if None

    Returns:
        APIRouter with the resize job and plan endpoints
    """
    router = APIRouter()

    def get_planner() -> ResizePlanner:
        nonlocal planner
        if planner is None:
            settings = get_settings()
            planner = ResizePlanner(mode=settings.mode, default_quality=settings.default_quality)
        return planner

    @router.post("/jobs/image_resize", response_model=JobCreatedResponse)
    async def create_resize_job(
        file: Annotated[UploadFile, File(description="Source image to thumbnail")],
        width: Annotated[float | None, Form(gt=0, description="Target width in pixels")] = None,
        height: Annotated[
            float | None, Form(gt=0, description="Target height in pixels")
        ] = None,
        mode: Annotated[
            str | None, Form(description="fill/outbound or fit/inset")
        ] = None,
        quality: Annotated[
            int | None, Form(ge=1, le=100, description="JPEG quality")
        ] = None,
        quality_option: Annotated[
            str | None, Form(description='Legacy quality option, e.g. "85-nofill"')
        ] = None,
        priority: Annotated[int, Form(ge=0, le=10, description="Job priority (0-10)")] = 5,
        user: Annotated[UserLike | None, Depends(get_current_user)] = None,
    ) -> JobCreatedResponse:
        if width is None and height is None:
            raise HTTPException(status_code=422, detail=str(MissingDimensionError()))

        try:
            target = TargetSpec(
                width=width,
                height=height,
                mode=mode,  # pyright: ignore[reportArgumentType]
                quality=quality,
                quality_option=quality_option,
            )
            _ = get_planner().get_quality(target)
        except (ValidationError, ResizeError) as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        return await create_job_from_upload(
            task_type="image_resize",
            repository=repository,
            file_storage=file_storage,
            file=file,
            priority=priority,
            user=user,
            output_type=ImageResizeOutput,
            params_factory=lambda path: ImageResizeParams(
                input_path=path,
                output_path="output/thumbnail.jpg",
                width=target.width,
                height=target.height,
                mode=target.mode,
                quality=target.quality,
                quality_option=target.quality_option,
            ),
        )

    @router.post("/image_resize/plan", response_model=ResizePlan)
    async def plan_resize(request: PlanRequest) -> ResizePlan:
        try:
            return get_planner().plan(request.source, request.target)
        except ResizeError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    _ = create_resize_job
    _ = plan_resize
    return router
