"""Image resize task implementation."""

import asyncio
from pathlib import Path
from typing import Callable

from loguru import logger
from typing_extensions import override

from ...common.compute_module import ComputeModule
from ...common.job_storage import JobStorage
from ...config import get_settings
from .algo.image_codec import OUTPUT_CONTENT_TYPE, ensure_codec_available, resize_image
from .algo.resize_planner import ResizePlanner
from .schema import ImageResizeOutput, ImageResizeParams


class ImageResizeTask(ComputeModule[ImageResizeParams, ImageResizeOutput]):
    """Compute module producing a JPEG thumbnail from a stored source image."""

    schema: type[ImageResizeParams] = ImageResizeParams

    def __init__(self, planner: ResizePlanner | None = None):
        self._planner: ResizePlanner | None = planner

    @property
    @override
    def task_type(self) -> str:
        return "image_resize"

    @property
    def planner(self) -> ResizePlanner:
        if self._planner is None:
            settings = get_settings()
            self._planner = ResizePlanner(
                mode=settings.mode,
                default_quality=settings.default_quality,
            )
        return self._planner

    @override
    def setup(self) -> None:
        ensure_codec_available()

    @override
    async def run(
        self,
        job_id: str,
        params: ImageResizeParams,
        storage: JobStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> ImageResizeOutput:
        input_path = storage.resolve_path(job_id, params.input_path)
        if not input_path.exists():
            raise FileNotFoundError("Input file not found: " + str(input_path))

        output_path = Path(storage.allocate_path(job_id, params.output_path))

        plan = await asyncio.to_thread(
            resize_image,
            input_path=input_path,
            output_path=output_path,
            target=params.to_target(),
            planner=self.planner,
            context=params.context,
            provider_name=params.provider_name,
        )

        width, height = plan.box.size
        logger.info(
            f"Job {job_id}: {plan.mode.value} thumbnail {width}x{height}"
            + f" written to {params.output_path}"
        )

        if progress_callback:
            progress_callback(100)

        return ImageResizeOutput(
            width=width,
            height=height,
            mode=plan.mode,
            crop_left=plan.crop.left if plan.crop else 0,
            crop_top=plan.crop.top if plan.crop else 0,
            quality=plan.quality.quality,
            content_type=OUTPUT_CONTENT_TYPE,
            size=output_path.stat().st_size,
        )
