"""Public algorithm API for cl_resize_tools.

Resize planning and the Pillow codec, usable without the FastAPI job
infrastructure.

Example:
    Plan only::

        from cl_resize_tools.algorithms import (
            SourceImageDescriptor,
            TargetSpec,
            plan_resize,
        )

        plan = plan_resize(
            SourceImageDescriptor(width=600, height=400),
            TargetSpec(width=200, height=160),
            mode="outbound",
        )
        print(plan.crop)  # left=50 top=0

    Plan and write a thumbnail::

        from cl_resize_tools.algorithms import ResizePlanner, TargetSpec, resize_image

        resize_image(
            input_path="photo.jpg",
            output_path="thumb.jpg",
            target=TargetSpec(width=256, quality_option="85-nofill"),
            planner=ResizePlanner(mode="inset"),
        )
"""

from .plugins.image_resize.algo import (
    CodecUnavailableError,
    ComputedBox,
    CropRect,
    InvalidConfigurationError,
    InvalidSourceError,
    MissingDimensionError,
    QualitySetting,
    ResizeError,
    ResizeMode,
    ResizePlan,
    ResizePlanner,
    ScaleFactors,
    SourceImageDescriptor,
    TargetSpec,
    crop_to_match_ratio,
    fit_within,
    parse_quality_option,
    plan_resize,
    resize_image,
    resize_image_bytes,
    resolve_dimensions,
    scale_factors,
)

__all__ = [
    # Planning
    "ResizePlanner",
    "plan_resize",
    "resolve_dimensions",
    "scale_factors",
    "crop_to_match_ratio",
    "fit_within",
    "parse_quality_option",
    # Codec
    "resize_image",
    "resize_image_bytes",
    # Value types
    "ComputedBox",
    "CropRect",
    "QualitySetting",
    "ResizeMode",
    "ResizePlan",
    "ScaleFactors",
    "SourceImageDescriptor",
    "TargetSpec",
    # Errors
    "ResizeError",
    "MissingDimensionError",
    "InvalidSourceError",
    "InvalidConfigurationError",
    "CodecUnavailableError",
]
