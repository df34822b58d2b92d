"""Resize planning algorithms and the Pillow codec applying them."""

from .crop_rectangle import crop_to_match_ratio
from .dimension_resolver import resolve_dimensions
from .errors import (
    CodecUnavailableError,
    InvalidConfigurationError,
    InvalidSourceError,
    MissingDimensionError,
    ResizeError,
)
from .fit_scale import fit_within
from .geometry import (
    ComputedBox,
    CropRect,
    QualitySetting,
    ResizeMode,
    ResizePlan,
    ScaleFactors,
    SourceImageDescriptor,
    TargetSpec,
)
from .image_codec import resize_image, resize_image_bytes
from .quality_option import parse_quality_option
from .resize_planner import ResizePlanner, plan_resize
from .scale_factors import scale_factors

__all__ = [
    "CodecUnavailableError",
    "ComputedBox",
    "CropRect",
    "InvalidConfigurationError",
    "InvalidSourceError",
    "MissingDimensionError",
    "QualitySetting",
    "ResizeError",
    "ResizeMode",
    "ResizePlan",
    "ResizePlanner",
    "ScaleFactors",
    "SourceImageDescriptor",
    "TargetSpec",
    "crop_to_match_ratio",
    "fit_within",
    "parse_quality_option",
    "plan_resize",
    "resize_image",
    "resize_image_bytes",
    "resolve_dimensions",
    "scale_factors",
]
