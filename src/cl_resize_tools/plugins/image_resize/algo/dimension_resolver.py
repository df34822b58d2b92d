"""Infer a complete target box from a partial width/height request."""

from .errors import MissingDimensionError
from .geometry import ComputedBox, SourceImageDescriptor
from .scale_factors import ensure_valid_source


def resolve_dimensions(
    source: SourceImageDescriptor,
    width: float | None = None,
    height: float | None = None,
) -> ComputedBox:
    """
    Resolve the target box for a thumbnail request.

    Args:
        source: Source image descriptor
        width: Requested width, None if not given
        height: Requested height, None if not given

    Returns:
        ComputedBox. When both sides are given they are returned as-is,
        otherwise the missing side follows the source aspect ratio.
        Values are not rounded.

    Raises:
        MissingDimensionError: If neither width nor height is given
        InvalidSourceError: If the source has a non-positive dimension
    """
    if width and height:
        return ComputedBox(width=width, height=height)

    if width:
        ensure_valid_source(source)
        return ComputedBox(width=width, height=width * source.height / source.width)

    if height:
        ensure_valid_source(source)
        return ComputedBox(width=height * source.width / source.height, height=height)

    raise MissingDimensionError(source.context, source.provider_name)
