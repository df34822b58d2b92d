"""Scale factors between a source image and a target box."""

from .errors import InvalidSourceError
from .geometry import ComputedBox, ScaleFactors, SourceImageDescriptor


def ensure_valid_source(source: SourceImageDescriptor) -> None:
    """Raise InvalidSourceError unless both source dimensions are positive."""
    if not source.is_valid:
        raise InvalidSourceError(source.width, source.height)


def scale_factors(source: SourceImageDescriptor, box: ComputedBox) -> ScaleFactors:
    """
    Horizontal and vertical ratio of target to source.

    Example: 600x400 into 200x160 gives (0.333, 0.4);
    100x200 into 200x160 gives (2, 0.8).
    """
    ensure_valid_source(source)
    return ScaleFactors(x=box.width / source.width, y=box.height / source.height)
