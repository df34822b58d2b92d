"""Fit ("inset") mode: best-fit box that never upscales."""

import math

from .geometry import ComputedBox, SourceImageDescriptor
from .scale_factors import scale_factors


def round_half_up(value: float) -> int:
    """Round to the nearest pixel, .5 going up (sides are always positive)."""
    return math.floor(value + 0.5)


def fit_within(source: SourceImageDescriptor, box: ComputedBox) -> ComputedBox:
    """
    Scale the source to fit inside the box, keeping its aspect ratio.

    The binding dimension (smaller scale factor) hits the box exactly, the
    other side is derived, rounded half up, and may fall short of the box.
    A source that already fits is returned at its native size.
    """
    factors = scale_factors(source, box)

    # Only scale down, never up
    if factors.x >= 1 and factors.y >= 1:
        return ComputedBox(width=source.width, height=source.height)

    if factors.x < factors.y:
        # 200x5 into 100x100: height 2.5 -> 3
        return ComputedBox(
            width=box.width,
            height=max(1, round_half_up(source.height * factors.x)),
        )

    if factors.y < factors.x:
        return ComputedBox(
            width=max(1, round_half_up(source.width * factors.y)),
            height=box.height,
        )

    return box
