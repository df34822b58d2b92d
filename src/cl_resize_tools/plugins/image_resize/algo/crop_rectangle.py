"""Fill ("outbound") mode: shave the source to the target aspect ratio."""

import math

from .geometry import ComputedBox, CropRect, SourceImageDescriptor
from .scale_factors import scale_factors


def crop_to_match_ratio(source: SourceImageDescriptor, box: ComputedBox) -> CropRect | None:
    """
    Compute the symmetric shave that makes the source match the box ratio.

    After the shave a uniform scale fills the box without letterboxing.
    Returns None when the ratios already match. The shave is floored, so a
    tiny mismatch may yield CropRect(left=0, top=0); the codec absorbs the
    remainder when scaling to the exact box.
    """
    factors = scale_factors(source, box)

    if factors.x < factors.y:
        # Source is relatively wider: trim left and right.
        # 600x400 into 200x160: intermediate width 500, shave 50
        intermediate_width = (factors.x * source.width) / factors.y
        return CropRect(left=math.floor((source.width - intermediate_width) / 2), top=0)

    if factors.x > factors.y:
        # 100x200 into 200x160: intermediate height 80, shave 60
        intermediate_height = (factors.y * source.height) / factors.x
        return CropRect(left=0, top=math.floor((source.height - intermediate_height) / 2))

    return None
