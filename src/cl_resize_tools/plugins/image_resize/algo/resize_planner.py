"""Resize planning: combine box inference, quality parsing and mode dispatch."""

from loguru import logger

from .crop_rectangle import crop_to_match_ratio
from .dimension_resolver import resolve_dimensions
from .errors import InvalidConfigurationError
from .fit_scale import fit_within
from .geometry import (
    DEFAULT_QUALITY,
    ComputedBox,
    CropRect,
    QualitySetting,
    ResizeMode,
    ResizePlan,
    SourceImageDescriptor,
    TargetSpec,
)
from .quality_option import parse_quality_option
from .scale_factors import ensure_valid_source


class ResizePlanner:
    """
    Pure planner turning a source descriptor and a target spec into a ResizePlan.

    The planner holds only its configured defaults, so one instance can be
    shared freely between callers.

    Example:
        planner = ResizePlanner(mode="outbound")
        plan = planner.plan(
            SourceImageDescriptor(width=600, height=400),
            TargetSpec(width=200, height=160),
        )
        plan.crop  # CropRect(left=50, top=0)
    """

    def __init__(
        self,
        mode: ResizeMode | str = ResizeMode.fill,
        default_quality: int = DEFAULT_QUALITY,
    ):
        """Initialize planner.

        Args:
            mode: Mode used when a TargetSpec does not name one
            default_quality: Quality used when none is configured

        Raises:
            InvalidConfigurationError: If mode or default_quality is invalid
        """
        self.mode: ResizeMode = ResizeMode.parse(mode)
        if not 1 <= default_quality <= 100:
            raise InvalidConfigurationError(
                default_quality,
                f"Default quality must be between 1 and 100, got {default_quality}",
            )
        self.default_quality: int = default_quality

    def get_box(self, source: SourceImageDescriptor, target: TargetSpec) -> ComputedBox:
        """Requested box with the missing side inferred, before mode dispatch."""
        return resolve_dimensions(source, target.width, target.height)

    def get_quality(self, target: TargetSpec) -> QualitySetting:
        """Parse the legacy option; an explicit quality field wins over its number."""
        setting = parse_quality_option(target.quality_option, default=self.default_quality)
        if target.quality is not None:
            setting = setting.model_copy(update={"quality": target.quality})
        return setting

    def resolve_mode(self, target: TargetSpec, quality: QualitySetting) -> ResizeMode:
        """Effective mode: the target's mode or the planner default, where a
        ``nofill`` flag in the legacy quality option turns fill into fit."""
        mode = target.mode or self.mode
        if mode is ResizeMode.fill and not quality.fill:
            return ResizeMode.fit
        return mode

    def plan(self, source: SourceImageDescriptor, target: TargetSpec) -> ResizePlan:
        """
        Build the ResizePlan for one request.

        Raises:
            InvalidSourceError: If the source has a non-positive dimension
            MissingDimensionError: If the target has neither width nor height
            InvalidConfigurationError: If the quality option is malformed
        """
        ensure_valid_source(source)

        box = self.get_box(source, target)
        quality = self.get_quality(target)
        mode = self.resolve_mode(target, quality)

        crop: CropRect | None = None
        if mode is ResizeMode.fill:
            crop = crop_to_match_ratio(source, box)
        else:
            box = fit_within(source, box)

        plan = ResizePlan(source=source, box=box, crop=crop, quality=quality, mode=mode)
        logger.debug(
            f"Planned {mode.value} resize {source.width}x{source.height}"
            + f" -> {box.width:g}x{box.height:g}, crop={crop}, quality={quality.quality}"
        )
        return plan


def plan_resize(
    source: SourceImageDescriptor,
    target: TargetSpec,
    *,
    mode: ResizeMode | str = ResizeMode.fill,
    default_quality: int = DEFAULT_QUALITY,
) -> ResizePlan:
    """One-shot helper around ResizePlanner.plan."""
    return ResizePlanner(mode=mode, default_quality=default_quality).plan(source, target)
