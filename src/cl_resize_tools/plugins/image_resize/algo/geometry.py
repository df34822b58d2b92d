"""Immutable value types shared by the resize calculators."""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import InvalidConfigurationError

DEFAULT_QUALITY = 90


class ResizeMode(str, Enum):
    fill = "fill"
    fit = "fit"

    @classmethod
    def parse(cls, value: "ResizeMode | str") -> "ResizeMode":
        """Accept a mode or one of its names, including the legacy
        ``outbound`` (fill) and ``inset`` (fit) spellings."""
        if isinstance(value, ResizeMode):
            return value
        if isinstance(value, str):
            name = value.strip().lower()
            name = _MODE_ALIASES.get(name, name)
            try:
                return cls(name)
            except ValueError:
                pass
        allowed = sorted({*(m.value for m in cls), *_MODE_ALIASES})
        raise InvalidConfigurationError(
            value,
            f"Invalid mode specified: {value!r}, allowed are: {', '.join(allowed)}",
        )


_MODE_ALIASES: dict[str, str] = {
    "outbound": ResizeMode.fill.value,
    "inset": ResizeMode.fit.value,
}


class SourceImageDescriptor(BaseModel):
    """Decoded source size plus opaque identifiers used in error messages."""

    width: int
    height: int
    context: str | None = None
    provider_name: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0


class TargetSpec(BaseModel):
    """Requested thumbnail geometry.

    At least one of ``width``/``height`` has to be given; the planner rejects
    a target without either instead of picking a default.
    """

    width: float | None = Field(default=None, gt=0, description="Requested width")
    height: float | None = Field(default=None, gt=0, description="Requested height")
    mode: ResizeMode | None = Field(
        default=None, description="Resize mode, None = planner default"
    )
    quality: int | None = Field(default=None, ge=1, le=100, description="JPEG quality")
    quality_option: str | None = Field(
        default=None,
        description='Legacy composite quality string, e.g. "85-nofill"',
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @field_validator("mode", mode="before")
    @classmethod
    def validate_mode(cls, v: object) -> object:
        if v is None or isinstance(v, ResizeMode):
            return v
        if isinstance(v, str):
            return ResizeMode.parse(v)
        return v


class ComputedBox(BaseModel):
    """Fully resolved target dimensions, unrounded."""

    width: float = Field(gt=0)
    height: float = Field(gt=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @property
    def size(self) -> tuple[int, int]:
        """Integer pixel size handed to the codec (truncated, at least 1px)."""
        return max(1, int(self.width)), max(1, int(self.height))


class ScaleFactors(BaseModel):
    x: float
    y: float

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class CropRect(BaseModel):
    """Symmetric shave: ``left`` px off both sides, ``top`` px off top and bottom."""

    left: int = Field(default=0, ge=0)
    top: int = Field(default=0, ge=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    def box_for(self, width: int, height: int) -> tuple[int, int, int, int]:
        """Pillow crop box for an image of the given size."""
        return self.left, self.top, width - self.left, height - self.top


class QualitySetting(BaseModel):
    quality: int = Field(default=DEFAULT_QUALITY, ge=1, le=100)
    fill: bool = True

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class ResizePlan(BaseModel):
    """Everything the codec needs to produce the thumbnail."""

    source: SourceImageDescriptor
    box: ComputedBox
    crop: CropRect | None = None
    quality: QualitySetting = Field(default_factory=QualitySetting)
    mode: ResizeMode

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def validate_crop_mode(self) -> "ResizePlan":
        if self.crop is not None and self.mode is not ResizeMode.fill:
            raise ValueError("Crop rectangle is only valid in fill mode")
        return self

    @property
    def cropped_size(self) -> tuple[int, int]:
        """Source size after the shave has been applied."""
        if self.crop is None:
            return self.source.width, self.source.height
        return (
            self.source.width - 2 * self.crop.left,
            self.source.height - 2 * self.crop.top,
        )
