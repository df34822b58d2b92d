"""Image resize job parameters and output schema."""

from pydantic import Field, field_validator

from ...common.schema_job import BaseJobParams, TaskOutput
from .algo.geometry import ResizeMode, TargetSpec


class ImageResizeParams(BaseJobParams):
    """Parameters for the image resize task.

    Attributes:
        input_path: Job-relative path to the source image
        output_path: Job-relative path for the JPEG thumbnail
        width: Requested width (None = inferred from height)
        height: Requested height (None = inferred from width)
        mode: "fill"/"outbound" or "fit"/"inset", None = configured default
        quality: JPEG quality 1-100, None = from quality_option or default
        quality_option: Legacy composite option such as "85-nofill"
        context: Media context, only used in error messages
        provider_name: Media provider, only used in error messages
    """

    width: float | None = Field(default=None, gt=0, description="Target width in pixels")
    height: float | None = Field(default=None, gt=0, description="Target height in pixels")
    mode: ResizeMode | None = Field(default=None, description="Resize mode")
    quality: int | None = Field(default=None, ge=1, le=100, description="JPEG quality")
    quality_option: str | None = Field(default=None, description="Legacy quality option")
    context: str | None = None
    provider_name: str | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def validate_mode(cls, v: object) -> object:
        if isinstance(v, str):
            return ResizeMode.parse(v)
        return v

    def to_target(self) -> TargetSpec:
        return TargetSpec(
            width=self.width,
            height=self.height,
            mode=self.mode,
            quality=self.quality,
            quality_option=self.quality_option,
        )


class ImageResizeOutput(TaskOutput):
    """Sidecar metadata of a generated thumbnail."""

    width: int = Field(description="Thumbnail width in pixels")
    height: int = Field(description="Thumbnail height in pixels")
    mode: ResizeMode = Field(description="Mode that was applied")
    crop_left: int = Field(default=0, ge=0, description="Pixels shaved off left and right")
    crop_top: int = Field(default=0, ge=0, description="Pixels shaved off top and bottom")
    quality: int = Field(ge=1, le=100)
    content_type: str = "image/jpeg"
    size: int = Field(ge=0, description="Encoded size in bytes")
