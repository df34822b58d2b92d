"""Pillow codec that applies a ResizePlan (crop, scale, JPEG encode)."""

from io import BytesIO
from pathlib import Path

from PIL import Image, features

from .errors import CodecUnavailableError
from .geometry import ResizeMode, ResizePlan, SourceImageDescriptor, TargetSpec
from .resize_planner import ResizePlanner

# Catmull-Rom, same kernel Pillow uses for BICUBIC
RESAMPLE = Image.Resampling.BICUBIC
OUTPUT_FORMAT = "JPEG"
OUTPUT_CONTENT_TYPE = "image/jpeg"


def ensure_codec_available() -> None:
    """Fail before any planning if this Pillow build cannot write JPEG."""
    if not features.check_codec("jpg"):
        raise CodecUnavailableError(
            "Image resizing requires Pillow built with JPEG support (libjpeg)"
        )


def describe_image(
    img: Image.Image,
    *,
    context: str | None = None,
    provider_name: str | None = None,
) -> SourceImageDescriptor:
    width, height = img.size
    return SourceImageDescriptor(
        width=width,
        height=height,
        context=context,
        provider_name=provider_name,
    )


def apply_plan(img: Image.Image, plan: ResizePlan) -> Image.Image:
    """
    Crop and scale an opened image according to the plan.

    Fill plans are shaved then scaled to the exact box. Fit plans are scaled
    only when the planned box differs from the source size.
    """
    if plan.crop is not None:
        img = img.crop(plan.crop.box_for(img.width, img.height))

    size = plan.box.size
    if plan.mode is ResizeMode.fit and size == img.size:
        return img

    return img.resize(size, RESAMPLE)


def encode_jpeg(img: Image.Image, quality: int) -> bytes:
    # JPEG does not support alpha channel or palettes
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")

    out = BytesIO()
    img.save(out, format=OUTPUT_FORMAT, quality=quality)
    return out.getvalue()


def resize_image_bytes(
    data: bytes,
    target: TargetSpec,
    *,
    planner: ResizePlanner | None = None,
    context: str | None = None,
    provider_name: str | None = None,
) -> tuple[bytes, ResizePlan]:
    """
    Resize encoded image bytes into a JPEG thumbnail.

    Returns:
        (jpeg_bytes, plan)

    Raises:
        CodecUnavailableError: If Pillow cannot encode JPEG
        PIL.UnidentifiedImageError: If the bytes are not a readable image
        ResizeError: If planning fails
    """
    ensure_codec_available()
    planner = planner or ResizePlanner()

    with Image.open(BytesIO(data)) as img:
        source = describe_image(img, context=context, provider_name=provider_name)
        plan = planner.plan(source, target)
        resized = apply_plan(img, plan)
        return encode_jpeg(resized, plan.quality.quality), plan


def resize_image(
    *,
    input_path: str | Path,
    output_path: str | Path,
    target: TargetSpec,
    planner: ResizePlanner | None = None,
    context: str | None = None,
    provider_name: str | None = None,
) -> ResizePlan:
    """
    Resize a single image file and write a JPEG thumbnail.

    Framework-agnostic, single-image operation.

    Args:
        input_path: Path to input image
        output_path: Path to output JPEG
        target: Requested geometry and quality
        planner: Planner carrying the default mode, a fill planner if None
        context: Opaque media context, used in error messages
        provider_name: Opaque media provider, used in error messages

    Returns:
        The ResizePlan that was applied

    Raises:
        FileNotFoundError: If input image or output directory does not exist
        OSError: If Pillow fails to read/write the image
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    if not output_path.parent.exists():
        raise FileNotFoundError(f"Output directory does not exist: {output_path.parent}")

    data, plan = resize_image_bytes(
        input_path.read_bytes(),
        target,
        planner=planner,
        context=context,
        provider_name=provider_name,
    )
    _ = output_path.write_bytes(data)
    return plan
