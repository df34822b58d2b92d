"""Error taxonomy for resize planning."""

from typing_extensions import override


class ResizeError(Exception):
    """Base class for all resize planning errors."""


class MissingDimensionError(ResizeError):
    """Neither a target width nor a target height was requested."""

    def __init__(self, context: str | None = None, provider_name: str | None = None):
        self.context: str | None = context
        self.provider_name: str | None = provider_name
        super().__init__(
            f'Width and height parameter is missing in context "{context or ""}"'
            + f' for provider "{provider_name or ""}"'
        )


class InvalidSourceError(ResizeError):
    """Source image reports a zero or negative dimension."""

    def __init__(self, width: int, height: int):
        self.width: int = width
        self.height: int = height
        super().__init__(f"Invalid source dimensions: {width}x{height}")


class InvalidConfigurationError(ResizeError, ValueError):
    """Unrecognized resize mode or quality value."""

    def __init__(self, value: object, message: str | None = None):
        self.value: object = value
        self.message: str = message or f"Invalid resize configuration: {value!r}"
        super().__init__(self.message)

    @override
    def __str__(self):
        return self.message


class CodecUnavailableError(ResizeError, RuntimeError):
    """The installed Pillow build cannot encode the output format."""
