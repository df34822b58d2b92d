"""Parser for the legacy composite quality option (e.g. ``"85-nofill"``)."""

from .errors import InvalidConfigurationError
from .geometry import DEFAULT_QUALITY, QualitySetting

QUALITY_SEPARATOR = "-"
NOFILL_FLAG = "nofill"


def parse_quality_option(
    option: str | int | None,
    default: int = DEFAULT_QUALITY,
) -> QualitySetting:
    """
    Split a quality option into a numeric quality and a fill flag.

    "85-nofill" -> quality 85, fill False
    "70"        -> quality 70, fill True
    "" / None   -> default quality, fill True

    The flag token is case-sensitive and may appear anywhere after the
    separator. A separator in the first position is not treated as one.

    Raises:
        InvalidConfigurationError: If the quality is not an integer in [1, 100]
    """
    if option is None:
        return QualitySetting(quality=default, fill=True)

    if isinstance(option, int):
        return QualitySetting(quality=_validate_quality(option, option), fill=True)

    text = option.strip()
    fill = True
    separator_pos = text.find(QUALITY_SEPARATOR)
    if separator_pos > 0:
        fill = NOFILL_FLAG not in text[separator_pos + 1 :]
        text = text[:separator_pos].strip()

    if not text:
        return QualitySetting(quality=default, fill=fill)

    try:
        quality = int(text)
    except ValueError as exc:
        raise InvalidConfigurationError(
            option, f"Quality must be an integer, got {option!r}"
        ) from exc

    return QualitySetting(quality=_validate_quality(quality, option), fill=fill)


def _validate_quality(quality: int, option: object) -> int:
    if not 1 <= quality <= 100:
        raise InvalidConfigurationError(
            option, f"Quality must be between 1 and 100, got {quality}"
        )
    return quality
