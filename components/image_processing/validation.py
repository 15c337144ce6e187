import logging

from components.image_processing.placement import SinglePlacement
from utils.data_structures import (
    MAX_TRANSPARENCY,
    MIN_TRANSPARENCY,
    SUPPORTED_BIT_DEPTHS,
    SUPPORTED_COLOR_COMPONENTS,
    CompositionConfig,
    ImageMetadata,
    Pixel,
)
from utils.exceptions import (
    InputError,
    InvalidColor,
    PositionOutOfRange,
    TransparencyOutOfRange,
    UnsupportedBitDepth,
    UnsupportedColorModel,
    WatermarkTooLarge,
)

logger = logging.getLogger(__name__)


def validate_color_model(metadata: ImageMetadata, watermark: bool = False):
    # a translucent watermark carries a fourth (alpha) component
    if metadata.num_components == SUPPORTED_COLOR_COMPONENTS:
        return
    if watermark and metadata.is_translucent:
        return
    role = 'watermark' if watermark else 'image'
    raise UnsupportedColorModel(f"The number of {role} color components isn't 3.")


def validate_bit_depth(metadata: ImageMetadata, watermark: bool = False):
    if metadata.bits_per_pixel not in SUPPORTED_BIT_DEPTHS:
        role = 'watermark' if watermark else 'image'
        raise UnsupportedBitDepth(f"The {role} isn't 24 or 32-bit.")


def validate_watermark_size(base_size: tuple[int, int], watermark_size: tuple[int, int]):
    if watermark_size[0] > base_size[0] or watermark_size[1] > base_size[1]:
        raise WatermarkTooLarge("The watermark's dimensions are larger.")


def validate_transparency(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InputError("The transparency percentage isn't an integer number.")
    if not MIN_TRANSPARENCY <= value <= MAX_TRANSPARENCY:
        raise TransparencyOutOfRange("The transparency percentage is out of range.")
    return value


def validate_color(components) -> Pixel:
    """Turn an ``(r, g, b)`` sequence into an opaque pixel or raise InvalidColor."""
    try:
        red, green, blue = components
    except (TypeError, ValueError):
        raise InvalidColor("The transparency color input is invalid.") from None
    try:
        return Pixel(red, green, blue)
    except InvalidColor:
        raise InvalidColor("The transparency color input is invalid.") from None


def validate_position(position, base_size, watermark_size) -> SinglePlacement:
    placement = SinglePlacement(*position)
    placement.validate(base_size, watermark_size)
    return placement


def validate_image(metadata: ImageMetadata, watermark: bool = False):
    validate_color_model(metadata, watermark)
    validate_bit_depth(metadata, watermark)


def validate_composition(base_size, watermark_size, config: CompositionConfig):
    """Run every pre-flight check that does not need pixel data."""
    validate_watermark_size(base_size, watermark_size)
    validate_transparency(config.transparency)
    if config.transparency_color is not None:
        validate_color(config.transparency_color.rgb)
    config.placement.validate(base_size, watermark_size)
    logger.debug(f"Configuration valid for {base_size} image and {watermark_size} watermark")


def parse_transparency(text: str) -> int:
    try:
        value = int(text.strip())
    except ValueError:
        raise InputError("The transparency percentage isn't an integer number.") from None
    return validate_transparency(value)


def parse_color(text: str) -> Pixel:
    parts = text.split(' ')
    if len(parts) != 3:
        raise InvalidColor("The transparency color input is invalid.")
    try:
        components = [int(part) for part in parts]
    except ValueError:
        raise InvalidColor("The transparency color input is invalid.") from None
    return validate_color(components)


def parse_position(text: str) -> tuple[int, int]:
    parts = text.split(' ')
    if len(parts) != 2:
        raise PositionOutOfRange("The position input is invalid.")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise PositionOutOfRange("The position input is invalid.") from None
