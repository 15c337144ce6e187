import logging

from PIL import Image, UnidentifiedImageError

from components.image_processing.raster import Raster
from utils.data_structures import ImageMetadata, TransparencyKindEnum
from utils.exceptions import InputError
from utils.utils import check_if_file_exists, get_output_format

logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
logger = logging.getLogger(__name__)

# bits per pixel for Pillow modes whose depth is not 8 bits per band
MODE_BITS_PER_PIXEL = {
    "1": 1,
    "P": 8,
    "PA": 16,
    "I": 32,
    "I;16": 16,
    "I;16B": 16,
    "I;16L": 16,
    "F": 32,
}


def get_transparency_kind(image: Image.Image) -> TransparencyKindEnum:
    bands = image.getbands()
    if "A" in bands or "a" in bands:
        return TransparencyKindEnum.TRANSLUCENT
    if image.mode == "P" and image.palette is not None and "A" in image.palette.mode:
        return TransparencyKindEnum.TRANSLUCENT
    transparency = image.info.get("transparency")
    if transparency is None:
        return TransparencyKindEnum.OPAQUE
    # a palette image may list one alpha value per entry
    if isinstance(transparency, bytes) and any(0 < value < 255 for value in transparency):
        return TransparencyKindEnum.TRANSLUCENT
    return TransparencyKindEnum.BITMASK


def read_metadata(image: Image.Image, filename: str = "") -> ImageMetadata:
    bands = image.getbands()
    transparency = get_transparency_kind(image)
    if image.mode in ("P", "PA"):
        num_color_components = 3
    else:
        num_color_components = len([band for band in bands if band not in ("A", "a", "X")])
    num_components = num_color_components
    if transparency != TransparencyKindEnum.OPAQUE:
        num_components += 1
    return ImageMetadata(
        filename=filename,
        width=image.width,
        height=image.height,
        num_components=num_components,
        num_color_components=num_color_components,
        bits_per_pixel=MODE_BITS_PER_PIXEL.get(image.mode, len(bands) * 8),
        transparency=transparency,
    )


def open_image(path: str) -> tuple[Raster, ImageMetadata]:
    check_if_file_exists(path)
    try:
        with Image.open(path) as image:
            image.load()
            metadata = read_metadata(image, path)
            raster = Raster.from_image(image, with_alpha=metadata.transparency != TransparencyKindEnum.OPAQUE)
    except (UnidentifiedImageError, OSError) as e:
        logger.error(f"Unable to decode {path}: {e}")
        raise InputError(f"The file {path} isn't a readable image.") from e
    logger.info(f"Opened {path} ({metadata.width}x{metadata.height}, {metadata.bits_per_pixel}-bit)")
    return raster, metadata


def save_image(raster: Raster, path: str):
    image_format = get_output_format(path)
    raster.to_image().save(path, format=image_format)
    logger.info(f"Watermarked image saved to {path}")


def describe_image(metadata: ImageMetadata) -> list[str]:
    return [
        f"Image file: {metadata.filename}",
        f"Width: {metadata.width}",
        f"Height: {metadata.height}",
        f"Number of components: {metadata.num_components}",
        f"Number of color components: {metadata.num_color_components}",
        f"Bits per pixel: {metadata.bits_per_pixel}",
        f"Transparency: {TransparencyKindEnum.label(metadata.transparency)}",
    ]


def log_image_info(metadata: ImageMetadata):
    for line in describe_image(metadata):
        logger.info(line)
