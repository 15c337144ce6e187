import logging
import os

from utils.data_structures import OUTPUT_FORMATS
from utils.exceptions import InputError

logger = logging.getLogger(__name__)


def check_if_file_exists(path):
    if not os.path.exists(path):
        logger.warning(f"Warning: file not found {path}")
        raise InputError(f"The file {path} doesn't exist.")


def get_output_format(filename):
    """Pillow encoder name for ``filename``; only lowercase .jpg and .png are accepted."""
    if "." not in filename:
        raise InputError('The output file extension isn\'t "jpg" or "png".')
    extension = filename[filename.rfind(".") + 1:]
    if extension not in OUTPUT_FORMATS:
        raise InputError('The output file extension isn\'t "jpg" or "png".')
    return OUTPUT_FORMATS[extension]
