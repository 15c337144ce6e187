from __future__ import annotations

import json
import logging

from components.image_processing.placement import placement_from_name
from components.image_processing.validation import validate_color, validate_transparency
from utils.data_structures import CompositionConfig, PlacementTypeEnum
from utils.exceptions import InputError

# Configure logger
logging.basicConfig(level=logging.INFO, format='%(levelname)s:%(message)s')
logger = logging.getLogger(__name__)

TRANSPARENCY = 'transparency'
USE_ALPHA = 'use_alpha'
TRANSPARENCY_COLOR = 'transparency_color'
PLACEMENT = 'placement'
POSITION = 'position'


def pars_config(file_path):
    # Load JSON and validate structure
    try:
        config = composition_config_from_json(file_path)
        logger.info(f"Loaded JSON file: {file_path}")
    except FileNotFoundError:
        logger.error(f"File not found: {file_path}")
        raise
    except json.JSONDecodeError as e:
        logger.error(f"Error decoding JSON: {e}")
        raise

    logger.info('JSON structure is valid.')
    return config


def load_json(filepath):
    with open(filepath) as f:
        raw_data = json.load(f)
    return raw_data


def composition_config_from_dict(data: dict) -> CompositionConfig:
    if not isinstance(data, dict):
        raise InputError("The composition config must be a JSON object")
    if TRANSPARENCY not in data:
        raise InputError(f"Missing '{TRANSPARENCY}' in composition config")
    placement_name = data.get(PLACEMENT, PlacementTypeEnum.OVERLAY.value)
    if not isinstance(placement_name, str):
        raise InputError(f"'{PLACEMENT}' must be a string")
    if not PlacementTypeEnum.has_value(placement_name):
        logger.warning(f"Unknown placement '{placement_name}', using overlay")

    position = data.get(POSITION)
    if position is not None:
        if (
            not isinstance(position, (list, tuple))
            or len(position) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in position)
        ):
            raise InputError(f"'{POSITION}' must be a pair of integers")
        position = tuple(position)

    use_alpha = data.get(USE_ALPHA, False)
    if not isinstance(use_alpha, bool):
        raise InputError(f"'{USE_ALPHA}' must be true or false")

    color = data.get(TRANSPARENCY_COLOR)
    return CompositionConfig(
        transparency=validate_transparency(data[TRANSPARENCY]),
        placement=placement_from_name(placement_name, position),
        use_alpha=use_alpha,
        transparency_color=validate_color(color) if color is not None else None,
    )


def composition_config_from_json(filepath: str) -> CompositionConfig:
    return composition_config_from_dict(load_json(filepath))


def composition_config_to_json(config: CompositionConfig, filepath: str = ''):
    json_file = {
        TRANSPARENCY: config.transparency,
        USE_ALPHA: config.use_alpha,
        TRANSPARENCY_COLOR: list(config.transparency_color.rgb) if config.transparency_color else None,
        **config.placement.to_dict(),
    }

    if filepath != '':
        with open(filepath, 'w') as f:
            json.dump(json_file, f, indent=4)
    else:
        return json_file
