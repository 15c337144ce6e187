import logging

from components.config_collector import ConfigCollector
from components.image_processing.compositing import composite
from components.image_processing.image_utils import log_image_info, open_image, save_image
from components.image_processing.placement import placement_from_name
from components.image_processing.validation import (
    parse_color,
    parse_position,
    parse_transparency,
    validate_composition,
    validate_image,
    validate_watermark_size,
)
from utils.data_structures import CompositionConfig, ImageMetadata, PlacementTypeEnum
from utils.json_handler import composition_config_to_json, pars_config
from utils.utils import check_if_file_exists, get_output_format

logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
logger = logging.getLogger(__name__)


def collect_config(args, collector: ConfigCollector, base: ImageMetadata, watermark: ImageMetadata) -> CompositionConfig:
    # the alpha question only makes sense for translucent watermarks,
    # the transparency color only for the others
    use_alpha = False
    transparency_color = None
    if watermark.is_translucent:
        use_alpha = args.use_alpha == "yes" if args.use_alpha is not None else collector.ask_use_alpha()
        if args.transparency_color is not None:
            logger.warning("Transparency color ignored for a translucent watermark")
    elif args.transparency_color is not None:
        transparency_color = parse_color(args.transparency_color)
    else:
        transparency_color = collector.ask_transparency_color()

    if args.transparency is not None:
        transparency = parse_transparency(args.transparency)
    else:
        transparency = collector.ask_transparency()

    method = args.placement if args.placement is not None else collector.ask_placement_method()
    position = None
    if method == PlacementTypeEnum.SINGLE:
        if args.position is not None:
            position = parse_position(args.position)
        else:
            position = collector.ask_position(base.size, watermark.size)

    return CompositionConfig(
        transparency=transparency,
        placement=placement_from_name(method, position),
        use_alpha=use_alpha,
        transparency_color=transparency_color,
    )


def add_watermark(args, collector: ConfigCollector = None) -> str:
    """Run one watermarking job and return the path of the written image.

    Every input missing from ``args`` is requested from ``collector``.
    Raises a :class:`utils.exceptions.WatermarkError` subclass on the
    first invalid input; nothing is written in that case.
    """
    collector = collector or ConfigCollector()

    image_path = args.image or collector.ask_image_filename()
    base, base_metadata = open_image(image_path)
    validate_image(base_metadata)

    watermark_path = args.watermark or collector.ask_watermark_filename()
    watermark, watermark_metadata = open_image(watermark_path)
    validate_image(watermark_metadata, watermark=True)
    validate_watermark_size(base.size, watermark.size)

    if args.info:
        log_image_info(base_metadata)
        log_image_info(watermark_metadata)

    if args.config:
        check_if_file_exists(args.config)
        config = pars_config(args.config)
    else:
        config = collect_config(args, collector, base_metadata, watermark_metadata)
    validate_composition(base.size, watermark.size, config)
    logger.info(
        f"Placement: {config.placement.type.value}, transparency: {config.transparency}%, "
        f"alpha: {config.use_alpha}, transparency color: {config.transparency_color}"
    )

    if args.output:
        output_path = args.output
        get_output_format(output_path)
    else:
        output_path = collector.ask_output_filename()

    output = composite(base, watermark, config, workers=args.workers, progress=args.progress)
    save_image(output, output_path)

    if args.save_config:
        composition_config_to_json(config, args.save_config)
        logger.info(f"Composition config saved to {args.save_config}")
    return output_path
