from __future__ import annotations

import argparse
import json
import logging
import sys

from components.config_collector import ConfigCollector
from components.image_processing.image_watermark import add_watermark
from utils.exceptions import InputError, WatermarkError

logging.basicConfig(level=logging.INFO, format='%(levelname)s:%(message)s')
logger = logging.getLogger(__name__)


class WatermarkArgumentParser(argparse.ArgumentParser):
    # usage errors are input errors, not argparse's status 2
    def error(self, message):
        raise InputError(message)


def arg_parser(argv=None):
    parser = WatermarkArgumentParser(
        description='Blend a watermark image into an image. Options left out are asked interactively.',
    )
    parser.add_argument('--image', help='Path to the image to watermark')
    parser.add_argument('--watermark', help='Path to the watermark image')
    parser.add_argument('--transparency', help='Watermark transparency percentage (0-100)')
    parser.add_argument(
        '--use-alpha',
        choices=['yes', 'no'],
        help="Use the watermark's alpha channel (translucent watermarks only)",
    )
    parser.add_argument(
        '--transparency-color',
        help='Watermark color treated as transparent, as "R G B" (opaque watermarks only)',
    )
    parser.add_argument(
        '--placement',
        help='Position method: single, grid, anything else overlays the watermark one-to-one',
    )
    parser.add_argument('--position', help='Top-left corner "X Y" for the single position method')
    parser.add_argument('-o', '--output', help='Output image path (.jpg or .png)')
    parser.add_argument('--config', help='JSON file with transparency, placement and color settings')
    parser.add_argument('--save-config', help='Write the settings used to this JSON file')
    parser.add_argument('--workers', type=int, default=1, help='Threads used for compositing (0 = auto)')
    parser.add_argument('--progress', action='store_true', help='Show a progress bar while compositing')
    parser.add_argument('--info', action='store_true', help='Log metadata of both input images')
    parser.add_argument('--no-input', action='store_true', help='Never prompt; fail on missing options')
    return parser.parse_args(argv)


def main(argv=None, input_func=input) -> int:
    try:
        args = arg_parser(argv)
        collector = ConfigCollector(input_func=input_func, interactive=not args.no_input)
        output_path = add_watermark(args, collector)
    except WatermarkError as e:
        logger.error(str(e))
        return e.exit_code
    except json.JSONDecodeError as e:
        logger.error(f"Invalid composition config: {e}")
        return InputError.exit_code
    logger.info(f"The watermarked image {output_path} has been created.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
