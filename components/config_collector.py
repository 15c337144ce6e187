from __future__ import annotations

import logging

from components.image_processing.validation import (
    parse_color,
    parse_position,
    parse_transparency,
    validate_position,
)
from utils.data_structures import Pixel
from utils.exceptions import InputError
from utils.utils import get_output_format

logging.basicConfig(level=logging.INFO, format='%(levelname)s:%(message)s')


class ConfigCollector:
    """Asks the user for every setting the command line did not provide.

    With ``interactive=False`` nothing is asked: optional questions take
    their default answer and required ones raise :class:`InputError`.
    """

    YES = 'yes'

    def __init__(self, input_func=input, interactive: bool = True):
        self._input = input_func
        self.interactive = interactive
        self.logger = logging.getLogger(__name__)

    def ask(self, prompt: str) -> str:
        if not self.interactive:
            raise InputError(f"No answer available for: {prompt}")
        return self._input(prompt)

    def confirm(self, prompt: str) -> bool:
        if not self.interactive:
            return False
        return self.ask(prompt) == self.YES

    def ask_image_filename(self) -> str:
        return self.ask('Input the image filename:')

    def ask_watermark_filename(self) -> str:
        return self.ask('Input the watermark image filename:')

    def ask_use_alpha(self) -> bool:
        return self.confirm("Do you want to use the watermark's Alpha channel?:")

    def ask_transparency_color(self) -> Pixel | None:
        if not self.confirm('Do you want to set a transparency color?:'):
            return None
        return parse_color(self.ask('Input a transparency color ([Red] [Green] [Blue]):'))

    def ask_transparency(self) -> int:
        return parse_transparency(self.ask('Input the watermark transparency percentage (Integer 0-100):'))

    def ask_placement_method(self) -> str:
        return self.ask('Choose the position method (single, grid):')

    def ask_position(self, base_size: tuple[int, int], watermark_size: tuple[int, int]) -> tuple[int, int]:
        diff_x = base_size[0] - watermark_size[0]
        diff_y = base_size[1] - watermark_size[1]
        position = parse_position(self.ask(f'Input the watermark position ([x 0-{diff_x}] [y 0-{diff_y}]):'))
        validate_position(position, base_size, watermark_size)
        self.logger.debug(f"Watermark position set to {position}")
        return position

    def ask_output_filename(self) -> str:
        filename = self.ask('Input the output image filename (jpg or png extension):')
        get_output_format(filename)
        return filename
