from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING

from utils.exceptions import InvalidColor

if TYPE_CHECKING:
    from components.image_processing.placement import Placement


class TransparencyKindEnum(IntEnum):
    OPAQUE = 1
    BITMASK = 2
    TRANSLUCENT = 3

    @classmethod
    def label(cls, value) -> str:
        if value in cls._value2member_map_:
            return cls(value).name
        return 'Unknown'


class PlacementTypeEnum(StrEnum):
    OVERLAY = 'overlay'
    SINGLE = 'single'
    GRID = 'grid'

    @classmethod
    def has_value(cls, value: str) -> bool:
        return value in {c.value for c in cls}


@dataclass(frozen=True)
class Pixel:
    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self):
        for channel in (self.red, self.green, self.blue, self.alpha):
            if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
                raise InvalidColor(f"Color component {channel!r} is not an integer in 0-255.")

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.red, self.green, self.blue

    @property
    def is_transparent(self) -> bool:
        return self.alpha == 0

    def same_color(self, other: Pixel, with_alpha: bool = False) -> bool:
        if with_alpha:
            return self.rgb == other.rgb and self.alpha == other.alpha
        return self.rgb == other.rgb


@dataclass(frozen=True)
class ImageMetadata:
    filename: str
    width: int
    height: int
    num_components: int
    num_color_components: int
    bits_per_pixel: int
    transparency: TransparencyKindEnum

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def is_translucent(self) -> bool:
        return self.transparency == TransparencyKindEnum.TRANSLUCENT


@dataclass(frozen=True)
class CompositionConfig:
    transparency: int
    placement: Placement
    use_alpha: bool = False
    transparency_color: Pixel | None = None


SUPPORTED_BIT_DEPTHS = (24, 32)
SUPPORTED_COLOR_COMPONENTS = 3
# output file extension -> Pillow encoder name
OUTPUT_FORMATS = {
    'jpg': 'JPEG',
    'png': 'PNG',
}
MAX_TRANSPARENCY = 100
MIN_TRANSPARENCY = 0
