from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from utils.data_structures import PlacementTypeEnum
from utils.exceptions import DimensionMismatch, PositionOutOfRange

# (base columns, watermark columns, watermark row) for one base row
RowMapping = tuple[slice, np.ndarray, int]


class Placement(ABC):
    """Decides which watermark pixel, if any, lands on each base coordinate."""

    type: ClassVar[PlacementTypeEnum]

    @abstractmethod
    def locate(self, x: int, y: int, watermark_size: tuple[int, int]) -> tuple[int, int] | None:
        """Watermark coordinate feeding base coordinate ``(x, y)``, or None."""

    @abstractmethod
    def map_row(self, y: int, base_width: int, watermark_size: tuple[int, int]) -> RowMapping | None:
        """Row form of :meth:`locate` used by the compositing engine."""

    def validate(self, base_size: tuple[int, int], watermark_size: tuple[int, int]) -> None:
        pass

    def to_dict(self) -> dict:
        return {'placement': self.type.value}


@dataclass(frozen=True)
class OverlayPlacement(Placement):
    """Watermark laid over the base one-to-one. Both images must share a size."""

    type: ClassVar[PlacementTypeEnum] = PlacementTypeEnum.OVERLAY

    def locate(self, x, y, watermark_size):
        return x, y

    def map_row(self, y, base_width, watermark_size):
        return slice(0, base_width), np.arange(base_width), y

    def validate(self, base_size, watermark_size):
        if tuple(base_size) != tuple(watermark_size):
            raise DimensionMismatch("The image and watermark dimensions are different.")


@dataclass(frozen=True)
class SinglePlacement(Placement):
    """One copy of the watermark with its top-left corner at ``(offset_x, offset_y)``."""

    type: ClassVar[PlacementTypeEnum] = PlacementTypeEnum.SINGLE
    offset_x: int = 0
    offset_y: int = 0

    def _inside(self, x, y, watermark_size):
        watermark_width, watermark_height = watermark_size
        return (
            self.offset_x <= x < self.offset_x + watermark_width
            and self.offset_y <= y < self.offset_y + watermark_height
        )

    def locate(self, x, y, watermark_size):
        if not self._inside(x, y, watermark_size):
            return None
        return x - self.offset_x, y - self.offset_y

    def map_row(self, y, base_width, watermark_size):
        watermark_width, watermark_height = watermark_size
        if not self.offset_y <= y < self.offset_y + watermark_height:
            return None
        columns = slice(self.offset_x, self.offset_x + watermark_width)
        return columns, np.arange(watermark_width), y - self.offset_y

    def validate(self, base_size, watermark_size):
        max_x = base_size[0] - watermark_size[0]
        max_y = base_size[1] - watermark_size[1]
        if not (0 <= self.offset_x <= max_x and 0 <= self.offset_y <= max_y):
            raise PositionOutOfRange(
                f"The position input is out of range: ({self.offset_x}, {self.offset_y}) "
                f"not within x 0-{max_x}, y 0-{max_y}."
            )

    def to_dict(self):
        return {'placement': self.type.value, 'position': [self.offset_x, self.offset_y]}


@dataclass(frozen=True)
class GridPlacement(Placement):
    """Watermark tiled from the origin across the whole base image."""

    type: ClassVar[PlacementTypeEnum] = PlacementTypeEnum.GRID

    def locate(self, x, y, watermark_size):
        return x % watermark_size[0], y % watermark_size[1]

    def map_row(self, y, base_width, watermark_size):
        watermark_width, watermark_height = watermark_size
        return slice(0, base_width), np.arange(base_width) % watermark_width, y % watermark_height


def placement_from_name(name: str, position: tuple[int, int] | None = None) -> Placement:
    """Build a placement from its method name.

    ``single`` and ``grid`` select those strategies; any other name keeps
    the legacy one-to-one overlay.
    """
    if name == PlacementTypeEnum.SINGLE:
        if position is None:
            return SinglePlacement()
        return SinglePlacement(*position)
    if name == PlacementTypeEnum.GRID:
        return GridPlacement()
    return OverlayPlacement()
