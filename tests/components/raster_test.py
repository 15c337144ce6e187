import unittest

import numpy as np

from components.image_processing.raster import Raster
from utils.data_structures import Pixel


class TestRaster(unittest.TestCase):
    def test_keeps_its_own_copy(self):
        data = np.zeros((2, 3, 3), dtype=np.uint8)
        raster = Raster(data)
        self.assertTrue(data.flags.writeable)
        data[0, 0] = (9, 9, 9)
        self.assertEqual(raster.pixel(0, 0), Pixel(0, 0, 0))
        self.assertFalse(raster.pixels.flags.writeable)

    def test_rejects_out_of_range_values(self):
        for value in (256, -1, 1000):
            with self.assertRaises(ValueError):
                Raster(np.full((2, 2, 3), value, dtype=np.int64))
        with self.assertRaises(ValueError):
            Raster(np.full((2, 2, 3), 0.5))

    def test_accepts_wide_integer_types_in_range(self):
        raster = Raster(np.full((1, 2, 4), 255, dtype=np.int32))
        self.assertTrue(raster.has_alpha)
        self.assertEqual(raster.pixel(1, 0), Pixel(255, 255, 255, 255))

    def test_rejects_bad_shapes(self):
        for shape in ((2, 2), (2, 2, 2), (0, 2, 3), (2, 0, 3)):
            with self.assertRaises(ValueError):
                Raster(np.zeros(shape, dtype=np.uint8))

    def test_size_and_bounds(self):
        raster = Raster.filled(4, 3, Pixel(1, 2, 3))
        self.assertEqual(raster.size, (4, 3))
        with self.assertRaises(IndexError):
            raster.pixel(4, 0)
