import unittest

import numpy as np

from components.image_processing.blending import blend, blend_pixels, contribution_mask, mix_channel
from components.image_processing.placement import OverlayPlacement
from utils.data_structures import CompositionConfig, Pixel

WHITE = Pixel(255, 255, 255)
BLACK = Pixel(0, 0, 0)


def make_config(transparency=50, use_alpha=False, transparency_color=None):
    return CompositionConfig(
        transparency=transparency,
        placement=OverlayPlacement(),
        use_alpha=use_alpha,
        transparency_color=transparency_color,
    )


class TestBlend(unittest.TestCase):
    def test_half_transparency_truncates(self):
        self.assertEqual(blend(WHITE, BLACK, make_config(50)), Pixel(127, 127, 127))

    def test_zero_transparency_keeps_base(self):
        base = Pixel(12, 200, 77)
        self.assertEqual(blend(base, Pixel(250, 3, 140), make_config(0)), base)

    def test_full_transparency_takes_watermark(self):
        watermark = Pixel(250, 3, 140)
        self.assertEqual(blend(Pixel(12, 200, 77), watermark, make_config(100)), watermark)

    def test_transparent_watermark_pixel_ignored_when_alpha_used(self):
        base = Pixel(10, 20, 30)
        watermark = Pixel(200, 200, 200, alpha=0)
        self.assertIs(blend(base, watermark, make_config(80, use_alpha=True)), base)

    def test_transparent_watermark_pixel_blended_when_alpha_unused(self):
        base = Pixel(0, 0, 0)
        watermark = Pixel(200, 200, 200, alpha=0)
        self.assertEqual(blend(base, watermark, make_config(50)), Pixel(100, 100, 100))

    def test_partial_alpha_still_contributes(self):
        watermark = Pixel(100, 100, 100, alpha=1)
        self.assertEqual(blend(BLACK, watermark, make_config(100, use_alpha=True)), Pixel(100, 100, 100))

    def test_transparency_color_ignored(self):
        base = Pixel(1, 2, 3)
        key = Pixel(0, 255, 0)
        self.assertIs(blend(base, Pixel(0, 255, 0), make_config(100, transparency_color=key)), base)
        self.assertEqual(blend(base, Pixel(0, 254, 0), make_config(100, transparency_color=key)), Pixel(0, 254, 0))

    def test_black_blends_without_transparency_color(self):
        self.assertEqual(blend(WHITE, BLACK, make_config(100)), BLACK)

    def test_output_in_range_for_all_transparencies(self):
        for transparency in range(0, 101):
            for base, watermark in ((WHITE, WHITE), (BLACK, WHITE), (WHITE, BLACK), (Pixel(1, 128, 254), Pixel(254, 127, 1))):
                result = blend(base, watermark, make_config(transparency))
                for channel in result.rgb:
                    self.assertTrue(0 <= channel <= 255)

    def test_mix_channel_formula(self):
        self.assertEqual(mix_channel(255, 0, 50), 127)
        self.assertEqual(mix_channel(100, 200, 25), 125)
        self.assertEqual(mix_channel(3, 4, 33), 3)


class TestBlendPixels(unittest.TestCase):
    def test_matches_scalar_blend(self):
        rng = np.random.default_rng(7)
        base = rng.integers(0, 256, size=(200, 3), dtype=np.uint8)
        watermark = rng.integers(0, 256, size=(200, 4), dtype=np.uint8)
        watermark[::5, 3] = 0
        watermark[::7, :3] = (10, 20, 30)
        for transparency in (0, 1, 33, 50, 67, 99, 100):
            config = make_config(transparency, use_alpha=True, transparency_color=Pixel(10, 20, 30))
            result = blend_pixels(base, watermark, config)
            for i in range(len(base)):
                expected = blend(Pixel(*map(int, base[i])), Pixel(*map(int, watermark[i])), config)
                self.assertEqual(tuple(int(v) for v in result[i]), expected.rgb)

    def test_contribution_mask(self):
        watermark = np.array([[0, 0, 0, 255], [5, 5, 5, 0], [9, 9, 9, 10]], dtype=np.uint8)
        config = make_config(use_alpha=True, transparency_color=Pixel(0, 0, 0))
        self.assertEqual(contribution_mask(watermark, config).tolist(), [False, False, True])

    def test_mask_ignores_alpha_for_rgb_watermark(self):
        watermark = np.zeros((2, 3), dtype=np.uint8)
        self.assertEqual(contribution_mask(watermark, make_config(use_alpha=True)).tolist(), [True, True])
