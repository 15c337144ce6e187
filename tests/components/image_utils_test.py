import os
import tempfile
import unittest

from PIL import Image

from components.image_processing.image_utils import (
    describe_image,
    get_transparency_kind,
    open_image,
    read_metadata,
    save_image,
)
from components.image_processing.raster import Raster
from utils.data_structures import Pixel, TransparencyKindEnum
from utils.exceptions import InputError


class TestReadMetadata(unittest.TestCase):
    def test_rgb(self):
        meta = read_metadata(Image.new('RGB', (4, 3)), 'a.png')
        self.assertEqual((meta.width, meta.height), (4, 3))
        self.assertEqual(meta.num_components, 3)
        self.assertEqual(meta.num_color_components, 3)
        self.assertEqual(meta.bits_per_pixel, 24)
        self.assertEqual(meta.transparency, TransparencyKindEnum.OPAQUE)

    def test_rgba(self):
        meta = read_metadata(Image.new('RGBA', (4, 3)))
        self.assertEqual(meta.num_components, 4)
        self.assertEqual(meta.num_color_components, 3)
        self.assertEqual(meta.bits_per_pixel, 32)
        self.assertEqual(meta.transparency, TransparencyKindEnum.TRANSLUCENT)

    def test_rgbx(self):
        meta = read_metadata(Image.new('RGBX', (2, 2)))
        self.assertEqual(meta.num_components, 3)
        self.assertEqual(meta.bits_per_pixel, 32)

    def test_grayscale_and_palette(self):
        gray = read_metadata(Image.new('L', (2, 2)))
        self.assertEqual((gray.num_components, gray.bits_per_pixel), (1, 8))
        palette = read_metadata(Image.new('P', (2, 2)))
        self.assertEqual((palette.num_color_components, palette.bits_per_pixel), (3, 8))

    def test_bitmask(self):
        image = Image.new('RGB', (2, 2))
        image.info['transparency'] = (0, 0, 0)
        self.assertEqual(get_transparency_kind(image), TransparencyKindEnum.BITMASK)

    def test_describe(self):
        lines = describe_image(read_metadata(Image.new('RGBA', (5, 6)), 'mark.png'))
        self.assertEqual(lines[0], 'Image file: mark.png')
        self.assertIn('Width: 5', lines)
        self.assertIn('Height: 6', lines)
        self.assertIn('Bits per pixel: 32', lines)
        self.assertIn('Transparency: TRANSLUCENT', lines)


class TestOpenSaveImage(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def path(self, name):
        return os.path.join(self.tmp.name, name)

    def test_open_rgb_png(self):
        Image.new('RGB', (3, 2), (10, 20, 30)).save(self.path('base.png'))
        raster, meta = open_image(self.path('base.png'))
        self.assertFalse(raster.has_alpha)
        self.assertEqual(raster.size, (3, 2))
        self.assertEqual(raster.pixel(2, 1), Pixel(10, 20, 30))
        self.assertEqual(meta.filename, self.path('base.png'))

    def test_open_rgba_png_keeps_alpha(self):
        Image.new('RGBA', (2, 2), (10, 20, 30, 0)).save(self.path('mark.png'))
        raster, meta = open_image(self.path('mark.png'))
        self.assertTrue(raster.has_alpha)
        self.assertEqual(raster.pixel(0, 0), Pixel(10, 20, 30, 0))
        self.assertTrue(meta.is_translucent)

    def test_missing_file(self):
        with self.assertRaises(InputError):
            open_image(self.path('missing.png'))

    def test_not_an_image(self):
        with open(self.path('notes.png'), 'w') as f:
            f.write('not an image')
        with self.assertRaises(InputError):
            open_image(self.path('notes.png'))

    def test_save_png_and_jpg(self):
        raster = Raster.filled(4, 4, Pixel(200, 100, 50))
        save_image(raster, self.path('out.png'))
        save_image(raster, self.path('out.jpg'))
        with Image.open(self.path('out.png')) as image:
            self.assertEqual(image.format, 'PNG')
            self.assertEqual(image.getpixel((3, 3)), (200, 100, 50))
        with Image.open(self.path('out.jpg')) as image:
            self.assertEqual(image.format, 'JPEG')
            self.assertEqual(image.size, (4, 4))

    def test_save_rejects_extension(self):
        with self.assertRaises(InputError):
            save_image(Raster.filled(1, 1, Pixel(0, 0, 0)), self.path('out.bmp'))
        self.assertFalse(os.path.exists(self.path('out.bmp')))
