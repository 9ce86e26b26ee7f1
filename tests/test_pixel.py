import math
import unittest

from picture_lab import Pixel


class TestPixel(unittest.TestCase):
    def test_given_out_of_range_values_when_constructing_then_channels_clamped(self):
        p = Pixel(300, -5, 12.9)
        self.assertEqual(p.get_color(), (255, 0, 12))

    def test_given_pixel_when_setting_channels_then_clamped(self):
        p = Pixel()
        p.red = 256
        p.green = -1
        p.blue = 128
        self.assertEqual((p.red, p.green, p.blue), (255, 0, 128))
        p.set_color(1000, 20, -30)
        self.assertEqual(p.get_color(), (255, 20, 0))

    def test_given_two_colors_when_measuring_distance_then_euclidean_and_symmetric(self):
        a = Pixel(0, 0, 0)
        b = Pixel(3, 4, 0)
        self.assertEqual(a.color_distance(b), 5.0)
        self.assertEqual(b.color_distance(a), 5.0)
        self.assertEqual(a.color_distance((3, 4, 0)), 5.0)
        self.assertEqual(a.color_distance(a), 0.0)
        self.assertAlmostEqual(Pixel(255, 255, 255).color_distance((0, 0, 0)), math.sqrt(3) * 255)

    def test_given_larger_channel_gap_when_measuring_distance_then_distance_grows(self):
        base = Pixel(100, 100, 100)
        self.assertLess(base.color_distance((110, 100, 100)), base.color_distance((120, 100, 100)))

    def test_given_tuple_or_pixel_when_from_color_then_independent_copy(self):
        src = Pixel(1, 2, 3)
        copy = Pixel.from_color(src)
        copy.red = 99
        self.assertEqual(src.red, 1)
        self.assertEqual(Pixel.from_color((4, 5, 6)), Pixel(4, 5, 6))
