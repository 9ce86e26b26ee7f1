import unittest

import numpy as np

from picture_lab import (
    BLACK,
    EmptyImageError,
    InvalidDimensionsError,
    NonRectangularError,
    Picture,
    Pixel,
)


class TestPictureConstruction(unittest.TestCase):
    def test_given_dimensions_when_solid_then_every_pixel_has_color(self):
        pic = Picture.solid(2, 3, (10, 20, 30))
        self.assertEqual(pic.height, 2)
        self.assertEqual(pic.width, 3)
        for y in range(2):
            for x in range(3):
                self.assertEqual(pic.get_pixel(x, y).get_color(), (10, 20, 30))

    def test_given_no_color_when_solid_then_white(self):
        pic = Picture.solid(1, 1)
        self.assertEqual(pic.get_pixel(0, 0), Pixel(255, 255, 255))

    def test_given_non_positive_dimensions_when_solid_then_invalid_dimensions(self):
        for h, w in [(0, 3), (3, 0), (-1, 2)]:
            with self.assertRaises(InvalidDimensionsError):
                Picture.solid(h, w)
        # Also a ValueError for callers that do not know the library types
        with self.assertRaises(ValueError):
            Picture.solid(0, 0)

    def test_given_rows_of_pixels_when_constructing_then_values_copied(self):
        rows = [[Pixel(1, 2, 3), Pixel(4, 5, 6)], [(7, 8, 9), (10, 11, 12)]]
        pic = Picture(rows)
        self.assertEqual(pic.get_pixel(1, 0).get_color(), (4, 5, 6))
        self.assertEqual(pic.get_pixel(0, 1).get_color(), (7, 8, 9))
        rows[0][0].red = 200
        self.assertEqual(pic.get_pixel(0, 0).red, 1)

    def test_given_empty_source_when_constructing_then_empty_image(self):
        with self.assertRaises(EmptyImageError):
            Picture([])
        with self.assertRaises(EmptyImageError):
            Picture([[]])
        with self.assertRaises(EmptyImageError):
            Picture(np.zeros((0, 4, 3), dtype=np.uint8))

    def test_given_ragged_rows_when_constructing_then_non_rectangular(self):
        with self.assertRaises(NonRectangularError):
            Picture([[(0, 0, 0), (0, 0, 0)], [(0, 0, 0)]])

    def test_given_wrong_array_shape_when_constructing_then_value_error(self):
        with self.assertRaises(ValueError):
            Picture(np.zeros((2, 2), dtype=np.uint8))

    def test_given_four_channel_tuples_when_constructing_then_value_error(self):
        with self.assertRaises(ValueError):
            Picture([[(1, 2, 3, 4)]])
        with self.assertRaises(ValueError):
            Picture([[(1, 2)], [(3, 4)]])

    def test_given_float_array_when_constructing_then_clipped_to_bytes(self):
        pic = Picture(np.array([[[300.0, -4.0, 12.7]]]))
        self.assertEqual(pic.get_pixel(0, 0).get_color(), (255, 0, 12))

    def test_given_picture_when_copied_then_no_shared_storage(self):
        original = Picture.solid(2, 2, BLACK)
        clone = Picture(original)
        clone.set_pixel(0, 0, (255, 255, 255))
        self.assertEqual(original.get_pixel(0, 0).get_color(), BLACK)
        self.assertNotEqual(original, clone)
        self.assertEqual(original, original.copy())

    def test_given_array_when_constructing_then_caller_array_not_aliased(self):
        arr = np.zeros((1, 2, 3), dtype=np.uint8)
        pic = Picture(arr)
        arr[0, 0] = 255
        self.assertEqual(pic.get_pixel(0, 0).get_color(), (0, 0, 0))


class TestPictureAccess(unittest.TestCase):
    def setUp(self):
        self.pic = Picture.solid(2, 3, BLACK)

    def test_given_coordinates_when_setting_pixel_then_only_that_cell_changes(self):
        self.pic.set_pixel(2, 1, Pixel(9, 8, 7))
        self.assertEqual(self.pic.get_pixel(2, 1).get_color(), (9, 8, 7))
        self.assertEqual(self.pic.pixels[1, 2].tolist(), [9, 8, 7])
        self.assertEqual(self.pic.get_pixel(1, 1).get_color(), BLACK)

    def test_given_returned_pixel_when_mutated_then_picture_unchanged(self):
        p = self.pic.get_pixel(0, 0)
        p.set_color(255, 255, 255)
        self.assertEqual(self.pic.get_pixel(0, 0).get_color(), BLACK)

    def test_given_out_of_bounds_when_accessing_then_index_error(self):
        for x, y in [(3, 0), (0, 2), (-1, 0), (0, -1)]:
            with self.assertRaises(IndexError):
                self.pic.get_pixel(x, y)
            with self.assertRaises(IndexError):
                self.pic.set_pixel(x, y, Pixel())

    def test_given_none_when_setting_pixel_then_type_error(self):
        with self.assertRaises(TypeError):
            self.pic.set_pixel(0, 0, None)

    def test_given_pixels_view_when_writing_then_refused(self):
        with self.assertRaises(ValueError):
            self.pic.pixels[0, 0] = 1

    def test_given_picture_when_to_grid_then_rows_of_pixels(self):
        grid = self.pic.to_grid()
        self.assertEqual(len(grid), 2)
        self.assertEqual(len(grid[0]), 3)
        self.assertIsInstance(grid[0][0], Pixel)
