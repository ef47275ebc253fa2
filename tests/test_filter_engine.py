"""
Tests for the colour filter engine.

Tests cover:
- Filter name resolution
- Each preset's channel maths
- NONE identity and channel range
- Alpha pass-through and input immutability
- Engine registration
"""

import unittest

import numpy as np
import pytest

from SB_Libs.ImageEditingLib.filter_engine import (
    FilterEngine,
    FilterKind,
    apply_filter,
    get_default_engine,
    resolve_filter,
    sepia_transform,
)
from SB_Libs.ImageEditingLib.image_models import PixelBuffer


def _filtered_pixel(kind, color):
    return apply_filter(PixelBuffer.blank(1, 1, color), kind).pixel(0, 0)


class TestResolveFilter(unittest.TestCase):
    """Test filter name lookup."""

    def test_known_names(self):
        self.assertIs(resolve_filter("sepia"), FilterKind.SEPIA)
        self.assertIs(resolve_filter("polaroid"), FilterKind.POLAROID)
        self.assertIs(resolve_filter("kodachrome"), FilterKind.KODACHROME)
        self.assertIs(resolve_filter("vintage"), FilterKind.VINTAGE)
        self.assertIs(resolve_filter("bw"), FilterKind.BLACK_AND_WHITE)
        self.assertIs(resolve_filter("black_and_white"), FilterKind.BLACK_AND_WHITE)
        self.assertIs(resolve_filter("cyanotype"), FilterKind.CYANOTYPE)

    def test_case_insensitive(self):
        self.assertIs(resolve_filter("SePiA"), FilterKind.SEPIA)
        self.assertIs(resolve_filter("  BW "), FilterKind.BLACK_AND_WHITE)

    def test_unknown_name_is_none(self):
        self.assertIs(resolve_filter("lomo"), FilterKind.NONE)
        self.assertIs(resolve_filter(""), FilterKind.NONE)
        self.assertIs(resolve_filter(None), FilterKind.NONE)

    def test_display_names(self):
        self.assertEqual(FilterKind.SEPIA.display_name, "Classic Sepia")
        self.assertEqual(FilterKind.POLAROID.display_name, "1970s Polaroid")
        self.assertEqual(FilterKind.BLACK_AND_WHITE.display_name, "Black & White")


class TestPresetMaths(unittest.TestCase):
    """Test per-pixel results of the presets."""

    def test_sepia(self):
        # r = 78.6 + 92.28 + 7.56, g = 69.8 + 82.32 + 6.72, b = 54.4 + 64.08 + 5.24
        self.assertEqual(_filtered_pixel(FilterKind.SEPIA, (200, 120, 40, 255)), (178, 158, 123, 255))

    def test_polaroid_lifts_black(self):
        self.assertEqual(_filtered_pixel(FilterKind.POLAROID, (0, 0, 0, 255)), (20, 25, 15, 255))

    def test_kodachrome_clamps(self):
        self.assertEqual(_filtered_pixel(FilterKind.KODACHROME, (250, 250, 250, 255)), (255, 255, 225, 255))

    def test_vintage_lifts_black(self):
        self.assertEqual(_filtered_pixel(FilterKind.VINTAGE, (0, 0, 0, 255)), (15, 10, 0, 255))

    def test_black_and_white(self):
        # 0.299 * 200 + 0.587 * 120 + 0.114 * 40 = 134.8
        self.assertEqual(_filtered_pixel(FilterKind.BLACK_AND_WHITE, (200, 120, 40, 255)), (134, 134, 134, 255))

    def test_cyanotype_uses_integer_average(self):
        # (0 + 0 + 77) // 3 = 25 -> 7.5, 15, 27.5
        self.assertEqual(_filtered_pixel(FilterKind.CYANOTYPE, (0, 0, 77, 255)), (7, 15, 27, 255))


class TestFilterProperties:
    """Properties that hold for every preset."""

    @pytest.mark.parametrize("kind", list(FilterKind))
    def test_channels_in_range_and_size_kept(self, kind, gradient_buffer):
        result = apply_filter(gradient_buffer, kind)

        assert result.size == gradient_buffer.size
        assert result.pixels.dtype == np.uint8

    @pytest.mark.parametrize("kind", list(FilterKind))
    def test_alpha_preserved(self, kind, sample_rgba_colors):
        for color in sample_rgba_colors:
            assert _filtered_pixel(kind, color)[3] == color[3]

    def test_transparent_pixel_stays_transparent(self):
        assert _filtered_pixel(FilterKind.SEPIA, (100, 100, 100, 0))[3] == 0
        assert _filtered_pixel(FilterKind.POLAROID, (0, 0, 0, 0)) == (20, 25, 15, 0)

    @pytest.mark.parametrize("kind", list(FilterKind))
    def test_input_not_modified(self, kind, gradient_buffer):
        original = gradient_buffer.copy()
        apply_filter(gradient_buffer, kind)
        assert gradient_buffer == original

    def test_none_is_identity_copy(self, gradient_buffer):
        result = apply_filter(gradient_buffer, FilterKind.NONE)

        assert result == gradient_buffer
        assert result is not gradient_buffer

    def test_black_and_white_is_gray(self, gradient_buffer):
        result = apply_filter(gradient_buffer, FilterKind.BLACK_AND_WHITE)
        pixels = result.pixels

        assert np.array_equal(pixels[..., 0], pixels[..., 1])
        assert np.array_equal(pixels[..., 1], pixels[..., 2])

    def test_none_or_empty_input(self):
        assert apply_filter(None, FilterKind.SEPIA) is None
        assert apply_filter(PixelBuffer(0, 0, []), FilterKind.SEPIA) is None


class TestFilterEngine(unittest.TestCase):
    """Test engine registration."""

    def setUp(self):
        self.engine = FilterEngine()

    def test_unregistered_kind_raises(self):
        with self.assertRaises(KeyError):
            self.engine.apply(PixelBuffer.blank(1, 1), FilterKind.SEPIA)

    def test_none_always_available(self):
        self.assertTrue(self.engine.has_filter(FilterKind.NONE))
        self.assertEqual(self.engine.list_filters(), [FilterKind.NONE])

    def test_register_and_apply(self):
        self.engine.register(FilterKind.SEPIA, sepia_transform)

        result = self.engine.apply(PixelBuffer.blank(1, 1, (200, 120, 40, 255)), FilterKind.SEPIA)

        self.assertEqual(result.pixel(0, 0), (178, 158, 123, 255))
        self.assertEqual(self.engine.list_filters(), [FilterKind.SEPIA, FilterKind.NONE])

    def test_duplicate_registration(self):
        self.engine.register(FilterKind.SEPIA, sepia_transform)
        with self.assertRaises(RuntimeError):
            self.engine.register(FilterKind.SEPIA, sepia_transform)

    def test_cannot_register_none(self):
        with self.assertRaises(ValueError):
            self.engine.register(FilterKind.NONE, sepia_transform)

    def test_transform_must_be_callable(self):
        with self.assertRaises(ValueError):
            self.engine.register(FilterKind.SEPIA, "sepia")

    def test_unregister(self):
        self.engine.register(FilterKind.SEPIA, sepia_transform)

        self.assertTrue(self.engine.unregister(FilterKind.SEPIA))
        self.assertFalse(self.engine.unregister(FilterKind.SEPIA))
        self.assertFalse(self.engine.has_filter(FilterKind.SEPIA))

    def test_custom_transform(self):
        self.engine.register(FilterKind.VINTAGE, lambda r, g, b: (b, g, r))

        result = self.engine.apply(PixelBuffer.blank(1, 1, (1, 2, 3, 255)), FilterKind.VINTAGE)

        self.assertEqual(result.pixel(0, 0), (3, 2, 1, 255))


class TestDefaultEngine(unittest.TestCase):
    """Test the global default engine."""

    def test_singleton(self):
        self.assertIs(get_default_engine(), get_default_engine())

    def test_all_presets_registered(self):
        engine = get_default_engine()
        for kind in FilterKind:
            self.assertTrue(engine.has_filter(kind))
        self.assertEqual(engine.list_filters()[-1], FilterKind.NONE)
