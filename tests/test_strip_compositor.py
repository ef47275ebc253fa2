"""
Unit tests for strip_compositor module.

Tests strip dimensions, shot placement, missing shots and input handling.
"""

from datetime import date

import pytest

from SB_Libs.ImageEditingLib.errors import EmptyInputError
from SB_Libs.ImageEditingLib.image_models import PixelBuffer
from SB_Libs.ImageEditingLib.strip_compositor import (
    compose_strip,
    format_strip_date,
    shot_origin,
    strip_size,
)

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
BACKGROUND = (250, 248, 245, 255)


def _cell_center(index):
    x, y = shot_origin(index)
    return x + 175, y + 140


class TestStripSize:
    """Tests for strip_size function."""

    def test_single_shot(self):
        # 80 + 280 + 2*15 + 60 + 2*50
        assert strip_size(1) == (400, 550)

    def test_four_shots(self):
        assert strip_size(4) == (400, 80 + 4 * 280 + 5 * 15 + 60 + 100)

    def test_cells_do_not_overlap(self):
        for index in range(3):
            assert shot_origin(index + 1)[1] - shot_origin(index)[1] == 280 + 15

    def test_cells_are_centred(self):
        assert shot_origin(0) == (25, 130)


class TestComposeStrip:
    """Tests for compose_strip function."""

    def test_empty_input_raises(self):
        with pytest.raises(EmptyInputError):
            compose_strip([])

    def test_none_input_raises(self):
        with pytest.raises(EmptyInputError):
            compose_strip(None)

    def test_single_shot_dimensions(self):
        strip = compose_strip([PixelBuffer.blank(640, 480, RED)], date(2024, 5, 1))
        assert strip.size == (400, 550)

    def test_dimensions_follow_shot_count(self):
        shots = [PixelBuffer.blank(64, 48, RED) for _ in range(4)]
        assert compose_strip(shots).size == strip_size(4)

    def test_shots_fill_their_cells(self):
        strip = compose_strip([PixelBuffer.blank(350, 280, RED), PixelBuffer.blank(70, 56, BLUE)])

        assert strip.pixel(*_cell_center(0)) == RED
        assert strip.pixel(*_cell_center(1)) == BLUE

    def test_shots_are_fitted_not_stretched(self):
        """A tall shot is centre-cropped to fill the whole cell."""
        strip = compose_strip([PixelBuffer.blank(100, 600, BLUE)])
        x, y = shot_origin(0)

        assert strip.pixel(x + 10, y + 10) == BLUE
        assert strip.pixel(x + 340, y + 270) == BLUE

    def test_missing_shot_keeps_its_slot(self):
        """A None shot draws nothing, but later shots stay in place."""
        strip = compose_strip([None, PixelBuffer.blank(64, 48, RED)])

        assert strip.size == strip_size(2)
        assert strip.pixel(*_cell_center(0)) == BACKGROUND
        assert strip.pixel(*_cell_center(1)) == RED

    def test_empty_shot_is_skipped(self):
        strip = compose_strip([PixelBuffer(0, 0, []), PixelBuffer.blank(8, 8, RED)])
        assert strip.pixel(*_cell_center(0)) == BACKGROUND

    def test_background_and_opacity(self):
        strip = compose_strip([PixelBuffer.blank(8, 8, RED)])

        assert strip.pixel(30, 125) == BACKGROUND
        assert (strip.pixels[..., 3] == 255).all()

    def test_inputs_not_modified(self):
        shot = PixelBuffer.blank(32, 32, RED)
        original = shot.copy()

        compose_strip([shot])

        assert shot == original


class TestFormatStripDate:
    """Tests for format_strip_date function."""

    def test_long_month_format(self):
        assert format_strip_date(date(2024, 3, 7)) == "March 07, 2024"
