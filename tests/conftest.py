"""
Pytest configuration and shared fixtures for SnapBook tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest

from SB_Libs.ImageEditingLib.color_space_decoder import SensorFrame, SensorPlane
from SB_Libs.ImageEditingLib.image_models import PixelBuffer


def make_sensor_frame(width, height, y_value=128, u_value=128, v_value=128, pixel_stride=1, row_padding=0):
    """
    Build a planar 4:2:0 frame filled with constant Y, U and V samples.

    Chroma planes use ``pixel_stride`` between samples and every plane is
    padded by ``row_padding`` bytes per row.
    """
    chroma_width, chroma_height = (width + 1) // 2, (height + 1) // 2

    y_stride = width + row_padding
    y_plane = SensorPlane(bytes([y_value]) * (y_stride * height), y_stride, 1)

    c_stride = chroma_width * pixel_stride + row_padding
    u_plane = SensorPlane(bytes([u_value]) * (c_stride * chroma_height), c_stride, pixel_stride)
    v_plane = SensorPlane(bytes([v_value]) * (c_stride * chroma_height), c_stride, pixel_stride)
    return SensorFrame(width, height, [y_plane, u_plane, v_plane])


@pytest.fixture
def temp_pages_dir(tmp_path):
    """
    Provide a temporary base directory for page files.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to a temporary directory
    """
    return tmp_path


@pytest.fixture
def gradient_buffer():
    """A 16x8 opaque buffer with distinct colours in every pixel."""
    height, width = 8, 16
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = xs * 16
    pixels[..., 1] = ys * 32
    pixels[..., 2] = 255 - xs * 8
    pixels[..., 3] = 255
    return PixelBuffer(width, height, pixels)


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),      # Black
        (128, 128, 128, 255),  # Gray
        (200, 120, 40, 128),  # Translucent orange
    ]


@pytest.fixture
def gray_frame():
    """A 6x4 mid-gray sensor frame with interleaved (pixel stride 2) chroma."""
    return make_sensor_frame(6, 4, y_value=128, pixel_stride=2, row_padding=3)


@pytest.fixture
def frame_factory():
    """Provide make_sensor_frame for tests that need custom frames."""
    return make_sensor_frame
