"""
Sensor frame decoding for SnapBook.

Converts planar 4:2:0 luma/chroma camera frames into RGBA pixel buffers.
The frame is first repacked into a semi-planar "VU-interleaved" (NV21)
byte sequence, which is then converted with the integer BT.601 formula.

Example:
    >>> frame = SensorFrame(
    ...     width=4,
    ...     height=2,
    ...     planes=[
    ...         SensorPlane(bytes([128] * 8), row_stride=4),
    ...         SensorPlane(bytes([128] * 2), row_stride=2),
    ...         SensorPlane(bytes([128] * 2), row_stride=2),
    ...     ],
    ... )
    >>> buffer = decode_frame(frame)
    >>> buffer.size
    (4, 2)

Classes:
    SensorPlane: One byte plane with its row and pixel strides
    SensorFrame: Width, height and the Y, U, V planes

Functions:
    build_semi_planar: Repack a planar frame into NV21 bytes
    decode_semi_planar: Convert NV21 bytes to a PixelBuffer
    decode_frame: Full planar frame to PixelBuffer conversion
    flip_horizontal: Mirror a buffer about its vertical axis
"""

from dataclasses import dataclass, field
import logging
from typing import List, Tuple

import numpy as np

from SB_Libs.constants import (
    LUMA_OFFSET,
    CHROMA_OFFSET,
    YUV_LUMA_COEFF,
    YUV_V_TO_R,
    YUV_V_TO_G,
    YUV_U_TO_G,
    YUV_U_TO_B,
    YUV_FIXED_POINT_MAX,
    YUV_FIXED_POINT_SHIFT,
    OPAQUE_ALPHA,
)
from SB_Libs.ImageEditingLib.errors import FormatError
from SB_Libs.ImageEditingLib.image_models import PixelBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SensorPlane:
    """A single byte plane as handed over by the capture layer.

    Attributes:
        data: Raw plane bytes
        row_stride: Bytes between the starts of consecutive rows
        pixel_stride: Bytes between consecutive samples in a row
    """
    data: bytes
    row_stride: int
    pixel_stride: int = 1


@dataclass(frozen=True)
class SensorFrame:
    """A planar 4:2:0 frame: planes are ordered Y, U, V."""
    width: int
    height: int
    planes: List[SensorPlane] = field(default_factory=list)


def chroma_size(width: int, height: int) -> Tuple[int, int]:
    """Chroma plane dimensions for 2:1 subsampling in both directions."""
    return (width + 1) // 2, (height + 1) // 2


def _extract_plane(plane: SensorPlane, width: int, height: int, name: str) -> np.ndarray:
    """Gather a ``height`` x ``width`` sample grid from a strided plane."""
    if plane.row_stride < 1 or plane.pixel_stride < 1:
        raise FormatError(
            f"{name} plane has invalid strides: row={plane.row_stride}, pixel={plane.pixel_stride}"
        )

    data = np.frombuffer(bytes(plane.data), dtype=np.uint8)
    required = (height - 1) * plane.row_stride + (width - 1) * plane.pixel_stride + 1
    if data.size < required:
        raise FormatError(
            f"{name} plane too short: need {required} bytes for {width}x{height}, got {data.size}"
        )

    rows = np.arange(height)[:, None] * plane.row_stride
    cols = np.arange(width)[None, :] * plane.pixel_stride
    return data[rows + cols]


def build_semi_planar(frame: SensorFrame) -> bytes:
    """
    Repack a planar Y/U/V frame into an NV21 byte sequence.

    The result holds the full-resolution luma plane followed by one V,U pair
    per 2x2 pixel block, ``height*width + 2*chroma_samples`` bytes in total.

    Args:
        frame: Planar sensor frame (planes ordered Y, U, V)

    Returns:
        The semi-planar byte sequence

    Raises:
        FormatError: If fewer than three planes are supplied, the dimensions
            are not positive, or a plane is too short for its strides
    """
    if frame.width <= 0 or frame.height <= 0:
        raise FormatError(f"Frame dimensions must be positive, got {frame.width}x{frame.height}")

    if len(frame.planes) < 3:
        raise FormatError(f"Expected 3 planes, got: {len(frame.planes)}")

    y_plane, u_plane, v_plane = frame.planes[:3]
    chroma_width, chroma_height = chroma_size(frame.width, frame.height)

    luma = _extract_plane(y_plane, frame.width, frame.height, "Y")
    u = _extract_plane(u_plane, chroma_width, chroma_height, "U")
    v = _extract_plane(v_plane, chroma_width, chroma_height, "V")

    interleaved = np.empty((chroma_height, chroma_width * 2), dtype=np.uint8)
    interleaved[:, 0::2] = v
    interleaved[:, 1::2] = u

    logger.debug(
        f"Semi-planar frame prepared: {frame.width}x{frame.height}, "
        f"luma={luma.size}, chroma pairs={u.size}"
    )
    return luma.tobytes() + interleaved.tobytes()


def decode_semi_planar(data: bytes, width: int, height: int) -> PixelBuffer:
    """
    Convert an NV21 byte sequence into an opaque RGBA PixelBuffer.

    Each 2x1 column pair shares one V,U sample pair, and row ``j`` reads
    chroma row ``j >> 1``. Channels are computed in 18-bit fixed point,
    clamped to [0, 262143] and reduced to 8 bits.

    Raises:
        FormatError: If ``data`` is shorter than the frame requires
    """
    if width <= 0 or height <= 0:
        raise FormatError(f"Frame dimensions must be positive, got {width}x{height}")

    chroma_width, chroma_height = chroma_size(width, height)
    frame_size = width * height
    required = frame_size + 2 * chroma_width * chroma_height

    raw = np.frombuffer(bytes(data), dtype=np.uint8)
    if raw.size < required:
        raise FormatError(f"Semi-planar data too short: need {required} bytes, got {raw.size}")

    luma = raw[:frame_size].reshape(height, width).astype(np.int32)
    chroma = raw[frame_size:required].reshape(chroma_height, chroma_width * 2).astype(np.int32)

    # Expand chroma back to full resolution: one pair per 2 columns, per 2 rows
    v = chroma[:, 0::2].repeat(2, axis=0).repeat(2, axis=1)[:height, :width] - CHROMA_OFFSET
    u = chroma[:, 1::2].repeat(2, axis=0).repeat(2, axis=1)[:height, :width] - CHROMA_OFFSET

    y_scaled = YUV_LUMA_COEFF * np.maximum(luma - LUMA_OFFSET, 0)
    r = y_scaled + YUV_V_TO_R * v
    g = y_scaled - YUV_V_TO_G * v - YUV_U_TO_G * u
    b = y_scaled + YUV_U_TO_B * u

    pixels = np.empty((height, width, 4), dtype=np.uint8)
    for index, channel in enumerate((r, g, b)):
        clamped = np.clip(channel, 0, YUV_FIXED_POINT_MAX)
        pixels[..., index] = (clamped >> YUV_FIXED_POINT_SHIFT).astype(np.uint8)
    pixels[..., 3] = OPAQUE_ALPHA

    return PixelBuffer(width, height, pixels)


def decode_frame(frame: SensorFrame) -> PixelBuffer:
    """
    Decode a planar sensor frame into a PixelBuffer of the same size.

    The conversion is atomic: either a fully computed buffer is returned or
    ``FormatError`` is raised and nothing is produced.
    """
    logger.debug(f"Converting image: {frame.width}x{frame.height}")
    if len(frame.planes) >= 3:
        y_plane, u_plane, v_plane = frame.planes[:3]
        logger.debug(
            f"Plane sizes: Y={len(y_plane.data)}, U={len(u_plane.data)}, V={len(v_plane.data)}"
        )

    semi_planar = build_semi_planar(frame)
    return decode_semi_planar(semi_planar, frame.width, frame.height)


def flip_horizontal(buffer: PixelBuffer) -> PixelBuffer:
    """Mirror a buffer about its vertical axis (used for front-camera captures)."""
    return PixelBuffer(buffer.width, buffer.height, buffer.pixels[:, ::-1, :])
