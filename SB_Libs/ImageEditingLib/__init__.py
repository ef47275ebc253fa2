"""
ImageEditingLib - Core image processing functionality

This module provides the pixel buffer model, sensor frame decoding, the
vintage colour filters, the photo strip compositor and image file I/O.
"""

from SB_Libs.ImageEditingLib.errors import (
    SnapbookError,
    FormatError,
    EmptyInputError,
    BoundsError,
    UnknownFilterError,
)
from SB_Libs.ImageEditingLib.image_models import (
    PixelBuffer,
    RgbaColor,
    argb_to_rgba,
    rgba_to_argb,
)
from SB_Libs.ImageEditingLib.color_space_decoder import (
    SensorPlane,
    SensorFrame,
    build_semi_planar,
    decode_semi_planar,
    decode_frame,
    flip_horizontal,
)
from SB_Libs.ImageEditingLib.filter_engine import (
    FilterKind,
    FilterEngine,
    resolve_filter,
    apply_filter,
    get_default_engine,
)
from SB_Libs.ImageEditingLib.strip_compositor import (
    compose_strip,
    strip_size,
)
from SB_Libs.ImageEditingLib.image_io import (
    save_pixel_buffer,
    load_pixel_buffer,
    encode_jpeg,
    decode_image_bytes,
    save_photo_strip,
    save_photos,
)

__all__ = [
    "SnapbookError",
    "FormatError",
    "EmptyInputError",
    "BoundsError",
    "UnknownFilterError",
    "PixelBuffer",
    "RgbaColor",
    "argb_to_rgba",
    "rgba_to_argb",
    "SensorPlane",
    "SensorFrame",
    "build_semi_planar",
    "decode_semi_planar",
    "decode_frame",
    "flip_horizontal",
    "FilterKind",
    "FilterEngine",
    "resolve_filter",
    "apply_filter",
    "get_default_engine",
    "compose_strip",
    "strip_size",
    "save_pixel_buffer",
    "load_pixel_buffer",
    "encode_jpeg",
    "decode_image_bytes",
    "save_photo_strip",
    "save_photos",
]
