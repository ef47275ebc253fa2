"""
Image file input/output for SnapBook.

This module wraps Pillow's codecs for moving PixelBuffers to and from disk
and memory. Compressed output defaults to JPEG at quality 95.

Functions:
    save_pixel_buffer: Encode a buffer to a file (format chosen from the suffix)
    load_pixel_buffer: Decode an image file into a buffer (None if missing)
    encode_jpeg: Encode a buffer to JPEG bytes
    decode_image_bytes: Decode encoded image bytes into a buffer
    photo_strip_filename: Timestamped file name for a saved strip
    save_photo_strip: Save a strip into an existing output directory
    save_photos: Save individual photos into an existing output directory
"""

import io
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from SB_Libs.constants import (
    DEFAULT_JPEG_QUALITY,
    DEFAULT_OUTPUT_FORMAT,
    PHOTO_STRIP_FILE_PREFIX,
    PHOTO_FILE_PREFIX,
    SUPPORTED_OUTPUT_FORMATS,
)
from SB_Libs.ImageEditingLib.image_models import PixelBuffer
from SB_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _save_kwargs(save_format: str, quality: int) -> Dict[str, Any]:
    """Get PIL Image.save() kwargs for a format."""
    if save_format in ("JPEG", "WEBP"):
        return {"format": save_format, "quality": int(quality)}
    return {"format": save_format}


def _prepare_for_format(buffer: PixelBuffer, save_format: str) -> Any:
    image = buffer.to_image()
    if save_format == "JPEG":
        # JPEG has no alpha channel
        image = image.convert("RGB")
    return image


def save_pixel_buffer(
    buffer: PixelBuffer,
    path: PathLike,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """
    Save a buffer to disk.

    The format follows the file suffix (.jpg/.jpeg, .png, .webp); unknown
    suffixes are written as JPEG.

    Args:
        buffer: Buffer to save
        path: Destination file path
        quality: Compression quality for lossy formats (1-100)

    Returns:
        The path written

    Raises:
        ValueError: If quality is outside 1-100 or the buffer is empty
        OSError: If the file cannot be written
    """
    if not (1 <= int(quality) <= 100):
        raise ValueError(f"quality must be 1-100, got {quality}")
    if buffer.is_empty:
        raise ValueError("Cannot save an empty buffer")

    path = Path(path)
    save_format = SUPPORTED_OUTPUT_FORMATS.get(path.suffix.lower(), DEFAULT_OUTPUT_FORMAT)
    image = _prepare_for_format(buffer, save_format)
    image.save(path, **_save_kwargs(save_format, quality))

    logger.debug(f"Saved {buffer.width}x{buffer.height} buffer to {path} as {save_format}")
    return path


def load_pixel_buffer(path: Optional[PathLike]) -> Optional[PixelBuffer]:
    """
    Load an image file into a buffer.

    Returns:
        The decoded buffer, or None if path is empty or the file does not exist

    Raises:
        OSError: If the file exists but cannot be decoded
    """
    if not path:
        return None

    path = Path(path)
    if not path.is_file():
        return None

    with Image.open(path) as image:
        return PixelBuffer.from_image(image)


def encode_jpeg(buffer: PixelBuffer, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    output = io.BytesIO()
    image = _prepare_for_format(buffer, "JPEG")
    image.save(output, **_save_kwargs("JPEG", quality))
    return output.getvalue()


def decode_image_bytes(data: bytes) -> PixelBuffer:
    with Image.open(io.BytesIO(data)) as image:
        return PixelBuffer.from_image(image)


def photo_strip_filename(timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{PHOTO_STRIP_FILE_PREFIX}{int(timestamp_ms)}.jpg"


def _require_directory(output_dir: Path) -> Path:
    output_dir = Path(output_dir)
    if not output_dir.exists():
        raise OSError(f"Output directory does not exist: {output_dir}")

    if not output_dir.is_dir():
        raise OSError(f"Output path is not a directory: {output_dir}")
    return output_dir


def save_photo_strip(
    strip: PixelBuffer,
    output_dir: Path,
    timestamp_ms: Optional[int] = None,
) -> Path:
    """
    Save a photo strip as a timestamped JPEG in an existing directory.

    Raises:
        OSError: If the directory does not exist or is not a directory
    """
    output_dir = _require_directory(output_dir)
    save_path = output_dir / photo_strip_filename(timestamp_ms)
    save_pixel_buffer(strip, save_path)
    logger.info(f"Photo strip saved to {save_path}")
    return save_path


def save_photos(
    photos: Sequence[PixelBuffer],
    output_dir: Path,
    timestamp_ms: Optional[int] = None,
) -> List[Path]:
    """
    Save individual photos as ``vintage_photo_<ms>_<n>.jpg`` (n from 1).

    Raises:
        OSError: If the directory does not exist or is not a directory
    """
    output_dir = _require_directory(output_dir)
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)

    saved: List[Path] = []
    for index, photo in enumerate(photos, start=1):
        save_path = output_dir / f"{PHOTO_FILE_PREFIX}{int(timestamp_ms)}_{index}.jpg"
        saved.append(save_pixel_buffer(photo, save_path))

    logger.info(f"{len(saved)} photos saved to {output_dir}")
    return saved
