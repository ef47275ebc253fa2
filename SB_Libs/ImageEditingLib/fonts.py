"""Font lookup for text drawn on strips and pages."""

from functools import lru_cache
import logging
from typing import Any

from SB_Libs.constants import FONT_FILES, FONT_STYLE_SUFFIXES
from SB_Libs.pillow_compat import ImageFont

logger = logging.getLogger(__name__)


@lru_cache(maxsize=64)
def load_font(family: str, size: float, bold: bool = False, italic: bool = False) -> Any:
    """
    Load a TrueType font for a family name and style.

    Unknown families are tried as file names. When no matching font file is
    installed, Pillow's scalable default font is returned at the same size.
    """
    pixel_size = max(1, int(round(size)))
    base_name = FONT_FILES.get(str(family).strip().lower(), str(family))
    suffix = FONT_STYLE_SUFFIXES[(bool(bold), bool(italic))]

    for candidate in (f"{base_name}{suffix}.ttf", f"{base_name}.ttf"):
        try:
            return ImageFont.truetype(candidate, pixel_size)
        except OSError:
            continue

    logger.debug(f"No font file for '{family}', using default font at {pixel_size}px")
    return ImageFont.load_default(size=pixel_size)
