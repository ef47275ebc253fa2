"""
Photo Strip Compositor for SnapBook.

Lays out a sequence of (already filtered) shots into a single vintage photo
strip: cream background, two decorative border rectangles, a header caption,
the shots stacked top to bottom in fixed 350x280 cells with a thin frame, and
a footer caption carrying the date.

Layout for ``n`` shots (all values in pixels):

    width  = 400
    height = header(80) + n*280 + (n+1)*spacing(15) + footer(60) + 2*border(50)

Example:
    >>> shots = [apply_filter(buffer, FilterKind.SEPIA) for buffer in captures]
    >>> strip = compose_strip(shots)
    >>> strip.width
    400
"""

from datetime import date as date_type
import logging
from typing import Optional, Sequence, Tuple

from SB_Libs.constants import (
    STRIP_WIDTH,
    STRIP_PHOTO_WIDTH,
    STRIP_PHOTO_HEIGHT,
    STRIP_BORDER_WIDTH,
    STRIP_SPACING,
    STRIP_HEADER_HEIGHT,
    STRIP_FOOTER_HEIGHT,
    STRIP_OUTER_INSET,
    STRIP_INNER_INSET,
    STRIP_BACKGROUND_COLOR,
    STRIP_OUTER_BORDER_COLOR,
    STRIP_OUTER_BORDER_WIDTH,
    STRIP_INNER_BORDER_COLOR,
    STRIP_INNER_BORDER_WIDTH,
    STRIP_FRAME_COLOR,
    STRIP_FRAME_WIDTH,
    STRIP_HEADER_TEXT,
    STRIP_HEADER_COLOR,
    STRIP_HEADER_FONT_SIZE,
    STRIP_HEADER_BASELINE,
    STRIP_FOOTER_COLOR,
    STRIP_FOOTER_FONT_SIZE,
    STRIP_FOOTER_BASELINE_FROM_BOTTOM,
    STRIP_DATE_FORMAT,
)
from SB_Libs.ImageEditingLib.errors import EmptyInputError
from SB_Libs.ImageEditingLib.fonts import load_font
from SB_Libs.ImageEditingLib.image_models import PixelBuffer
from SB_Libs.pillow_compat import Image, ImageDraw, ImageOps

logger = logging.getLogger(__name__)


def strip_size(shot_count: int) -> Tuple[int, int]:
    """Width and height of a strip holding ``shot_count`` shots."""
    height = (
        STRIP_HEADER_HEIGHT
        + STRIP_PHOTO_HEIGHT * shot_count
        + STRIP_SPACING * (shot_count + 1)
        + STRIP_FOOTER_HEIGHT
        + STRIP_BORDER_WIDTH * 2
    )
    return STRIP_WIDTH, height


def shot_origin(index: int) -> Tuple[int, int]:
    """Top-left corner of the cell reserved for shot ``index``."""
    x = (STRIP_WIDTH - STRIP_PHOTO_WIDTH) // 2
    y = STRIP_HEADER_HEIGHT + STRIP_BORDER_WIDTH + index * (STRIP_PHOTO_HEIGHT + STRIP_SPACING)
    return x, y


def format_strip_date(day: date_type) -> str:
    return day.strftime(STRIP_DATE_FORMAT)


def _draw_borders(draw, width: int, height: int) -> None:
    draw.rectangle(
        [STRIP_OUTER_INSET, STRIP_OUTER_INSET, width - STRIP_OUTER_INSET, height - STRIP_OUTER_INSET],
        outline=STRIP_OUTER_BORDER_COLOR,
        width=STRIP_OUTER_BORDER_WIDTH,
    )
    draw.rectangle(
        [STRIP_INNER_INSET, STRIP_INNER_INSET, width - STRIP_INNER_INSET, height - STRIP_INNER_INSET],
        outline=STRIP_INNER_BORDER_COLOR,
        width=STRIP_INNER_BORDER_WIDTH,
    )


def _draw_header(draw, width: int) -> None:
    font = load_font("serif", STRIP_HEADER_FONT_SIZE, bold=True)
    draw.text(
        (width // 2, STRIP_BORDER_WIDTH + STRIP_HEADER_BASELINE),
        STRIP_HEADER_TEXT,
        fill=STRIP_HEADER_COLOR,
        font=font,
        anchor="ms",
    )


def _draw_footer(draw, width: int, height: int, day: date_type) -> None:
    font = load_font("serif", STRIP_FOOTER_FONT_SIZE, italic=True)
    draw.text(
        (width // 2, height - STRIP_FOOTER_BASELINE_FROM_BOTTOM),
        format_strip_date(day),
        fill=STRIP_FOOTER_COLOR,
        font=font,
        anchor="ms",
    )


def _fit_shot(shot: PixelBuffer):
    image = shot.to_image()
    if image.size == (STRIP_PHOTO_WIDTH, STRIP_PHOTO_HEIGHT):
        return image
    return ImageOps.fit(
        image,
        (STRIP_PHOTO_WIDTH, STRIP_PHOTO_HEIGHT),
        method=Image.Resampling.LANCZOS,
    )


def compose_strip(
    shots: Sequence[Optional[PixelBuffer]],
    date: Optional[date_type] = None,
) -> PixelBuffer:
    """
    Compose shots into a single photo strip.

    Each shot is fitted (scaled and centre-cropped) to its 350x280 cell. A
    ``None`` entry draws nothing but still occupies its cell, so later shots
    keep their positions.

    Args:
        shots: Ordered shots (entries may be None)
        date: Date printed in the footer (default: today)

    Returns:
        The strip as a new PixelBuffer

    Raises:
        EmptyInputError: If shots is None or empty
    """
    if not shots:
        raise EmptyInputError("No photos provided")

    width, height = strip_size(len(shots))
    logger.debug(f"Creating photo strip: {width}x{height}")

    canvas = Image.new("RGBA", (width, height), STRIP_BACKGROUND_COLOR)
    draw = ImageDraw.Draw(canvas)

    _draw_borders(draw, width, height)
    _draw_header(draw, width)

    for index, shot in enumerate(shots):
        if shot is None or shot.is_empty:
            logger.debug(f"Shot {index} missing, leaving its cell empty")
            continue

        x, y = shot_origin(index)
        canvas.alpha_composite(_fit_shot(shot), dest=(x, y))
        draw.rectangle(
            [x, y, x + STRIP_PHOTO_WIDTH, y + STRIP_PHOTO_HEIGHT],
            outline=STRIP_FRAME_COLOR,
            width=STRIP_FRAME_WIDTH,
        )

    _draw_footer(draw, width, height, date or date_type.today())

    logger.debug("Photo strip created successfully")
    return PixelBuffer.from_image(canvas)
