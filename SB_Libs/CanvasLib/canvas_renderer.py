"""
Scrapbook Page Renderer.

Composites a page into a single RGBA buffer: background colour, optional
background image, then every item in z-order. Each item is drawn into its
own local tile (fill, content, border), scaled and rotated about its centre,
and alpha-composited onto the page.

Example:
    >>> page = ScrapbookPage(title="Trip")
    >>> page.items.append(create_item(ItemKind.TEXT, 20, 20))
    >>> preview = render_page(page, 360, 640)
    >>> preview.size
    (360, 640)
"""

import logging
import math
from typing import Any, Callable, List, Optional, Tuple

from SB_Libs.constants import (
    PLACEHOLDER_COLOR,
    PLACEHOLDER_RADIUS,
    TEXT_LEFT_PADDING,
    TEXT_LINE_SPACING,
    DOODLE_PLACEHOLDER_INSET,
    SELECTION_COLOR,
    SELECTION_WIDTH,
    SELECTION_MARGIN,
    SELECTION_DASH,
)
from SB_Libs.CanvasLib.canvas_items import (
    CanvasItem,
    ImagePayload,
    TextPayload,
    DoodlePayload,
)
from SB_Libs.CanvasLib.page_models import ScrapbookPage
from SB_Libs.ImageEditingLib.fonts import load_font
from SB_Libs.ImageEditingLib.image_io import load_pixel_buffer
from SB_Libs.ImageEditingLib.image_models import PixelBuffer, argb_to_rgba
from SB_Libs.pillow_compat import Image, ImageDraw

logger = logging.getLogger(__name__)

ImageLoader = Callable[[str], Optional[PixelBuffer]]

# Segments used to approximate each quadratic curve of the doodle placeholder
_CURVE_STEPS = 24


def _load(loader: ImageLoader, path: Optional[str], what: str) -> Optional[PixelBuffer]:
    if not path:
        return None
    try:
        buffer = loader(path)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load {what} image {path}: {e}")
        return None
    if buffer is None:
        logger.warning(f"{what.capitalize()} image not found: {path}")
    return buffer


def _quadratic(p0: Tuple[float, float], p1: Tuple[float, float], p2: Tuple[float, float]) -> List[Tuple[float, float]]:
    points = []
    for step in range(_CURVE_STEPS + 1):
        t = step / _CURVE_STEPS
        u = 1.0 - t
        points.append((
            u * u * p0[0] + 2 * u * t * p1[0] + t * t * p2[0],
            u * u * p0[1] + 2 * u * t * p1[1] + t * t * p2[1],
        ))
    return points


def _draw_image_content(tile: Any, draw: Any, payload: ImagePayload, loader: ImageLoader) -> None:
    buffer = _load(loader, payload.image_path, "item")
    if buffer is None:
        draw.rounded_rectangle(
            [0, 0, tile.width - 1, tile.height - 1],
            radius=PLACEHOLDER_RADIUS,
            fill=PLACEHOLDER_COLOR,
        )
        return
    tile.alpha_composite(buffer.to_image().resize(tile.size, Image.Resampling.LANCZOS))


def _draw_text_content(tile: Any, draw: Any, payload: TextPayload) -> None:
    if not payload.text or not payload.text.strip():
        return

    font = load_font(payload.font_family, payload.text_size, payload.is_bold, payload.is_italic)
    fill = argb_to_rgba(payload.text_color)
    line_height = payload.text_size * TEXT_LINE_SPACING
    baseline = payload.text_size

    for line in payload.text.split("\n"):
        if baseline >= tile.height:
            break
        draw.text((TEXT_LEFT_PADDING, baseline), line, fill=fill, font=font, anchor="ls")
        baseline += line_height


def _draw_doodle_content(tile: Any, draw: Any, payload: DoodlePayload, loader: ImageLoader) -> None:
    buffer = _load(loader, payload.doodle_path, "doodle")
    if buffer is not None:
        tile.alpha_composite(buffer.to_image().resize(tile.size, Image.Resampling.LANCZOS))
        return

    # Placeholder: a closed loop of two quadratic curves
    width, height = tile.size
    inset = DOODLE_PLACEHOLDER_INSET
    left = (inset, height / 2.0)
    right = (width - inset, height / 2.0)
    upper = _quadratic(left, (width / 2.0, inset), right)
    lower = _quadratic(right, (width / 2.0, height - inset), left)
    draw.line(
        upper + lower[1:],
        fill=argb_to_rgba(payload.stroke_color),
        width=max(1, int(round(payload.stroke_width))),
        joint="curve",
    )


def render_item_tile(item: CanvasItem, loader: ImageLoader = load_pixel_buffer) -> Any:
    """
    Draw an item in its own untransformed local space.

    Returns:
        RGBA PIL Image of size ceil(width) x ceil(height)
    """
    tile_width = max(1, int(math.ceil(item.width)))
    tile_height = max(1, int(math.ceil(item.height)))
    tile = Image.new("RGBA", (tile_width, tile_height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(tile)

    rect = [0, 0, tile_width - 1, tile_height - 1]
    radius = max(0, int(round(item.corner_radius)))

    if item.background_color != 0:
        draw.rounded_rectangle(rect, radius=radius, fill=argb_to_rgba(item.background_color))

    payload = item.payload
    if isinstance(payload, ImagePayload):
        _draw_image_content(tile, draw, payload, loader)
    elif isinstance(payload, TextPayload):
        _draw_text_content(tile, draw, payload)
    elif isinstance(payload, DoodlePayload):
        _draw_doodle_content(tile, draw, payload, loader)
    else:
        raise TypeError(f"Unsupported item payload: {type(payload)}")

    if item.has_border:
        draw.rounded_rectangle(
            rect,
            radius=radius,
            outline=argb_to_rgba(item.border_color),
            width=max(1, int(round(item.border_width))),
        )

    return tile


def _transform_tile(tile: Any, item: CanvasItem) -> Any:
    if item.scale != 1:
        scaled = (
            max(1, int(round(tile.width * item.scale))),
            max(1, int(round(tile.height * item.scale))),
        )
        tile = tile.resize(scaled, Image.Resampling.BICUBIC)

    if item.rotation % 360 != 0:
        # PIL rotates counter-clockwise; canvas rotation is clockwise (y down)
        tile = tile.rotate(-item.rotation, resample=Image.Resampling.BICUBIC, expand=True)

    return tile


def _composite_item(canvas: Any, item: CanvasItem, loader: ImageLoader) -> Any:
    tile = _transform_tile(render_item_tile(item, loader), item)
    center_x, center_y = item.center
    left = int(round(center_x - tile.width / 2.0))
    top = int(round(center_y - tile.height / 2.0))

    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    layer.paste(tile, (left, top))
    return Image.alpha_composite(canvas, layer)


def _dashed_line(draw: Any, start: Tuple[float, float], end: Tuple[float, float]) -> None:
    length = math.hypot(end[0] - start[0], end[1] - start[1])
    if length == 0:
        return
    ux, uy = (end[0] - start[0]) / length, (end[1] - start[1]) / length
    offset = 0.0
    while offset < length:
        dash_end = min(offset + SELECTION_DASH, length)
        draw.line(
            [
                (start[0] + ux * offset, start[1] + uy * offset),
                (start[0] + ux * dash_end, start[1] + uy * dash_end),
            ],
            fill=SELECTION_COLOR,
            width=SELECTION_WIDTH,
        )
        offset += SELECTION_DASH * 2


def draw_selection(canvas: Any, item: CanvasItem) -> None:
    """Dashed outline around the item's untransformed bounds, grown by 5."""
    draw = ImageDraw.Draw(canvas)
    left = item.x - SELECTION_MARGIN
    top = item.y - SELECTION_MARGIN
    right = item.x + item.width + SELECTION_MARGIN
    bottom = item.y + item.height + SELECTION_MARGIN
    corners = [(left, top), (right, top), (right, bottom), (left, bottom)]
    for index, start in enumerate(corners):
        _dashed_line(draw, start, corners[(index + 1) % len(corners)])


def render_page(
    page: ScrapbookPage,
    width: int,
    height: int,
    image_loader: Optional[ImageLoader] = None,
    selected_item: Optional[CanvasItem] = None,
) -> PixelBuffer:
    """
    Render a page to a new buffer.

    Args:
        page: Page to draw (not modified)
        width: Output width in pixels
        height: Output height in pixels
        image_loader: Callable mapping a path to a PixelBuffer or None
                      (default: load from disk)
        selected_item: Item to outline as selected, if any

    Returns:
        The rendered page

    Raises:
        ValueError: If width or height is not positive
        TypeError: If an item carries an unknown payload
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Render size must be positive, got {width}x{height}")

    loader = image_loader or load_pixel_buffer
    canvas = Image.new("RGBA", (int(width), int(height)), argb_to_rgba(page.background_color))

    background = _load(loader, page.background_image_path, "background")
    if background is not None:
        canvas.alpha_composite(background.to_image().resize(canvas.size, Image.Resampling.LANCZOS))

    for item in page.items:
        canvas = _composite_item(canvas, item, loader)

    if selected_item is not None:
        draw_selection(canvas, selected_item)

    logger.debug(f"Rendered page '{page.title}' with {page.item_count} items at {width}x{height}")
    return PixelBuffer.from_image(canvas)
