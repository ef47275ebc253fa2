"""
CanvasLib - Scrapbook page canvas

This module provides the canvas item variants, the page model, the
hit-testable canvas model and the page renderer.
"""

from SB_Libs.CanvasLib.canvas_items import (
    ItemKind,
    ImagePayload,
    TextPayload,
    DoodlePayload,
    CanvasItem,
    create_item,
    kind_of,
)
from SB_Libs.CanvasLib.page_models import ScrapbookPage
from SB_Libs.CanvasLib.canvas_model import CanvasModel
from SB_Libs.CanvasLib.canvas_renderer import (
    render_page,
    render_item_tile,
)

__all__ = [
    "ItemKind",
    "ImagePayload",
    "TextPayload",
    "DoodlePayload",
    "CanvasItem",
    "create_item",
    "kind_of",
    "ScrapbookPage",
    "CanvasModel",
    "render_page",
    "render_item_tile",
]
