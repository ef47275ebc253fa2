"""
Scrapbook page model.

A page owns an ordered list of canvas items (later items are drawn on top),
a background colour, an optional background image and its timestamps
(epoch milliseconds).
"""

from dataclasses import dataclass, field
import time
from typing import List, Optional

from SB_Libs.constants import (
    DEFAULT_PAGE_BACKGROUND,
    DEFAULT_PAGE_TITLE,
    PREVIEW_TEXT_LENGTH,
    EMPTY_PREVIEW_TEXT,
)
from SB_Libs.CanvasLib.canvas_items import (
    CanvasItem,
    ItemKind,
    ImagePayload,
    TextPayload,
)


def current_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class ScrapbookPage:
    title: str = DEFAULT_PAGE_TITLE
    page_id: int = 0
    created_date: int = field(default_factory=current_millis)
    last_modified: int = field(default_factory=current_millis)
    items: List[CanvasItem] = field(default_factory=list)
    background_image_path: Optional[str] = None
    background_color: int = DEFAULT_PAGE_BACKGROUND

    def update_modified(self) -> None:
        self.last_modified = current_millis()

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def image_count(self) -> int:
        return sum(1 for item in self.items if item.kind is ItemKind.IMAGE)

    @property
    def text_count(self) -> int:
        return sum(1 for item in self.items if item.kind is ItemKind.TEXT)

    def preview_text(self) -> str:
        """First non-blank text item, trimmed and cut to 50 characters."""
        for item in self.items:
            payload = item.payload
            if isinstance(payload, TextPayload) and payload.text and payload.text.strip():
                preview = payload.text.strip()
                if len(preview) > PREVIEW_TEXT_LENGTH:
                    return preview[:PREVIEW_TEXT_LENGTH] + "..."
                return preview
        return EMPTY_PREVIEW_TEXT

    def first_image_path(self) -> Optional[str]:
        for item in self.items:
            payload = item.payload
            if isinstance(payload, ImagePayload) and payload.image_path is not None:
                return payload.image_path
        return None
