"""
Canvas model for a scrapbook page.

Wraps a page's ordered item list with the editing operations used by the
page editor: adding and removing items, hit-testing through each item's
rotation and scale, moving, resizing, copying and single-item selection.

Example:
    >>> page = ScrapbookPage(title="Summer")
    >>> canvas = CanvasModel(page)
    >>> note = canvas.add(create_item(ItemKind.TEXT, 40, 40))
    >>> canvas.select_at(60, 50) is note
    True
    >>> canvas.drag_selected(10, 0)
"""

import logging
from typing import List, Optional

from SB_Libs.CanvasLib.canvas_items import CanvasItem, ItemKind
from SB_Libs.CanvasLib.page_models import ScrapbookPage

logger = logging.getLogger(__name__)


class CanvasModel:
    """
    Ordered, hit-testable item collection with selection state.

    Z-order is list order: the last item is the topmost. Selection holds at
    most one item and never changes item data.
    """

    def __init__(self, page: Optional[ScrapbookPage] = None):
        self.page = page if page is not None else ScrapbookPage()
        self._selected: Optional[CanvasItem] = None

    @property
    def items(self) -> List[CanvasItem]:
        """A snapshot of the items in z-order (bottom first)."""
        return list(self.page.items)

    def __len__(self) -> int:
        return len(self.page.items)

    def __contains__(self, item: object) -> bool:
        return any(existing is item for existing in self.page.items)

    def _index_of(self, item: CanvasItem) -> int:
        for index, existing in enumerate(self.page.items):
            if existing is item:
                return index
        return -1

    def add(self, item: CanvasItem) -> CanvasItem:
        """Append an item; it becomes the topmost."""
        if item in self:
            raise ValueError(f"Item {item.item_id} is already on this canvas")
        self.page.items.append(item)
        logger.debug(f"Added {item.kind.value} item {item.item_id}")
        return item

    def remove(self, item: CanvasItem) -> bool:
        """
        Remove an item from the page.

        Returns:
            True if removed, False if the item was not on this canvas
        """
        index = self._index_of(item)
        if index < 0:
            return False

        del self.page.items[index]
        if self._selected is item:
            self._selected = None
        logger.debug(f"Removed {item.kind.value} item {item.item_id}")
        return True

    def hit_test(self, x: float, y: float) -> Optional[CanvasItem]:
        """Topmost item whose transformed region contains the point."""
        for item in reversed(self.page.items):
            if item.contains(x, y):
                return item
        return None

    def move(self, item: CanvasItem, delta_x: float, delta_y: float) -> None:
        item.move(delta_x, delta_y)

    def resize(self, item: CanvasItem, width: float, height: float) -> None:
        item.resize(width, height)

    def copy(self, item: CanvasItem) -> CanvasItem:
        """Duplicate an item (offset by +20/+20) and place the copy on top."""
        if item not in self:
            raise ValueError(f"Item {item.item_id} is not on this canvas")
        duplicate = item.copy()
        self.page.items.append(duplicate)
        logger.debug(f"Copied item {item.item_id} to {duplicate.item_id}")
        return duplicate

    def items_of_kind(self, kind: ItemKind) -> List[CanvasItem]:
        return [item for item in self.page.items if item.kind is kind]

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def selected_item(self) -> Optional[CanvasItem]:
        return self._selected

    def select(self, item: Optional[CanvasItem]) -> None:
        if item is not None and item not in self:
            raise ValueError(f"Item {item.item_id} is not on this canvas")
        self._selected = item

    def select_at(self, x: float, y: float) -> Optional[CanvasItem]:
        """Select the topmost item under the point (or clear the selection)."""
        self._selected = self.hit_test(x, y)
        return self._selected

    def clear_selection(self) -> None:
        self._selected = None

    def drag_selected(self, delta_x: float, delta_y: float) -> bool:
        if self._selected is None:
            return False
        self._selected.move(delta_x, delta_y)
        return True

    def delete_selected(self) -> bool:
        if self._selected is None:
            return False
        return self.remove(self._selected)
