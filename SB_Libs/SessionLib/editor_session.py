"""
Scrapbook journal and page editor session.

Holds the list of stored pages and exactly one active page, edited through
its CanvasModel. Pages are persisted through a PageStore.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from SB_Libs.constants import (
    NEW_PAGE_TITLE,
    BOOTH_PAGE_TITLE,
    IMPORTED_PAGE_TITLE,
    DEFAULT_PAGE_TITLE,
    ADDED_IMAGE_POSITION,
    ADDED_TEXT_POSITION,
    ADDED_DOODLE_POSITION,
    COVER_IMAGE_SIZE,
)
from SB_Libs.CanvasLib.canvas_items import CanvasItem, ItemKind, create_item
from SB_Libs.CanvasLib.canvas_model import CanvasModel
from SB_Libs.CanvasLib.canvas_renderer import ImageLoader, render_page
from SB_Libs.CanvasLib.page_models import ScrapbookPage
from SB_Libs.ImageEditingLib.image_models import PixelBuffer
from SB_Libs.ProjStoreLib.page_store import PageStore

logger = logging.getLogger(__name__)


class EditorSession:
    """
    Journal of stored pages plus the page currently being edited.

    Example:
        >>> session = EditorSession(PageStore(tmp_dir))
        >>> session.new_page()
        >>> session.add_text("Day at the beach")
        >>> session.save_active()
    """

    def __init__(self, store: Union[PageStore, Path, str]):
        self.store = store if isinstance(store, PageStore) else PageStore(store)
        self._pages: List[ScrapbookPage] = []
        self._canvas: Optional[CanvasModel] = None

    @property
    def pages(self) -> List[ScrapbookPage]:
        """Stored pages, most recently modified first (as of the last refresh)."""
        return list(self._pages)

    @property
    def canvas(self) -> CanvasModel:
        if self._canvas is None:
            raise RuntimeError("No page is open")
        return self._canvas

    @property
    def active_page(self) -> Optional[ScrapbookPage]:
        return self._canvas.page if self._canvas is not None else None

    def refresh(self) -> List[ScrapbookPage]:
        self._pages = self.store.load_all()
        return self.pages

    def _activate(self, page: ScrapbookPage) -> ScrapbookPage:
        self._canvas = CanvasModel(page)
        return page

    def new_page(self, title: Optional[str] = None) -> ScrapbookPage:
        """Create, store and open an empty page ("New Page <n>" by default)."""
        page = ScrapbookPage(title=title or f"{NEW_PAGE_TITLE} {len(self._pages) + 1}")
        self.store.save(page)
        self.refresh()
        logger.info(f"Created page {page.page_id}: {page.title}")
        return self._activate(page)

    def new_page_with_image(self, image_path: str, from_booth: bool = False) -> ScrapbookPage:
        """Create, store and open a page whose first item is the given image."""
        page = ScrapbookPage(title=BOOTH_PAGE_TITLE if from_booth else IMPORTED_PAGE_TITLE)
        cover = create_item(ItemKind.IMAGE, *ADDED_IMAGE_POSITION)
        cover.payload.image_path = str(image_path)
        cover.width, cover.height = COVER_IMAGE_SIZE
        page.items.append(cover)

        self.store.save(page)
        self.refresh()
        logger.info(f"Created page {page.page_id} with image {image_path}")
        return self._activate(page)

    def open_page(self, page_id: int) -> ScrapbookPage:
        """Open a stored page; a missing page opens a fresh unsaved one."""
        page = self.store.load(page_id)
        if page is None:
            logger.warning(f"Page {page_id} not found, starting a new page")
            page = ScrapbookPage(title=NEW_PAGE_TITLE)
        return self._activate(page)

    def close_page(self) -> None:
        self._canvas = None

    def save_active(self, title: Optional[str] = None) -> int:
        """
        Store the active page.

        A blank title (given or current) becomes "Untitled Page".

        Returns:
            The page id
        """
        page = self.canvas.page
        if title is not None:
            page.title = title
        page.title = page.title.strip() or DEFAULT_PAGE_TITLE

        page_id = self.store.save(page)
        self.refresh()
        return page_id

    def delete_page(self, page_id: int) -> bool:
        """Delete a stored page; the active page is closed if it was the one deleted."""
        deleted = self.store.delete(page_id)
        active = self.active_page
        if deleted and active is not None and active.page_id == page_id:
            self.close_page()
        self.refresh()
        return deleted

    # ------------------------------------------------------------------
    # Item helpers
    # ------------------------------------------------------------------

    def add_image(self, image_path: str, x: Optional[float] = None, y: Optional[float] = None) -> CanvasItem:
        default_x, default_y = ADDED_IMAGE_POSITION
        item = create_item(ItemKind.IMAGE, default_x if x is None else x, default_y if y is None else y)
        item.payload.image_path = str(image_path)
        return self.canvas.add(item)

    def add_text(self, text: str, x: Optional[float] = None, y: Optional[float] = None) -> Optional[CanvasItem]:
        """Add a text item; blank text adds nothing and returns None."""
        text = (text or "").strip()
        if not text:
            return None
        default_x, default_y = ADDED_TEXT_POSITION
        item = create_item(ItemKind.TEXT, default_x if x is None else x, default_y if y is None else y)
        item.payload.text = text
        return self.canvas.add(item)

    def add_doodle(self, x: Optional[float] = None, y: Optional[float] = None) -> CanvasItem:
        default_x, default_y = ADDED_DOODLE_POSITION
        item = create_item(ItemKind.DOODLE, default_x if x is None else x, default_y if y is None else y)
        return self.canvas.add(item)

    def copy_selected(self) -> Optional[CanvasItem]:
        selected = self.canvas.selected_item
        if selected is None:
            return None
        duplicate = self.canvas.copy(selected)
        self.canvas.select(duplicate)
        return duplicate

    def render_active(
        self,
        width: int,
        height: int,
        image_loader: Optional[ImageLoader] = None,
    ) -> PixelBuffer:
        """Render the active page with the current selection outlined."""
        canvas = self.canvas
        return render_page(canvas.page, width, height, image_loader, canvas.selected_item)
