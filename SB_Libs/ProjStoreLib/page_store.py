"""
Scrapbook page storage for SnapBook.

This module handles the persistence layer for scrapbook pages. Each page is
stored as one JSON record in a ``page_<id>.sbpage`` file inside the
``Pages`` directory of a base directory.

The page record schema includes:
- Page metadata (id, title, createdDate, lastModified, schema version)
- Background image path and colour
- Ordered item records with geometry, styling and kind-specific fields

Functions:
    item_to_record / item_from_record: Canvas item <-> JSON-ready dict
    page_to_record / page_from_record: Page <-> JSON-ready dict
    get_pages_dir: Get (and create) the Pages directory
    list_page_files: List all page files
    save_page: Save a page, assigning an id to new pages
    load_page: Load one page by id
    load_all_pages: Load every page, most recently modified first
    delete_page: Delete a page file
    page_count: Number of stored pages
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from SB_Libs.constants import (
    PAGES_DIR_NAME,
    PAGE_EXTENSION,
    PAGE_FILE_PREFIX,
    SCHEMA_VERSION,
    DEFAULT_PAGE_BACKGROUND,
    DEFAULT_PAGE_TITLE,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TEXT_SIZE,
    DEFAULT_FONT_FAMILY,
    DEFAULT_STROKE_COLOR,
    DEFAULT_STROKE_WIDTH,
    DEFAULT_ITEM_BACKGROUND,
    DEFAULT_BORDER_COLOR,
    DEFAULT_BORDER_WIDTH,
    FIELD_SCHEMA_VERSION,
    FIELD_PAGE_ID,
    FIELD_TITLE,
    FIELD_CREATED_DATE,
    FIELD_LAST_MODIFIED,
    FIELD_BACKGROUND_IMAGE,
    FIELD_BACKGROUND_COLOR,
    FIELD_ITEMS,
    FIELD_ITEM_ID,
    FIELD_ITEM_TYPE,
    FIELD_X,
    FIELD_Y,
    FIELD_WIDTH,
    FIELD_HEIGHT,
    FIELD_ROTATION,
    FIELD_SCALE,
    FIELD_IMAGE_PATH,
    FIELD_TEXT,
    FIELD_TEXT_COLOR,
    FIELD_TEXT_SIZE,
    FIELD_FONT_FAMILY,
    FIELD_IS_BOLD,
    FIELD_IS_ITALIC,
    FIELD_DOODLE_PATH,
    FIELD_STROKE_COLOR,
    FIELD_STROKE_WIDTH,
    FIELD_HAS_BORDER,
    FIELD_BORDER_COLOR,
    FIELD_BORDER_WIDTH,
    FIELD_CORNER_RADIUS,
    ITEM_TYPE_IMAGE,
    ITEM_TYPE_TEXT,
    ITEM_TYPE_DOODLE,
)
from SB_Libs.CanvasLib.canvas_items import (
    CanvasItem,
    ImagePayload,
    TextPayload,
    DoodlePayload,
)
from SB_Libs.CanvasLib.page_models import ScrapbookPage, current_millis

logger = logging.getLogger(__name__)


def _optional(data: Dict[str, Any], key: str, default: Any, convert: Callable[[Any], Any]) -> Any:
    """Read an optional field, falling back to the default when absent or malformed."""
    value = data.get(key)
    if value is None:
        return default
    try:
        return convert(value)
    except (TypeError, ValueError):
        return default


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else str(value)


def _color(value: Any) -> int:
    # Stored as given; signed ARGB ints stay signed and are masked only when drawn
    return int(value)


def item_to_record(item: CanvasItem) -> Dict[str, Any]:
    """Serialize a canvas item to a JSON-ready dictionary."""
    record: Dict[str, Any] = {
        FIELD_ITEM_ID: item.item_id,
        FIELD_X: item.x,
        FIELD_Y: item.y,
        FIELD_WIDTH: item.width,
        FIELD_HEIGHT: item.height,
        FIELD_ROTATION: item.rotation,
        FIELD_SCALE: item.scale,
    }

    payload = item.payload
    if isinstance(payload, ImagePayload):
        record[FIELD_ITEM_TYPE] = ITEM_TYPE_IMAGE
        record[FIELD_IMAGE_PATH] = payload.image_path
    elif isinstance(payload, TextPayload):
        record[FIELD_ITEM_TYPE] = ITEM_TYPE_TEXT
        record[FIELD_TEXT] = payload.text
        record[FIELD_TEXT_COLOR] = payload.text_color
        record[FIELD_TEXT_SIZE] = payload.text_size
        record[FIELD_FONT_FAMILY] = payload.font_family
        record[FIELD_IS_BOLD] = payload.is_bold
        record[FIELD_IS_ITALIC] = payload.is_italic
    elif isinstance(payload, DoodlePayload):
        record[FIELD_ITEM_TYPE] = ITEM_TYPE_DOODLE
        record[FIELD_DOODLE_PATH] = payload.doodle_path
        record[FIELD_STROKE_COLOR] = payload.stroke_color
        record[FIELD_STROKE_WIDTH] = payload.stroke_width
    else:
        raise TypeError(f"Unsupported item payload: {type(payload)}")

    record[FIELD_BACKGROUND_COLOR] = item.background_color
    record[FIELD_HAS_BORDER] = item.has_border
    record[FIELD_BORDER_COLOR] = item.border_color
    record[FIELD_BORDER_WIDTH] = item.border_width
    record[FIELD_CORNER_RADIUS] = item.corner_radius
    return record


def item_from_record(record: Dict[str, Any]) -> CanvasItem:
    """
    Rebuild a canvas item from its record.

    Geometry (x, y, width, height) and the type tag are required; every other
    field falls back to its default when absent.

    Raises:
        ValueError: If the type tag is unknown or required geometry is missing
    """
    item_type = str(record.get(FIELD_ITEM_TYPE) or "").strip().lower()

    if item_type == ITEM_TYPE_IMAGE:
        payload = ImagePayload(image_path=_optional_str(record, FIELD_IMAGE_PATH))
    elif item_type == ITEM_TYPE_TEXT:
        payload = TextPayload(
            text=_optional_str(record, FIELD_TEXT),
            text_color=_optional(record, FIELD_TEXT_COLOR, DEFAULT_TEXT_COLOR, _color),
            text_size=_optional(record, FIELD_TEXT_SIZE, DEFAULT_TEXT_SIZE, float),
            font_family=_optional(record, FIELD_FONT_FAMILY, DEFAULT_FONT_FAMILY, str),
            is_bold=_optional(record, FIELD_IS_BOLD, False, bool),
            is_italic=_optional(record, FIELD_IS_ITALIC, False, bool),
        )
    elif item_type == ITEM_TYPE_DOODLE:
        payload = DoodlePayload(
            doodle_path=_optional_str(record, FIELD_DOODLE_PATH),
            stroke_color=_optional(record, FIELD_STROKE_COLOR, DEFAULT_STROKE_COLOR, _color),
            stroke_width=_optional(record, FIELD_STROKE_WIDTH, DEFAULT_STROKE_WIDTH, float),
        )
    else:
        raise ValueError(f"Unknown item type: {record.get(FIELD_ITEM_TYPE)!r}")

    try:
        geometry = {key: float(record[key]) for key in (FIELD_X, FIELD_Y, FIELD_WIDTH, FIELD_HEIGHT)}
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Item record has invalid geometry: {e}")

    scale = _optional(record, FIELD_SCALE, 1.0, float)
    if scale <= 0:
        scale = 1.0

    item = CanvasItem(
        payload=payload,
        x=geometry[FIELD_X],
        y=geometry[FIELD_Y],
        width=geometry[FIELD_WIDTH],
        height=geometry[FIELD_HEIGHT],
        rotation=_optional(record, FIELD_ROTATION, 0.0, float),
        scale=scale,
        background_color=_optional(record, FIELD_BACKGROUND_COLOR, DEFAULT_ITEM_BACKGROUND, _color),
        has_border=_optional(record, FIELD_HAS_BORDER, False, bool),
        border_color=_optional(record, FIELD_BORDER_COLOR, DEFAULT_BORDER_COLOR, _color),
        border_width=_optional(record, FIELD_BORDER_WIDTH, DEFAULT_BORDER_WIDTH, float),
        corner_radius=_optional(record, FIELD_CORNER_RADIUS, 0.0, float),
    )

    item_id = record.get(FIELD_ITEM_ID)
    if item_id:
        item.item_id = str(item_id)
    return item


def page_to_record(page: ScrapbookPage) -> Dict[str, Any]:
    """Serialize a page (and its items, in z-order) to a JSON-ready dictionary."""
    return {
        FIELD_SCHEMA_VERSION: SCHEMA_VERSION,
        FIELD_PAGE_ID: page.page_id,
        FIELD_TITLE: page.title,
        FIELD_CREATED_DATE: page.created_date,
        FIELD_LAST_MODIFIED: page.last_modified,
        FIELD_BACKGROUND_IMAGE: page.background_image_path,
        FIELD_BACKGROUND_COLOR: page.background_color,
        FIELD_ITEMS: [item_to_record(item) for item in page.items],
    }


def page_from_record(record: Dict[str, Any]) -> ScrapbookPage:
    """
    Rebuild a page from its record.

    Malformed item records are skipped with a warning; the remaining items
    keep their order.
    """
    now = current_millis()
    items: List[CanvasItem] = []
    raw_items = record.get(FIELD_ITEMS)
    if isinstance(raw_items, list):
        for index, raw_item in enumerate(raw_items):
            if not isinstance(raw_item, dict):
                logger.warning(f"Skipping item {index}: record is not an object")
                continue
            try:
                items.append(item_from_record(raw_item))
            except ValueError as e:
                logger.warning(f"Skipping item {index}: {e}")

    return ScrapbookPage(
        title=_optional(record, FIELD_TITLE, DEFAULT_PAGE_TITLE, str),
        page_id=_optional(record, FIELD_PAGE_ID, 0, int),
        created_date=_optional(record, FIELD_CREATED_DATE, now, int),
        last_modified=_optional(record, FIELD_LAST_MODIFIED, now, int),
        items=items,
        background_image_path=_optional_str(record, FIELD_BACKGROUND_IMAGE),
        background_color=_optional(record, FIELD_BACKGROUND_COLOR, DEFAULT_PAGE_BACKGROUND, _color),
    )


def get_pages_dir(base_dir: Path) -> Path:
    pages_dir = Path(base_dir) / PAGES_DIR_NAME
    pages_dir.mkdir(parents=True, exist_ok=True)
    return pages_dir


def page_file_path(base_dir: Path, page_id: int) -> Path:
    return get_pages_dir(base_dir) / f"{PAGE_FILE_PREFIX}{int(page_id)}{PAGE_EXTENSION}"


def list_page_files(base_dir: Path) -> List[Path]:
    pages_dir = get_pages_dir(base_dir)
    return sorted(pages_dir.glob(f"{PAGE_FILE_PREFIX}*{PAGE_EXTENSION}"))


def _page_id_from_path(path: Path) -> Optional[int]:
    try:
        return int(path.stem[len(PAGE_FILE_PREFIX):])
    except ValueError:
        return None


def _next_page_id(base_dir: Path) -> int:
    ids = [page_id for page_id in map(_page_id_from_path, list_page_files(base_dir)) if page_id is not None]
    return max(ids, default=0) + 1


def save_page(base_dir: Path, page: ScrapbookPage) -> int:
    """
    Save a page, replacing any stored version with the same id.

    New pages (``page_id <= 0``) are assigned the next free id. The page's
    ``last_modified`` timestamp is refreshed before writing.

    Args:
        base_dir: Base directory containing the Pages folder
        page: Page to save (its id and timestamp are updated in place)

    Returns:
        The page id

    Raises:
        OSError: If the page file cannot be written
    """
    if page.page_id <= 0:
        page.page_id = _next_page_id(base_dir)

    page.update_modified()
    page_path = page_file_path(base_dir, page.page_id)
    page_path.write_text(json.dumps(page_to_record(page), indent=2), encoding="utf-8")

    logger.info(f"Page saved successfully with ID: {page.page_id}")
    return page.page_id


def _read_page_file(page_path: Path) -> Optional[ScrapbookPage]:
    try:
        payload = json.loads(page_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read page file {page_path}: {e}")
        return None

    if not isinstance(payload, dict):
        logger.warning(f"Page file {page_path} does not hold a page record")
        return None

    page = page_from_record(payload)
    file_id = _page_id_from_path(page_path)
    if file_id is not None:
        page.page_id = file_id
    return page


def load_page(base_dir: Path, page_id: int) -> Optional[ScrapbookPage]:
    """
    Load a page by id.

    Returns:
        The page, or None if it does not exist or cannot be read
    """
    return _read_page_file(page_file_path(base_dir, page_id))


def load_all_pages(base_dir: Path) -> List[ScrapbookPage]:
    """Load every readable page, most recently modified first."""
    pages = [page for page in map(_read_page_file, list_page_files(base_dir)) if page is not None]
    pages.sort(key=lambda page: page.last_modified, reverse=True)
    logger.debug(f"Loaded {len(pages)} pages")
    return pages


def delete_page(base_dir: Path, page_id: int) -> bool:
    """
    Delete a stored page.

    Returns:
        True if a page file was deleted, False if none existed
    """
    page_path = page_file_path(base_dir, page_id)
    if not page_path.exists():
        return False
    page_path.unlink()
    logger.info(f"Page {page_id} deleted")
    return True


def page_count(base_dir: Path) -> int:
    return len(list_page_files(base_dir))


class PageStore:
    """Page storage bound to one base directory."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    @property
    def pages_dir(self) -> Path:
        return get_pages_dir(self.base_dir)

    def save(self, page: ScrapbookPage) -> int:
        return save_page(self.base_dir, page)

    def load(self, page_id: int) -> Optional[ScrapbookPage]:
        return load_page(self.base_dir, page_id)

    def load_all(self) -> List[ScrapbookPage]:
        return load_all_pages(self.base_dir)

    def delete(self, page_id: int) -> bool:
        return delete_page(self.base_dir, page_id)

    def count(self) -> int:
        return page_count(self.base_dir)
