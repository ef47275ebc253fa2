"""
Constants and configuration values for SnapBook.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the imaging core.
"""

# Page store constants
PAGES_DIR_NAME = "Pages"
PAGE_EXTENSION = ".sbpage"
PAGE_FILE_PREFIX = "page_"
SCHEMA_VERSION = 1

# Sensor decoding
LUMA_OFFSET = 16
CHROMA_OFFSET = 128
YUV_LUMA_COEFF = 1192
YUV_V_TO_R = 1634
YUV_V_TO_G = 833
YUV_U_TO_G = 400
YUV_U_TO_B = 2066
YUV_FIXED_POINT_MAX = 262143
YUV_FIXED_POINT_SHIFT = 10
OPAQUE_ALPHA = 255

# Canvas item constraints
MIN_ITEM_SIZE = 20.0
COPY_OFFSET = 20.0

# Canvas item defaults
DEFAULT_IMAGE_SIZE = (200.0, 200.0)
DEFAULT_IMAGE_CORNER_RADIUS = 8.0
DEFAULT_TEXT_SIZE_BOX = (150.0, 50.0)
DEFAULT_TEXT = "Add your text here..."
DEFAULT_TEXT_SIZE = 16.0
DEFAULT_TEXT_COLOR = 0xFF6B4423
DEFAULT_FONT_FAMILY = "serif"
DEFAULT_DOODLE_SIZE = (100.0, 100.0)
DEFAULT_STROKE_COLOR = 0xFF8B6914
DEFAULT_STROKE_WIDTH = 3.0
DEFAULT_ITEM_BACKGROUND = 0x00000000
DEFAULT_BORDER_COLOR = 0xFF8B6914
DEFAULT_BORDER_WIDTH = 2.0

# Page defaults
DEFAULT_PAGE_BACKGROUND = 0xFFFAF8F5
DEFAULT_PAGE_TITLE = "Untitled Page"
PREVIEW_TEXT_LENGTH = 50
EMPTY_PREVIEW_TEXT = "No text added yet"

# Page rendering
PLACEHOLDER_COLOR = "#e0e0e0"
PLACEHOLDER_RADIUS = 8
TEXT_LEFT_PADDING = 8
TEXT_LINE_SPACING = 1.2
DOODLE_PLACEHOLDER_INSET = 10
SELECTION_COLOR = "#4caf50"
SELECTION_WIDTH = 4
SELECTION_MARGIN = 5
SELECTION_DASH = 10

# Photo strip layout
STRIP_WIDTH = 400
STRIP_PHOTO_WIDTH = 350
STRIP_PHOTO_HEIGHT = 280
STRIP_BORDER_WIDTH = 50
STRIP_SPACING = 15
STRIP_HEADER_HEIGHT = 80
STRIP_FOOTER_HEIGHT = 60
STRIP_OUTER_INSET = 10
STRIP_INNER_INSET = 15
STRIP_BACKGROUND_COLOR = "#faf8f5"
STRIP_OUTER_BORDER_COLOR = "#8b6914"
STRIP_OUTER_BORDER_WIDTH = 8
STRIP_INNER_BORDER_COLOR = "#c4a747"
STRIP_INNER_BORDER_WIDTH = 3
STRIP_FRAME_COLOR = "#3e2723"
STRIP_FRAME_WIDTH = 2
STRIP_HEADER_TEXT = "VINTAGE MEMORIES"
STRIP_HEADER_COLOR = "#6b4423"
STRIP_HEADER_FONT_SIZE = 32
STRIP_HEADER_BASELINE = 50
STRIP_FOOTER_COLOR = "#8b6914"
STRIP_FOOTER_FONT_SIZE = 14
STRIP_FOOTER_BASELINE_FROM_BOTTOM = 35
STRIP_DATE_FORMAT = "%B %d, %Y"

# Booth session
DEFAULT_SHOT_COUNT = 4

# File naming / encoding
DEFAULT_JPEG_QUALITY = 95
DEFAULT_OUTPUT_FORMAT = "JPEG"
PHOTO_STRIP_FILE_PREFIX = "vintage_photo_strip_"
PHOTO_FILE_PREFIX = "vintage_photo_"
SUPPORTED_OUTPUT_FORMATS = {".jpg": "JPEG", ".jpeg": "JPEG", ".png": "PNG", ".webp": "WEBP"}

# Font files tried for each family, in order (Pillow default font is the fallback)
FONT_FILES = {
    "serif": "DejaVuSerif",
    "sans-serif": "DejaVuSans",
    "sans": "DejaVuSans",
    "monospace": "DejaVuSansMono",
}
FONT_STYLE_SUFFIXES = {
    (False, False): "",
    (True, False): "-Bold",
    (False, True): "-Italic",
    (True, True): "-BoldItalic",
}

# Page record field names
FIELD_SCHEMA_VERSION = "schema_version"
FIELD_PAGE_ID = "id"
FIELD_TITLE = "title"
FIELD_CREATED_DATE = "createdDate"
FIELD_LAST_MODIFIED = "lastModified"
FIELD_BACKGROUND_IMAGE = "backgroundImagePath"
FIELD_BACKGROUND_COLOR = "backgroundColor"
FIELD_ITEMS = "items"

# Item record field names
FIELD_ITEM_ID = "id"
FIELD_ITEM_TYPE = "type"
FIELD_X = "x"
FIELD_Y = "y"
FIELD_WIDTH = "width"
FIELD_HEIGHT = "height"
FIELD_ROTATION = "rotation"
FIELD_SCALE = "scale"
FIELD_IMAGE_PATH = "imagePath"
FIELD_TEXT = "text"
FIELD_TEXT_COLOR = "textColor"
FIELD_TEXT_SIZE = "textSize"
FIELD_FONT_FAMILY = "fontFamily"
FIELD_IS_BOLD = "isBold"
FIELD_IS_ITALIC = "isItalic"
FIELD_DOODLE_PATH = "doodlePath"
FIELD_STROKE_COLOR = "strokeColor"
FIELD_STROKE_WIDTH = "strokeWidth"
FIELD_HAS_BORDER = "hasBorder"
FIELD_BORDER_COLOR = "borderColor"
FIELD_BORDER_WIDTH = "borderWidth"
FIELD_CORNER_RADIUS = "cornerRadius"

# Item type tags used in records
ITEM_TYPE_IMAGE = "image"
ITEM_TYPE_TEXT = "text"
ITEM_TYPE_DOODLE = "doodle"

# Page editor
NEW_PAGE_TITLE = "New Page"
BOOTH_PAGE_TITLE = "Vintage Memory"
IMPORTED_PAGE_TITLE = "New Memory"
ADDED_IMAGE_POSITION = (50.0, 100.0)
ADDED_TEXT_POSITION = (50.0, 200.0)
ADDED_DOODLE_POSITION = (100.0, 300.0)
COVER_IMAGE_SIZE = (300.0, 300.0)
