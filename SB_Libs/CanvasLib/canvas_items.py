"""
Canvas item models for SnapBook scrapbook pages.

A canvas item is a positioned, transformable visual unit. Its kind-specific
data lives in exactly one payload variant (image, text or doodle); the item
kind is derived from the payload type.

Transform chain (forward, local -> canvas), applied about the item centre:

    translate(x + w/2, y + h/2) . rotate(rotation) . scale(scale) . translate(-w/2, -h/2)

Rotation is in degrees, clockwise on the y-down canvas.

Classes:
    ItemKind: IMAGE, TEXT or DOODLE
    ImagePayload, TextPayload, DoodlePayload: Kind-specific data
    CanvasItem: Geometry, styling and payload of one item

Functions:
    create_item: New item of a kind with its defaults
    kind_of: Kind of a payload (exhaustive over the variants)
"""

from dataclasses import dataclass, field, replace
from enum import Enum
import math
import uuid
from typing import Optional, Tuple, Union

from SB_Libs.constants import (
    MIN_ITEM_SIZE,
    COPY_OFFSET,
    DEFAULT_IMAGE_SIZE,
    DEFAULT_IMAGE_CORNER_RADIUS,
    DEFAULT_TEXT_SIZE_BOX,
    DEFAULT_TEXT,
    DEFAULT_TEXT_SIZE,
    DEFAULT_TEXT_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_DOODLE_SIZE,
    DEFAULT_STROKE_COLOR,
    DEFAULT_STROKE_WIDTH,
    DEFAULT_ITEM_BACKGROUND,
    DEFAULT_BORDER_COLOR,
    DEFAULT_BORDER_WIDTH,
)
from SB_Libs.ImageEditingLib.errors import BoundsError

# Tolerance for points lying exactly on a transformed edge
CONTAINMENT_EPSILON = 1e-9


class ItemKind(Enum):
    IMAGE = "image"
    TEXT = "text"
    DOODLE = "doodle"


@dataclass
class ImagePayload:
    image_path: Optional[str] = None


@dataclass
class TextPayload:
    text: Optional[str] = DEFAULT_TEXT
    text_color: int = DEFAULT_TEXT_COLOR
    text_size: float = DEFAULT_TEXT_SIZE
    font_family: str = DEFAULT_FONT_FAMILY
    is_bold: bool = False
    is_italic: bool = False


@dataclass
class DoodlePayload:
    doodle_path: Optional[str] = None
    stroke_color: int = DEFAULT_STROKE_COLOR
    stroke_width: float = DEFAULT_STROKE_WIDTH


ItemPayload = Union[ImagePayload, TextPayload, DoodlePayload]


def kind_of(payload: ItemPayload) -> ItemKind:
    if isinstance(payload, ImagePayload):
        return ItemKind.IMAGE
    if isinstance(payload, TextPayload):
        return ItemKind.TEXT
    if isinstance(payload, DoodlePayload):
        return ItemKind.DOODLE
    raise TypeError(f"Unsupported item payload: {type(payload)}")


@dataclass
class CanvasItem:
    """One visual unit on a scrapbook page.

    Attributes:
        payload: Kind-specific data (ImagePayload, TextPayload or DoodlePayload)
        x, y: Top-left corner in untransformed canvas space
        width, height: Untransformed size (at least 20 after resize)
        rotation: Degrees, about the item centre
        scale: Uniform scale factor (> 0), about the item centre
        background_color: ARGB fill; 0 means no fill
        has_border, border_color, border_width: Optional outline
        corner_radius: Radius used for the fill and the outline
        item_id: Stable identifier
    """
    payload: ItemPayload
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0
    scale: float = 1.0
    background_color: int = DEFAULT_ITEM_BACKGROUND
    has_border: bool = False
    border_color: int = DEFAULT_BORDER_COLOR
    border_width: float = DEFAULT_BORDER_WIDTH
    corner_radius: float = 0.0
    item_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        kind_of(self.payload)
        if self.scale <= 0:
            raise BoundsError(f"scale must be positive, got {self.scale}")

    @property
    def kind(self) -> ItemKind:
        return kind_of(self.payload)

    @property
    def is_image(self) -> bool:
        return self.kind is ItemKind.IMAGE

    @property
    def is_text(self) -> bool:
        return self.kind is ItemKind.TEXT

    @property
    def is_doodle(self) -> bool:
        return self.kind is ItemKind.DOODLE

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2.0, self.y + self.height / 2.0

    @property
    def is_transformed(self) -> bool:
        return self.rotation != 0 or self.scale != 1

    def set_position(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def move(self, delta_x: float, delta_y: float) -> None:
        """Shift the local position; rotation and scale are untouched."""
        self.x += delta_x
        self.y += delta_y

    def resize(self, new_width: float, new_height: float) -> None:
        """Resize, clamping each axis to the minimum item size."""
        self.width = max(MIN_ITEM_SIZE, float(new_width))
        self.height = max(MIN_ITEM_SIZE, float(new_height))

    def rotate(self, degrees: float) -> None:
        self.rotation += degrees

    def set_scale(self, scale: float) -> None:
        if scale <= 0:
            raise BoundsError(f"scale must be positive, got {scale}")
        self.scale = float(scale)

    def to_canvas(self, local_x: float, local_y: float) -> Tuple[float, float]:
        """Map a point from item-local space to canvas space."""
        half_w, half_h = self.width / 2.0, self.height / 2.0
        dx = (local_x - half_w) * self.scale
        dy = (local_y - half_h) * self.scale
        theta = math.radians(self.rotation)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        cx, cy = self.center
        return cx + dx * cos_t - dy * sin_t, cy + dx * sin_t + dy * cos_t

    def to_local(self, canvas_x: float, canvas_y: float) -> Tuple[float, float]:
        """Map a canvas point into item-local, unrotated and unscaled space."""
        cx, cy = self.center
        dx, dy = canvas_x - cx, canvas_y - cy
        theta = math.radians(self.rotation)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        local_x = (dx * cos_t + dy * sin_t) / self.scale
        local_y = (-dx * sin_t + dy * cos_t) / self.scale
        return local_x + self.width / 2.0, local_y + self.height / 2.0

    def contains(self, canvas_x: float, canvas_y: float) -> bool:
        if not self.is_transformed:
            return (
                self.x <= canvas_x <= self.x + self.width
                and self.y <= canvas_y <= self.y + self.height
            )

        local_x, local_y = self.to_local(canvas_x, canvas_y)
        return (
            -CONTAINMENT_EPSILON <= local_x <= self.width + CONTAINMENT_EPSILON
            and -CONTAINMENT_EPSILON <= local_y <= self.height + CONTAINMENT_EPSILON
        )

    def copy(self, offset: float = COPY_OFFSET) -> "CanvasItem":
        """Duplicate with a positional offset, a new id and its own payload."""
        return replace(
            self,
            x=self.x + offset,
            y=self.y + offset,
            payload=replace(self.payload),
            item_id=str(uuid.uuid4()),
        )


def create_item(kind: ItemKind, x: float = 0.0, y: float = 0.0) -> CanvasItem:
    """Create an item of a kind with its default size and styling."""
    if kind is ItemKind.IMAGE:
        width, height = DEFAULT_IMAGE_SIZE
        return CanvasItem(
            payload=ImagePayload(),
            x=x,
            y=y,
            width=width,
            height=height,
            corner_radius=DEFAULT_IMAGE_CORNER_RADIUS,
        )
    if kind is ItemKind.TEXT:
        width, height = DEFAULT_TEXT_SIZE_BOX
        return CanvasItem(payload=TextPayload(), x=x, y=y, width=width, height=height)
    if kind is ItemKind.DOODLE:
        width, height = DEFAULT_DOODLE_SIZE
        return CanvasItem(payload=DoodlePayload(), x=x, y=y, width=width, height=height)
    raise ValueError(f"Unsupported item kind: {kind}")
