"""
Colour Filter Engine for SnapBook.

Provides the vintage colour presets applied to captured photos. Every filter
is a stateless per-pixel transform: each output channel depends only on the
same pixel's R, G and B values, is floor-truncated and clamped to [0, 255].
Alpha passes through unchanged.

Example:
    >>> buffer = PixelBuffer.blank(2, 2, (200, 120, 40, 255))
    >>> sepia = apply_filter(buffer, FilterKind.SEPIA)
    >>> kind = resolve_filter("BW")
    >>> kind is FilterKind.BLACK_AND_WHITE
    True

Classes:
    FilterKind: Closed set of filter presets
    FilterEngine: Registry of channel transforms keyed by FilterKind

Functions:
    resolve_filter: Case-insensitive name lookup (unknown names -> NONE)
    apply_filter: Apply a filter with the default engine
    get_default_engine: Get the global default engine (singleton)
"""

from enum import Enum
import logging
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from SB_Libs.ImageEditingLib.image_models import PixelBuffer

logger = logging.getLogger(__name__)

Channels = Tuple[np.ndarray, np.ndarray, np.ndarray]
ChannelTransform = Callable[[np.ndarray, np.ndarray, np.ndarray], Channels]


class FilterKind(Enum):
    SEPIA = "Classic Sepia"
    POLAROID = "1970s Polaroid"
    KODACHROME = "1950s Kodachrome"
    VINTAGE = "Vintage Fade"
    BLACK_AND_WHITE = "Black & White"
    CYANOTYPE = "Cyanotype"
    NONE = "None"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, filter_name: Optional[str]) -> "FilterKind":
        """Resolve a filter name; anything unrecognised is NONE, never an error."""
        if filter_name is None:
            return cls.NONE
        return _FILTER_NAMES.get(str(filter_name).strip().lower(), cls.NONE)


_FILTER_NAMES: Dict[str, FilterKind] = {
    "sepia": FilterKind.SEPIA,
    "polaroid": FilterKind.POLAROID,
    "kodachrome": FilterKind.KODACHROME,
    "vintage": FilterKind.VINTAGE,
    "bw": FilterKind.BLACK_AND_WHITE,
    "black_and_white": FilterKind.BLACK_AND_WHITE,
    "cyanotype": FilterKind.CYANOTYPE,
}


def resolve_filter(filter_name: Optional[str]) -> FilterKind:
    return FilterKind.from_name(filter_name)


# ============================================================================
# Channel transforms (inputs are int64 arrays in [0, 255])
# ============================================================================

def sepia_transform(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> Channels:
    return (
        r * 0.393 + g * 0.769 + b * 0.189,
        r * 0.349 + g * 0.686 + b * 0.168,
        r * 0.272 + g * 0.534 + b * 0.131,
    )


def polaroid_transform(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> Channels:
    return r * 0.9 + 20, g * 0.85 + 25, b * 0.95 + 15


def kodachrome_transform(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> Channels:
    return r * 1.2, g * 1.1, b * 0.9


def vintage_transform(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> Channels:
    return r * 1.15 + 15, g * 0.95 + 10, b * 0.75


def black_and_white_transform(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> Channels:
    gray = 0.299 * r + 0.587 * g + 0.114 * b
    return gray, gray, gray


def cyanotype_transform(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> Channels:
    avg = (r + g + b) // 3
    return avg * 0.3, avg * 0.6, avg * 1.1


def _to_channel(values: np.ndarray) -> np.ndarray:
    return np.clip(np.floor(values), 0, 255).astype(np.uint8)


class FilterEngine:
    """
    Registry of per-pixel colour transforms.

    ``FilterKind.NONE`` is always the identity and cannot be registered.

    Example:
        >>> engine = FilterEngine()
        >>> engine.register(FilterKind.SEPIA, sepia_transform)
        >>> result = engine.apply(buffer, FilterKind.SEPIA)
    """

    def __init__(self):
        """Initialize an empty engine."""
        self._transforms: Dict[FilterKind, ChannelTransform] = {}

    def register(self, kind: FilterKind, transform: ChannelTransform) -> None:
        """
        Register the channel transform for a filter kind.

        Raises:
            ValueError: If kind is NONE or transform is not callable
            RuntimeError: If kind is already registered
        """
        if kind is FilterKind.NONE:
            raise ValueError("FilterKind.NONE is the identity and cannot be registered")

        if not callable(transform):
            raise ValueError(f"transform must be callable, got {type(transform)}")

        if kind in self._transforms:
            raise RuntimeError(
                f"Filter '{kind.display_name}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._transforms[kind] = transform
        logger.debug(f"Registered transform for filter: {kind.display_name}")

    def unregister(self, kind: FilterKind) -> bool:
        if kind in self._transforms:
            del self._transforms[kind]
            logger.debug(f"Unregistered transform for filter: {kind.display_name}")
            return True
        return False

    def has_filter(self, kind: FilterKind) -> bool:
        return kind is FilterKind.NONE or kind in self._transforms

    def list_filters(self) -> List[FilterKind]:
        """Registered kinds in declaration order, NONE last."""
        return [kind for kind in FilterKind if kind in self._transforms] + [FilterKind.NONE]

    def apply(self, buffer: Optional[PixelBuffer], kind: FilterKind) -> Optional[PixelBuffer]:
        """
        Apply a filter to a buffer.

        Only the colour channels are transformed. Alpha is copied from the
        source, so opaque captures stay opaque and transparent pixels stay
        transparent.

        Args:
            buffer: Source buffer (never modified)
            kind: Filter to apply

        Returns:
            A new filtered buffer, an equal copy for NONE, or None when the
            input is None or has zero size

        Raises:
            KeyError: If kind is not NONE and has no registered transform
        """
        if buffer is None or buffer.is_empty:
            return None

        if kind is FilterKind.NONE:
            return buffer.copy()

        if kind not in self._transforms:
            raise KeyError(f"No transform registered for filter '{kind.display_name}'")

        source = buffer.pixels.astype(np.int64)
        r, g, b = source[..., 0], source[..., 1], source[..., 2]
        new_r, new_g, new_b = self._transforms[kind](r, g, b)

        pixels = np.empty_like(buffer.pixels)
        pixels[..., 0] = _to_channel(new_r)
        pixels[..., 1] = _to_channel(new_g)
        pixels[..., 2] = _to_channel(new_b)
        pixels[..., 3] = buffer.pixels[..., 3]

        logger.debug(f"Applied {kind.display_name} filter to {buffer.width}x{buffer.height} buffer")
        return PixelBuffer(buffer.width, buffer.height, pixels)


# Global singleton engine
_default_engine: Optional[FilterEngine] = None


def register_default_filters(engine: FilterEngine) -> None:
    """Register every built-in preset with an engine."""
    engine.register(FilterKind.SEPIA, sepia_transform)
    engine.register(FilterKind.POLAROID, polaroid_transform)
    engine.register(FilterKind.KODACHROME, kodachrome_transform)
    engine.register(FilterKind.VINTAGE, vintage_transform)
    engine.register(FilterKind.BLACK_AND_WHITE, black_and_white_transform)
    engine.register(FilterKind.CYANOTYPE, cyanotype_transform)
    logger.info("Registered default colour filters")


def get_default_engine() -> FilterEngine:
    """
    Get the global default engine (singleton).

    Creates the engine on first call and registers the built-in presets.
    """
    global _default_engine

    if _default_engine is None:
        _default_engine = FilterEngine()
        register_default_filters(_default_engine)

    return _default_engine


def apply_filter(buffer: Optional[PixelBuffer], kind: FilterKind) -> Optional[PixelBuffer]:
    """Apply a filter preset with the default engine (see FilterEngine.apply)."""
    return get_default_engine().apply(buffer, kind)
