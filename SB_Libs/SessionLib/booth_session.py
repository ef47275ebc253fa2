"""
Photo booth capture session.

A session collects a fixed number of filtered shots and turns them into a
photo strip. Mirrored (front camera) captures are flipped before filtering,
so the strip reads the right way round.

Example:
    >>> session = PhotoBoothSession(shot_count=2)
    >>> session.add_capture(frame_a, mirrored=True)
    False
    >>> session.progress_text()
    'Photo 1/2'
    >>> session.add_capture(frame_b)
    True
    >>> strip = session.build_strip()
"""

from datetime import date as date_type
import logging
from pathlib import Path
from typing import List, Optional, Union

from SB_Libs.constants import DEFAULT_SHOT_COUNT
from SB_Libs.ImageEditingLib.color_space_decoder import (
    SensorFrame,
    decode_frame,
    flip_horizontal,
)
from SB_Libs.ImageEditingLib.errors import BoundsError, EmptyInputError
from SB_Libs.ImageEditingLib.filter_engine import (
    FilterEngine,
    FilterKind,
    get_default_engine,
)
from SB_Libs.ImageEditingLib.image_io import save_photo_strip, save_photos
from SB_Libs.ImageEditingLib.image_models import PixelBuffer
from SB_Libs.ImageEditingLib.strip_compositor import compose_strip

logger = logging.getLogger(__name__)


class PhotoBoothSession:
    """Capture state for one photo strip."""

    def __init__(
        self,
        shot_count: int = DEFAULT_SHOT_COUNT,
        filter_kind: FilterKind = FilterKind.SEPIA,
        engine: Optional[FilterEngine] = None,
    ):
        if shot_count < 1:
            raise BoundsError(f"shot_count must be at least 1, got {shot_count}")

        self.shot_count = int(shot_count)
        self.filter_kind = filter_kind
        self._engine = engine or get_default_engine()
        self._shots: List[PixelBuffer] = []

    @property
    def shots(self) -> List[PixelBuffer]:
        return list(self._shots)

    @property
    def captured_count(self) -> int:
        return len(self._shots)

    @property
    def is_complete(self) -> bool:
        return len(self._shots) >= self.shot_count

    def set_filter(self, filter_kind: Union[FilterKind, str, None]) -> FilterKind:
        """Select the filter for later captures (names resolve case-insensitively)."""
        if not isinstance(filter_kind, FilterKind):
            filter_kind = FilterKind.from_name(filter_kind)
        self.filter_kind = filter_kind
        logger.debug(f"Filter changed to: {filter_kind.display_name}")
        return filter_kind

    def add_capture(self, buffer: PixelBuffer, mirrored: bool = False) -> bool:
        """
        Filter a captured image and add it to the strip.

        Args:
            buffer: Captured image (not modified)
            mirrored: True for front camera captures, which are flipped first

        Returns:
            True once the session holds all of its shots

        Raises:
            EmptyInputError: If the capture has zero size
            BoundsError: If the session is already complete
        """
        if self.is_complete:
            raise BoundsError(f"Session already holds {self.shot_count} photos")
        if buffer is None or buffer.is_empty:
            raise EmptyInputError("Captured image is empty")

        if mirrored:
            buffer = flip_horizontal(buffer)

        self._shots.append(self._engine.apply(buffer, self.filter_kind))
        logger.debug(
            f"Photo {len(self._shots)}/{self.shot_count} captured with "
            f"{self.filter_kind.display_name} filter"
        )
        return self.is_complete

    def capture_frame(self, frame: SensorFrame, mirrored: bool = False) -> bool:
        """Decode a sensor frame and add it as a capture (see add_capture)."""
        return self.add_capture(decode_frame(frame), mirrored=mirrored)

    def progress_text(self) -> str:
        return f"Photo {len(self._shots)}/{self.shot_count}"

    def build_strip(self, date: Optional[date_type] = None) -> PixelBuffer:
        """
        Compose the captured shots into a strip.

        Raises:
            EmptyInputError: If nothing has been captured yet
        """
        return compose_strip(self._shots, date)

    def save_strip(self, output_dir: Path, date: Optional[date_type] = None) -> Path:
        return save_photo_strip(self.build_strip(date), output_dir)

    def save_shots(self, output_dir: Path) -> List[Path]:
        if not self._shots:
            raise EmptyInputError("No photos to save")
        return save_photos(self._shots, output_dir)

    def reset(self, shot_count: Optional[int] = None) -> None:
        """Discard captured shots, optionally changing the target count."""
        if shot_count is not None:
            if shot_count < 1:
                raise BoundsError(f"shot_count must be at least 1, got {shot_count}")
            self.shot_count = int(shot_count)
        self._shots.clear()
