"""
Background image worker.

Runs the imaging operations (decode, filter, strip composition, page
rendering) on a thread pool so callers such as a camera preview loop are not
blocked. Inputs are copied when a task is submitted, so the caller may reuse
or change its buffers and pages straight away. Each task returns a Future
that resolves with the complete result or raises the operation's error.

Example:
    >>> with ImageWorker(max_workers=2) as worker:
    ...     future = worker.submit_filter(buffer, FilterKind.SEPIA)
    ...     filtered = future.result()
"""

import concurrent.futures
import copy
from dataclasses import replace
from datetime import date as date_type
import logging
from typing import Any, Callable, Optional, Sequence

from SB_Libs.CanvasLib.canvas_items import CanvasItem
from SB_Libs.CanvasLib.canvas_renderer import ImageLoader, render_page
from SB_Libs.CanvasLib.page_models import ScrapbookPage
from SB_Libs.ImageEditingLib.color_space_decoder import SensorFrame, decode_frame
from SB_Libs.ImageEditingLib.filter_engine import FilterEngine, FilterKind, get_default_engine
from SB_Libs.ImageEditingLib.image_models import PixelBuffer
from SB_Libs.ImageEditingLib.strip_compositor import compose_strip

logger = logging.getLogger(__name__)


class ImageWorker:
    """Thread pool wrapper for the imaging operations."""

    def __init__(self, max_workers: Optional[int] = None, engine: Optional[FilterEngine] = None):
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="snapbook-image",
        )
        self._engine = engine or get_default_engine()

    def __enter__(self) -> "ImageWorker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _submit(self, name: str, fn: Callable[..., Any], *args: Any) -> concurrent.futures.Future:
        logger.debug(f"Submitting {name} task")
        return self._executor.submit(fn, *args)

    def submit_decode(self, frame: SensorFrame) -> concurrent.futures.Future:
        """Decode a sensor frame; resolves to a PixelBuffer."""
        planes = [replace(plane, data=bytes(plane.data)) for plane in frame.planes]
        frame_copy = SensorFrame(frame.width, frame.height, planes)
        return self._submit("decode", decode_frame, frame_copy)

    def submit_filter(self, buffer: Optional[PixelBuffer], kind: FilterKind) -> concurrent.futures.Future:
        """Apply a filter; resolves to the filtered buffer (None for a None/empty input)."""
        source = buffer.copy() if buffer is not None else None
        return self._submit("filter", self._engine.apply, source, kind)

    def submit_strip(
        self,
        shots: Sequence[Optional[PixelBuffer]],
        date: Optional[date_type] = None,
    ) -> concurrent.futures.Future:
        """Compose a photo strip; resolves to the strip buffer."""
        shots_copy = [shot.copy() if shot is not None else None for shot in shots or []]
        return self._submit("strip", compose_strip, shots_copy, date)

    def submit_render(
        self,
        page: ScrapbookPage,
        width: int,
        height: int,
        image_loader: Optional[ImageLoader] = None,
        selected_item: Optional[CanvasItem] = None,
    ) -> concurrent.futures.Future:
        """Render a page snapshot; resolves to the rendered buffer."""
        page_copy = copy.deepcopy(page)
        selected_copy = None
        if selected_item is not None:
            for original, duplicate in zip(page.items, page_copy.items):
                if original is selected_item:
                    selected_copy = duplicate
                    break
            else:
                selected_copy = copy.deepcopy(selected_item)
        return self._submit("render", render_page, page_copy, width, height, image_loader, selected_copy)

    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        """Release the worker threads, optionally cancelling queued tasks."""
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)
