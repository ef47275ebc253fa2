"""
Photo booth demonstration.

Runs a full capture session on synthetic sensor frames: each frame is
decoded on the background worker, filtered and collected into a strip. The
strip is saved, placed on a new scrapbook page and the page is rendered to a
preview image.

Usage:
    python examples/photo_booth_demo.py [output_dir] [filter_name]
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging
import time

from SB_Libs.ImageEditingLib.color_space_decoder import SensorFrame, SensorPlane
from SB_Libs.ImageEditingLib.image_io import save_pixel_buffer
from SB_Libs.SessionLib.booth_session import PhotoBoothSession
from SB_Libs.SessionLib.editor_session import EditorSession
from SB_Libs.SessionLib.image_worker import ImageWorker


def make_frame(width, height, shade):
    """Build a planar frame with a horizontal luma ramp and a colour cast."""
    luma = bytes(
        min(235, 16 + (x * 200) // width + shade) for _ in range(height) for x in range(width)
    )
    chroma_width, chroma_height = (width + 1) // 2, (height + 1) // 2
    u = bytes([110 + shade // 4]) * (chroma_width * chroma_height)
    v = bytes([150 - shade // 4]) * (chroma_width * chroma_height)
    return SensorFrame(
        width,
        height,
        [SensorPlane(luma, width), SensorPlane(u, chroma_width), SensorPlane(v, chroma_width)],
    )


def main():
    """Run the demo."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd() / "snapbook_demo"
    output_dir.mkdir(parents=True, exist_ok=True)

    session = PhotoBoothSession()
    if len(sys.argv) > 2:
        session.set_filter(sys.argv[2])
    print(f"Filter: {session.filter_kind.display_name}")

    start = time.time()
    with ImageWorker() as worker:
        futures = [worker.submit_decode(make_frame(640, 480, shade)) for shade in (0, 20, 40, 60)]
        for future in futures:
            session.add_capture(future.result(), mirrored=True)
            print(f"  {session.progress_text()}")

        strip = worker.submit_strip(session.shots).result()
    print(f"Strip {strip.width}x{strip.height} built in {time.time() - start:.2f}s")

    strip_path = session.save_strip(output_dir)
    print(f"Saved strip to {strip_path}")

    editor = EditorSession(output_dir)
    page = editor.new_page_with_image(str(strip_path), from_booth=True)
    editor.add_text("Photo booth night!")
    editor.save_active()

    preview_path = save_pixel_buffer(editor.render_active(480, 800), output_dir / f"page_{page.page_id}_preview.png")
    print(f"Saved page {page.page_id} preview to {preview_path}")


if __name__ == "__main__":
    main()
