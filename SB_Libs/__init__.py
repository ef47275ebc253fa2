"""
SB_Libs - SnapBook Library Modules

This package contains the imaging core of the SnapBook photo booth and
scrapbook, organized into specialized sub-packages:

- ImageEditingLib: Pixel buffers, sensor decoding, colour filters, photo strips
- CanvasLib: Scrapbook pages, canvas items, hit-testing and rendering
- ProjStoreLib: Page persistence
- SessionLib: Booth/editor sessions and the background image worker
"""

__version__ = "0.1.0"
