"""
SessionLib - Photo booth and page editor sessions

This module provides the stateful sessions that drive the imaging core and a
thread pool worker for running imaging operations in the background.
"""

from SB_Libs.SessionLib.booth_session import PhotoBoothSession
from SB_Libs.SessionLib.editor_session import EditorSession
from SB_Libs.SessionLib.image_worker import ImageWorker

__all__ = [
    "PhotoBoothSession",
    "EditorSession",
    "ImageWorker",
]
