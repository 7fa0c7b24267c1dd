# cloudconvert_node/task_handlers/thumbnail/__init__.py
"""
Thumbnail creation handler.
"""

from .thumbnail_handler import ThumbnailHandler


def get_handler():
    """
    Get the thumbnail creation handler class.

    Returns:
        ThumbnailHandler: Operation handler
    """
    return ThumbnailHandler
