# cloudconvert_node/task_handlers/capture_website/__init__.py
"""
Website capture handler.
"""

from .capture_website_handler import CaptureWebsiteHandler


def get_handler():
    """
    Get the website capture handler class.

    Returns:
        CaptureWebsiteHandler: Operation handler
    """
    return CaptureWebsiteHandler
