# cloudconvert_node/task_handlers/watermark/__init__.py
"""
Watermark handler.
"""

from .watermark_handler import WatermarkHandler


def get_handler():
    """
    Get the watermark handler class.

    Returns:
        WatermarkHandler: Operation handler
    """
    return WatermarkHandler
