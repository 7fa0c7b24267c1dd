# cloudconvert_node/task_handlers/convert/__init__.py
"""
File conversion handler.
"""

from .convert_handler import ConvertHandler


def get_handler():
    """
    Get the file conversion handler class.

    Returns:
        ConvertHandler: Operation handler
    """
    return ConvertHandler
