# cloudconvert_node/task_handlers/archive/__init__.py
"""
Archive creation handler.
"""

from .archive_handler import ArchiveHandler


def get_handler():
    """
    Get the archive creation handler class.

    Returns:
        ArchiveHandler: Operation handler
    """
    return ArchiveHandler
