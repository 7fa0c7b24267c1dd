# cloudconvert_node/task_handlers/merge/__init__.py
"""
File merge handler.
"""

from .merge_handler import MergeHandler


def get_handler():
    """
    Get the file merge handler class.

    Returns:
        MergeHandler: Operation handler
    """
    return MergeHandler
