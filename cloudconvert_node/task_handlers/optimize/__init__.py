# cloudconvert_node/task_handlers/optimize/__init__.py
"""
File optimization handler.
"""

from .optimize_handler import OptimizeHandler


def get_handler():
    """
    Get the file optimization handler class.

    Returns:
        OptimizeHandler: Operation handler
    """
    return OptimizeHandler
