# cloudconvert_node/task_handlers/metadata/__init__.py
"""
Metadata extraction handler.
"""

from .metadata_handler import MetadataHandler


def get_handler():
    """
    Get the metadata extraction handler class.

    Returns:
        MetadataHandler: Operation handler
    """
    return MetadataHandler
