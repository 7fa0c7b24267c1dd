# cloudconvert_node/task_handlers/__init__.py
"""
Task handlers package, one subpackage per CloudConvert operation.
Dynamically loads and manages the operation handlers.
"""

import importlib
import pkgutil
from typing import Dict, Optional, Type

from .base_handler import BaseTaskHandler


class TaskHandlerManager:
    """
    Manages registration and discovery of operation handlers.

    Automatically discovers and loads handlers from subdirectories,
    keyed by the operation name they implement.
    """

    def __init__(self):
        self.handlers: Dict[str, Type[BaseTaskHandler]] = {}
        self._discover_handlers()

    def _discover_handlers(self) -> None:
        """
        Automatically discover and register all operation handlers.
        """
        package = __import__(__name__, fromlist=[""])

        for _, name, is_pkg in pkgutil.iter_modules(package.__path__):
            if is_pkg and name != "base_handler":
                try:
                    handler_module = importlib.import_module(f".{name}", __name__)
                    if hasattr(handler_module, "get_handler"):
                        handler_class = handler_module.get_handler()
                        if hasattr(handler_class, "task_type"):
                            self.handlers[handler_class.task_type] = handler_class
                except ImportError as e:
                    print(f"Failed to load handler {name}: {e}")

    def get_handler(self, task_type: str) -> Optional[Type[BaseTaskHandler]]:
        """
        Get handler for a specific operation.

        Args:
            task_type: Operation name (convert, merge, capture-website, ...)

        Returns:
            Optional handler class, None if not found
        """
        return self.handlers.get(task_type)

    def list_handlers(self) -> Dict[str, str]:
        """
        List all available operation handlers.

        Returns:
            Dict mapping operation names to handler descriptions
        """
        return {
            task_type: handler.get_description() for task_type, handler in self.handlers.items()
        }


# Global task handler manager
task_handler_manager = TaskHandlerManager()
