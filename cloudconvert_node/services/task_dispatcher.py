# cloudconvert_node/services/task_dispatcher.py
"""
Operation dispatching service routing node executions to the matching handler.
"""

from typing import Any, Dict, List, Optional

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.core.credentials import get_request_auth
from cloudconvert_node.core.exceptions import InvalidParameterError
from cloudconvert_node.core.setup_logging import setup_default_logging
from cloudconvert_node.models.models import ExecutionRequest, OutputItem
from cloudconvert_node.services.cloudconvert_client import CloudConvertClient
from cloudconvert_node.task_handlers import task_handler_manager


class TaskDispatcher:
    """
    Dispatches node executions to the handler of the requested operation.

    No retry is attempted: the first failure stops the execution, outputs
    already produced are kept and returned alongside the error.
    """

    def __init__(self):
        """Initialize task dispatcher."""
        self.logger = setup_default_logging()

    async def dispatch_task(
        self, operation: str, context: ExecutionContext, client: CloudConvertClient
    ) -> Dict[str, Any]:
        """
        Run one operation over every item of the context.

        Args:
            operation: Operation name (convert, merge, archive, ...)
            context: Execution context holding items and parameters
            client: Job API client carrying the execution's auth

        Returns:
            Dict containing ``success``, ``items`` and, on failure, ``error``,
            ``error_type``, ``failed_item_index`` and the raised ``exception``
        """
        self.logger.info(
            f"Dispatching operation {operation} over {len(context.get_input_items())} items"
        )

        handler_class = task_handler_manager.get_handler(operation)
        if not handler_class:
            error = InvalidParameterError(f"No handler found for operation: {operation}")
            return self._failure(operation, error, [], None)

        handler = handler_class(client)
        output_items: List[OutputItem] = []

        try:
            await handler.execute_task(context, output_items)
        except Exception as e:
            self.logger.error(
                f"Operation {operation} failed at item {handler.current_item_index}: {e}"
            )
            return self._failure(operation, e, output_items, handler.current_item_index)

        self.logger.info(f"Operation {operation} produced {len(output_items)} items")
        return {"success": True, "operation": operation, "items": output_items}

    async def execute_request(self, request: ExecutionRequest) -> Dict[str, Any]:
        """
        Execute a node run described by an HTTP request body.

        The request-signing auth is selected once here and shared by every
        remote call of the run.
        """
        context = ExecutionContext.from_request(request)
        try:
            auth = get_request_auth(request.authentication, request.credentials)
        except InvalidParameterError as e:
            return self._failure(request.operation, e, [], None)

        client = CloudConvertClient(auth)
        return await self.dispatch_task(request.operation, context, client)

    def _failure(
        self,
        operation: str,
        error: Exception,
        output_items: List[OutputItem],
        failed_item_index: Optional[int],
    ) -> Dict[str, Any]:
        return {
            "success": False,
            "operation": operation,
            "items": output_items,
            "error": str(error),
            "error_type": type(error).__name__,
            "failed_item_index": failed_item_index,
            "exception": error,
        }

    def get_available_operations(self) -> Dict[str, str]:
        """
        Get list of available operations and their descriptions.

        Returns:
            Dict mapping operation names to descriptions
        """
        handlers: Dict[str, str] = task_handler_manager.list_handlers()
        return handlers


# Global task dispatcher instance
task_dispatcher = TaskDispatcher()
