# cloudconvert_node/core/context.py
"""
Execution context shared between the host pipeline and the operation handlers.

Resolves parameter values per item, exposes input binaries and turns
downloaded streams into binary attachments.
"""

import mimetypes
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional

from cloudconvert_node.core.exceptions import InvalidParameterError
from cloudconvert_node.models.models import BinaryData, ExecutionRequest, InputItem

_MISSING = object()


class ExecutionContext:
    """
    One node execution over a batch of input items.

    Parameter lookup order for an item: the item's own parameters, then the
    global parameters, then the default given by the caller.
    """

    def __init__(self, items: Iterable[InputItem], parameters: Optional[Dict[str, Any]] = None):
        self.items: List[InputItem] = list(items)
        self.parameters: Dict[str, Any] = dict(parameters or {})

    @classmethod
    def from_request(cls, request: ExecutionRequest) -> "ExecutionContext":
        parameters = dict(request.parameters)
        parameters.setdefault("operation", request.operation)
        parameters.setdefault("authentication", request.authentication)
        return cls(items=request.items, parameters=parameters)

    def get_input_items(self) -> List[InputItem]:
        return self.items

    def get_node_parameter(self, name: str, item_index: int = 0, default: Any = _MISSING) -> Any:
        """
        Resolve a parameter value for one item.

        Raises:
            InvalidParameterError: The parameter is not set and no default was given
        """
        if 0 <= item_index < len(self.items):
            item_parameters = self.items[item_index].parameters
            if name in item_parameters:
                return item_parameters[name]
        if name in self.parameters:
            return self.parameters[name]
        if default is _MISSING:
            raise InvalidParameterError(f"Could not get parameter '{name}'")
        return default

    def assert_binary_data(self, item_index: int, property_name: str) -> BinaryData:
        """Return the named attachment of an item or fail if it is missing."""
        try:
            item = self.items[item_index]
        except IndexError:
            raise InvalidParameterError(f"No input item with index {item_index}")

        binary = item.binary.get(property_name)
        if binary is None:
            raise InvalidParameterError(
                f"Item has no binary property called '{property_name}'"
            )
        return binary

    def get_binary_data_buffer(self, item_index: int, property_name: str) -> bytes:
        return self.assert_binary_data(item_index, property_name).to_bytes()

    async def prepare_binary_data(
        self,
        chunks: AsyncIterator[bytes],
        file_name: Optional[str],
        mime_type: Optional[str] = None,
    ) -> BinaryData:
        """
        Consume a byte stream into a binary attachment.

        The MIME type falls back to a guess from the file name, then to
        ``application/octet-stream``.
        """
        content = bytearray()
        async for chunk in chunks:
            content.extend(chunk)

        if mime_type:
            # Drop parameters such as "; charset=utf-8"
            mime_type = mime_type.split(";", 1)[0].strip()
        if not mime_type and file_name:
            mime_type = mimetypes.guess_type(file_name)[0]

        return BinaryData.from_bytes(
            bytes(content), file_name, mime_type or "application/octet-stream"
        )
