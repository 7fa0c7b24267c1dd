# cloudconvert_node/core/exceptions.py
"""
Error classes raised while executing a CloudConvert node.

Transport failures are not wrapped: they surface as the original ``httpx`` exceptions.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from cloudconvert_node.models.models import Job


class NodeOperationError(Exception):
    """Base class for failures detected or classified by the node itself."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParameterError(NodeOperationError):
    """Caller input violates a precondition; raised before any remote call for that unit of work."""


class JobGraphError(NodeOperationError):
    """A built task graph references unknown tasks or contains a cycle."""


class JobSubmissionError(NodeOperationError):
    """The remote service rejected a job creation request."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(f"{message} (Code: {code})")
        self.remote_message = message
        self.code = code


class JobFailedError(NodeOperationError):
    """The remote job reached the ``error`` status."""

    def __init__(self, message: str, job: "Job"):
        super().__init__(message)
        self.job = job
