# cloudconvert_node/api/routes/task.py
"""
Task routes for the node API.
Runs CloudConvert operations over pipeline items and lists selectable output formats.
"""

from typing import Any, Dict, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from cloudconvert_node.core.auth import get_current_caller
from cloudconvert_node.core.exceptions import InvalidParameterError, JobGraphError
from cloudconvert_node.core.setup_logging import setup_default_logging
from cloudconvert_node.models.models import (
    ExecutionRequest,
    ExecutionResponse,
    OutputFormatsResponse,
)
from cloudconvert_node.services.cloudconvert_client import CloudConvertClient
from cloudconvert_node.services.task_dispatcher import task_dispatcher

# Configure logging
logger = setup_default_logging()

# Create API router for task-related endpoints
router = APIRouter(prefix="/task", tags=["Task"])

# ======================================================
# Utility Functions
# ======================================================


def _derive_status_code(results: Dict[str, Any]) -> int:
    """Map an execution outcome to an HTTP status code.

    Malformed caller input gives 400, any remote or transport failure 502.
    """
    if results.get("success"):
        return 200
    if isinstance(results.get("exception"), (InvalidParameterError, JobGraphError)):
        return 400
    return 502


# ======================================================
# Task Execution Endpoints
# ======================================================


@router.post(
    "/execute",
    response_model=ExecutionResponse,
    summary="Execute an operation",
    description="Run a CloudConvert operation over the given items and return the output items",
    responses={400: {"model": ExecutionResponse}, 502: {"model": ExecutionResponse}},
)
async def execute_task(
    execution_request: ExecutionRequest, caller: str = Depends(get_current_caller)
) -> JSONResponse:
    """
    Execute one node run.

    Items are processed one after another. On failure, items produced before
    the failure are returned together with the error.
    """
    logger.info(
        f"Received {execution_request.operation} execution with {len(execution_request.items)} items"
    )
    results = await task_dispatcher.execute_request(execution_request)

    response = ExecutionResponse(
        success=results["success"],
        operation=results["operation"],
        items=results["items"],
        error=results.get("error"),
        error_type=results.get("error_type"),
        failed_item_index=results.get("failed_item_index"),
    )
    return JSONResponse(
        status_code=_derive_status_code(results),
        content=response.model_dump(mode="json", by_alias=True),
    )


@router.get(
    "/formats/{operation}",
    response_model=OutputFormatsResponse,
    summary="List output formats",
    description="Output formats the remote service offers for an operation",
)
async def list_output_formats(
    operation: str,
    input_format: Optional[str] = None,
    caller: str = Depends(get_current_caller),
) -> OutputFormatsResponse:
    try:
        formats = await CloudConvertClient().get_output_formats(operation, input_format)
    except httpx.HTTPError as e:
        logger.error(f"Unable to load output formats for {operation}: {e}")
        raise HTTPException(status_code=502, detail=f"Unable to load output formats: {e}")

    return OutputFormatsResponse(
        operation=operation, input_format=input_format, output_formats=formats
    )
