# cloudconvert_node/api/routes/runner.py
"""
API routes for node health and discovery.
"""

from datetime import datetime

from fastapi import APIRouter

from cloudconvert_node.__version__ import __version__
from cloudconvert_node.core.config import config
from cloudconvert_node.services.task_dispatcher import task_dispatcher

# Create API router with prefix and tags for OpenAPI documentation
router = APIRouter(prefix="/runner", tags=["Runner"])

# ======================================================
# Health & Status Endpoints
# ======================================================


@router.get(
    "/health",
    response_model=dict,
    summary="Check node health",
    description="Health check endpoint to verify the node is running",
    tags=["Runner"],
)
async def health_check() -> dict:
    """
    Health check endpoint to verify the node is running properly.

    Returns:
        dict: Health status, version and remote endpoints in use
    """
    return {
        "status": "healthy",
        "version": __version__,
        "api_url": config.CLOUDCONVERT_API_URL,
        "sync_api_url": config.CLOUDCONVERT_SYNC_API_URL,
        "timestamp": datetime.now().isoformat(),
    }


@router.get(
    "/operations",
    response_model=dict,
    summary="List operations",
    description="Operations this node can execute, with their descriptions",
    tags=["Runner"],
)
async def list_operations() -> dict:
    return {"operations": task_dispatcher.get_available_operations()}
