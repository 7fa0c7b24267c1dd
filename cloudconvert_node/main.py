# cloudconvert_node/main.py
"""
Main FastAPI application exposing the CloudConvert node to host pipelines.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cloudconvert_node.api.openapi import OpenAPIConfig, setup_openapi_config
from cloudconvert_node.core.config import _is_pytest_run, config
from cloudconvert_node.core.setup_logging import setup_default_logging

# Configure logging
logger = setup_default_logging()

if not _is_pytest_run():
    config.validate_configuration()

logger.info(f"Starting CloudConvert node on {config.NODE_HOST}:{config.NODE_PORT}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Args:
        app: FastAPI application instance
    """
    logger.info("CloudConvert node started successfully")

    # Import routers inside lifespan to avoid circular imports at module level
    from cloudconvert_node.api.routes import runner, task

    # Include routers once, TestClient may enter the lifespan several times
    if not getattr(app.state, "routers_included", False):
        app.include_router(task.router)
        app.include_router(runner.router)
        app.state.routers_included = True

    yield

    logger.info("Shutting down CloudConvert node")


# FastAPI application configuration
app = FastAPI(lifespan=lifespan, **OpenAPIConfig.get_fastapi_config())

# Setup custom OpenAPI configuration
setup_openapi_config(app)

# CORS middleware configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=config.CORS_ALLOW_CREDENTIALS,
    allow_methods=config.CORS_ALLOW_METHODS,
    allow_headers=config.CORS_ALLOW_HEADERS,
)


@app.get("/", tags=["Runner"])
async def root():
    """
    Root endpoint with API information and links.

    Returns:
        Dict: API information and available endpoints
    """
    return {
        "message": "CloudConvert Node API",
        "version": OpenAPIConfig.VERSION,
        "documentation": {"swagger": "/docs", "redoc": "/redoc", "openapi": "/openapi.json"},
        "health_check": "/runner/health",
    }
