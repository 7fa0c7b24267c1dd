# cloudconvert_node/api/openapi.py
"""OpenAPI configuration for the CloudConvert node API.

Keeps the exposed OpenAPI/FastAPI version aligned with the package version.
"""

from typing import Callable, Dict, List

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from cloudconvert_node.__version__ import __version__


def custom_openapi(app: FastAPI) -> Callable[[], Dict]:
    """
    Generate custom OpenAPI schema for the node API.

    Args:
        app: FastAPI application instance

    Returns:
        callable: Function that generates OpenAPI schema
    """

    def _custom_openapi() -> Dict:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        openapi_schema["tags"] = _get_openapi_tags()

        if hasattr(app, "license_info") and app.license_info:
            openapi_schema["license"] = app.license_info

        _add_security_schemes(openapi_schema)
        _enhance_schemas_with_examples(openapi_schema)

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    return _custom_openapi


def _get_openapi_tags() -> List[Dict]:
    """
    Define OpenAPI tags for organizing endpoints in documentation.

    Returns:
        List[Dict]: List of tag definitions
    """
    return [
        {
            "name": "Runner",
            "description": "Health of the node and available operations",
        },
        {
            "name": "Task",
            "description": "Execution of CloudConvert operations over pipeline items",
        },
    ]


def _add_security_schemes(openapi_schema: Dict) -> None:
    """
    Add security schemes to OpenAPI schema.

    Args:
        openapi_schema: OpenAPI schema to modify
    """
    openapi_schema["components"] = openapi_schema.get("components", {})
    openapi_schema["components"]["securitySchemes"] = {
        "APIKeyHeader": {
            "type": "apiKey",
            "name": "X-API-Token",
            "in": "header",
            "description": "API Key for authentication",
        }
    }


def _enhance_schemas_with_examples(openapi_schema: Dict) -> None:
    """
    Enhance schemas with examples for better documentation.

    Args:
        openapi_schema: OpenAPI schema to modify
    """
    schemas = openapi_schema.setdefault("components", {}).setdefault("schemas", {})

    if "ExecutionRequest" in schemas:
        schemas["ExecutionRequest"]["example"] = {
            "operation": "convert",
            "authentication": "apiKey",
            "parameters": {"outputFormat": "pdf", "additionalOptions": '{"engine": "office"}'},
            "items": [
                {
                    "json": {},
                    "binary": {
                        "data": {
                            "data": "SGVsbG8=",
                            "mimeType": "text/plain",
                            "fileName": "hello.txt",
                        }
                    },
                }
            ],
        }


def setup_openapi_config(app: FastAPI) -> None:
    """
    Set up custom OpenAPI configuration for FastAPI app.

    Args:
        app: FastAPI application instance to configure
    """
    app.openapi = custom_openapi(app)  # type: ignore[method-assign]


class OpenAPIConfig:  # pragma: no cover
    """
    Configuration class for OpenAPI documentation settings.
    """

    TITLE = "CloudConvert Node API"
    DESCRIPTION = """
## CloudConvert Node API

Runs CloudConvert operations as a pipeline step:

* **Execute an operation** - convert, merge, archive, thumbnail, optimize, watermark, metadata, capture-website
* **List output formats** - formats the remote service offers for an operation

### Authentication

Include the node API token in the `X-API-Token` header or in the `Bearer <token>` format.
CloudConvert credentials travel in the execution request or come from the node configuration.
"""
    VERSION = __version__
    LICENSE_INFO = {
        "name": "LGPL 3.0",
        "url": "https://www.gnu.org/licenses/lgpl-3.0.html",
    }

    OPENAPI_URL = "/openapi.json"
    DOCS_URL = "/docs"
    REDOC_URL = "/redoc"

    @classmethod
    def get_fastapi_config(cls) -> Dict:
        """
        Get FastAPI configuration for OpenAPI.

        Returns:
            Dict: Configuration dictionary for FastAPI app
        """
        return {
            "title": cls.TITLE,
            "description": cls.DESCRIPTION,
            "version": cls.VERSION,
            "license_info": cls.LICENSE_INFO,
            "openapi_url": cls.OPENAPI_URL,
            "docs_url": cls.DOCS_URL,
            "redoc_url": cls.REDOC_URL,
        }
