# cloudconvert_node/core/auth.py
"""
Inbound authentication of the host pipeline calling the node.

The host presents the node token either in ``X-API-Token`` or as a bearer
token. This is unrelated to the CloudConvert credentials, which travel in
the execution request (see ``core/credentials.py``).
"""

import hmac
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from cloudconvert_node.core.config import config

bearer_scheme = HTTPBearer(auto_error=False)
api_key_header = APIKeyHeader(name="X-API-Token", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _presented_token(
    api_token: Optional[str], credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    # X-API-Token wins over Authorization when both are sent
    if api_token:
        return api_token
    if credentials:
        return credentials.credentials
    return None


async def verify_token(
    api_token: Optional[str] = Depends(api_key_header),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Check the node token presented by the host pipeline.

    Raises:
        HTTPException: 401 when no token is presented or it differs from ``NODE_API_TOKEN``
    """
    token = _presented_token(api_token, credentials)
    if not token:
        raise _unauthorized("Missing node API token")

    if not hmac.compare_digest(token.encode("utf-8"), config.NODE_API_TOKEN.encode("utf-8")):
        raise _unauthorized("Invalid node API token")

    return token


def get_current_caller(token: str = Depends(verify_token)) -> str:
    """Dependency guarding the execution and catalog endpoints."""
    return token
