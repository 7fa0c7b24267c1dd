# cloudconvert_node/core/credentials.py
"""
Outbound authentication against the CloudConvert API.

The authentication type is resolved once per execution into an ``httpx.Auth``
that signs every authenticated call made by the job client.
"""

from typing import Generator, Optional

import httpx

from cloudconvert_node.core.config import config
from cloudconvert_node.core.exceptions import InvalidParameterError
from cloudconvert_node.models.models import Credentials

API_KEY_AUTHENTICATION = "apiKey"
OAUTH2_AUTHENTICATION = "oAuth2"


class ApiKeyAuth(httpx.Auth):
    """Signs requests with a CloudConvert API key."""

    def __init__(self, api_key: str):
        self.api_key = api_key

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.api_key}"
        yield request


class OAuth2BearerAuth(httpx.Auth):
    """Signs requests with an OAuth2 access token obtained by the host."""

    def __init__(self, access_token: str, token_type: str = "Bearer"):
        self.access_token = access_token
        self.token_type = token_type or "Bearer"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"{self.token_type} {self.access_token}"
        yield request


def get_request_auth(
    authentication: str, credentials: Optional[Credentials] = None
) -> httpx.Auth:
    """
    Select the request-signing capability for one execution.

    Args:
        authentication: apiKey or oAuth2
        credentials: Host-supplied credential material, falls back to configuration

    Returns:
        httpx.Auth: Auth attached to every authenticated remote call

    Raises:
        InvalidParameterError: Unknown authentication type or missing secret
    """
    if authentication == API_KEY_AUTHENTICATION:
        api_key = (credentials.api_key if credentials else None) or config.CLOUDCONVERT_API_KEY
        if not api_key:
            raise InvalidParameterError("No API key configured for CloudConvert.")
        return ApiKeyAuth(api_key)

    if authentication == OAUTH2_AUTHENTICATION:
        token = (
            credentials.access_token if credentials else None
        ) or config.CLOUDCONVERT_OAUTH_TOKEN
        if not token:
            raise InvalidParameterError("No OAuth2 access token available for CloudConvert.")
        token_type = credentials.token_type if credentials else "Bearer"
        return OAuth2BearerAuth(token, token_type)

    raise InvalidParameterError(f"Unsupported authentication type: {authentication}")
