import httpx
import pytest

from cloudconvert_node.core.config import config
from cloudconvert_node.core.credentials import (
    ApiKeyAuth,
    OAuth2BearerAuth,
    get_request_auth,
)
from cloudconvert_node.core.exceptions import InvalidParameterError
from cloudconvert_node.models.models import Credentials


def _signed_header(auth: httpx.Auth) -> str:
    request = httpx.Request("GET", "https://api.test/v2/jobs")
    flow = auth.auth_flow(request)
    return next(flow).headers["Authorization"]


def test_api_key_from_request_credentials():
    auth = get_request_auth("apiKey", Credentials(api_key="request-key"))

    assert isinstance(auth, ApiKeyAuth)
    assert _signed_header(auth) == "Bearer request-key"


def test_api_key_falls_back_to_configuration(monkeypatch):
    monkeypatch.setattr(config, "CLOUDCONVERT_API_KEY", "configured-key")

    assert _signed_header(get_request_auth("apiKey")) == "Bearer configured-key"


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(config, "CLOUDCONVERT_API_KEY", "")

    with pytest.raises(InvalidParameterError) as exc:
        get_request_auth("apiKey")
    assert str(exc.value) == "No API key configured for CloudConvert."


def test_oauth2_token_type():
    auth = get_request_auth("oAuth2", Credentials(access_token="tok", token_type="MAC"))

    assert isinstance(auth, OAuth2BearerAuth)
    assert _signed_header(auth) == "MAC tok"


def test_oauth2_from_configuration(monkeypatch):
    monkeypatch.setattr(config, "CLOUDCONVERT_OAUTH_TOKEN", "configured-token")

    assert _signed_header(get_request_auth("oAuth2")) == "Bearer configured-token"


def test_unsupported_authentication():
    with pytest.raises(InvalidParameterError) as exc:
        get_request_auth("basic")
    assert str(exc.value) == "Unsupported authentication type: basic"
