import pytest

from cloudconvert_node.core import config as config_module
from cloudconvert_node.core.config import (
    DEFAULT_NODE_API_TOKEN,
    Config,
    _parse_bool,
    _parse_csv,
    _parse_float,
    _parse_int,
)


def test_parse_helpers():
    assert _parse_bool("yes") is True
    assert _parse_bool("off", default=True) is False
    assert _parse_bool("maybe", default=True) is True
    assert _parse_int("70000", 8090, max_value=65535) == 65535
    assert _parse_int("abc", 8090) == 8090
    assert _parse_float("0.2", 60.0, min_value=1.0) == 1.0
    assert _parse_csv("a, b,,c") == ["a", "b", "c"]
    assert _parse_csv(None) == ["*"]


def test_defaults(monkeypatch):
    for name in (
        "CLOUDCONVERT_API_URL",
        "CLOUDCONVERT_SYNC_API_URL",
        "CLOUDCONVERT_JOB_TAG",
        "CLOUDCONVERT_TASK_PREFIX",
        "NODE_PORT",
        "LOG_DIRECTORY",
    ):
        monkeypatch.delenv(name, raising=False)

    cfg = Config()

    assert cfg.CLOUDCONVERT_API_URL == "https://api.cloudconvert.com"
    assert cfg.CLOUDCONVERT_SYNC_API_URL == "https://sync.api.cloudconvert.com"
    assert cfg.CLOUDCONVERT_TASK_PREFIX == "cc-"
    assert cfg.NODE_PORT == 8090
    assert cfg.LOG_DIRECTORY.endswith("/")


def test_endpoints_trailing_slash_removed(monkeypatch):
    monkeypatch.setenv("CLOUDCONVERT_API_URL", "https://api.sandbox.cloudconvert.com/")

    assert Config().CLOUDCONVERT_API_URL == "https://api.sandbox.cloudconvert.com"


def test_validate_configuration_rejects_default_token(monkeypatch):
    monkeypatch.setenv("NODE_API_TOKEN", DEFAULT_NODE_API_TOKEN)

    with pytest.raises(ValueError):
        Config().validate_configuration()


def test_validate_configuration_rejects_credentials_with_wildcard_origin(monkeypatch):
    monkeypatch.setenv("NODE_API_TOKEN", "a-secure-token")
    monkeypatch.setenv("CORS_ALLOW_CREDENTIALS", "true")
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)

    with pytest.raises(ValueError):
        Config().validate_configuration()


def test_validate_configuration_rejects_non_http_endpoint(monkeypatch):
    monkeypatch.setenv("NODE_API_TOKEN", "a-secure-token")
    monkeypatch.setenv("CLOUDCONVERT_SYNC_API_URL", "ftp://sync.example")

    with pytest.raises(ValueError):
        Config().validate_configuration()


def test_reload_config_updates_shared_instance(monkeypatch):
    shared = config_module.config
    previous = shared.CLOUDCONVERT_JOB_TAG
    monkeypatch.setenv("CLOUDCONVERT_JOB_TAG", "reloaded-tag")

    try:
        refreshed = config_module.reload_config_from_env()
        assert refreshed is shared
        assert shared.CLOUDCONVERT_JOB_TAG == "reloaded-tag"
    finally:
        monkeypatch.setenv("CLOUDCONVERT_JOB_TAG", previous)
        config_module.reload_config_from_env()
