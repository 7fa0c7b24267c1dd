# cloudconvert_node/core/config.py
"""
Configuration module for the CloudConvert node.
Handles environment variables, remote endpoints, credentials and application settings.
"""

import os
import sys
from typing import Optional

# Module-level global state - these persist across imports
_CONFIG_ENV_LOADED = False
_CONFIG_INSTANCE = None

DEFAULT_NODE_API_TOKEN = "default-node-token"


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse a boolean from a string with a fallback default."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _parse_int(
    value: Optional[str],
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Parse an integer from a string with optional bounds and fallback default."""
    if value is None:
        return default
    try:
        parsed = int(value.strip())
    except (TypeError, ValueError):
        return default
    if min_value is not None:
        parsed = max(min_value, parsed)
    if max_value is not None:
        parsed = min(max_value, parsed)
    return parsed


def _parse_float(
    value: Optional[str],
    default: float,
    *,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> float:
    """Parse a float from a string with optional bounds and fallback default."""
    if value is None:
        return default
    try:
        parsed = float(value.strip())
    except (TypeError, ValueError):
        return default
    if min_value is not None:
        parsed = max(min_value, parsed)
    if max_value is not None:
        parsed = min(max_value, parsed)
    return parsed


def _parse_csv(value: Optional[str], default: str = "*"):
    """Parse a comma-separated list, falling back to the wildcard."""
    raw = value if value is not None else default
    return [part.strip() for part in (raw or "").split(",") if part.strip()] or ["*"]


def get_config():
    """
    Get or create the configuration instance.
    Ensures .env file is loaded only once.

    Returns:
        Config: Configuration instance
    """
    global _CONFIG_ENV_LOADED, _CONFIG_INSTANCE

    if _CONFIG_INSTANCE is None:
        # Load .env file only if not already loaded
        if not _CONFIG_ENV_LOADED:
            _load_environment_variables()
            _CONFIG_ENV_LOADED = True

        _CONFIG_INSTANCE = Config()

    return _CONFIG_INSTANCE


def reload_config_from_env():
    """Refresh the cached config instance from current environment variables.

    This updates the existing instance in-place so modules that already imported
    ``config`` keep seeing fresh values.
    """
    global _CONFIG_ENV_LOADED, _CONFIG_INSTANCE, config

    if not _CONFIG_ENV_LOADED:
        _load_environment_variables()
        _CONFIG_ENV_LOADED = True

    refreshed = Config()

    if _CONFIG_INSTANCE is None:
        _CONFIG_INSTANCE = refreshed
    else:
        _CONFIG_INSTANCE.__dict__.clear()
        _CONFIG_INSTANCE.__dict__.update(refreshed.__dict__)

    config = _CONFIG_INSTANCE
    return _CONFIG_INSTANCE


def _load_environment_variables() -> None:
    """
    Load environment variables from .env file if it exists.
    This function is called only once.
    """
    current_dir = os.path.dirname(os.path.abspath(__file__))
    package_dir = os.path.dirname(current_dir)
    project_dir = os.path.dirname(package_dir)
    env_path = os.getenv("CONFIG_ENV_PATH") or os.path.join(project_dir, ".env")

    if os.path.exists(env_path):
        from dotenv import load_dotenv

        load_dotenv(env_path)
        print(f"Loaded environment variables from: {env_path}")
    else:
        print(f"Warning: no .env file found in: {env_path}, default configuration used")


class Config:
    """
    Configuration class that reads from environment variables.
    Assumes .env file has already been loaded.
    """

    def __init__(self):
        """Initialize configuration values."""

        # DEBUG mode
        self.DEBUG: bool = _parse_bool(os.getenv("DEBUG"), default=False)

        # # # CloudConvert remote endpoints # # #
        # Main API (job creation, operations catalog)
        self.CLOUDCONVERT_API_URL: str = os.getenv(
            "CLOUDCONVERT_API_URL", "https://api.cloudconvert.com"
        ).rstrip("/")
        # Synchronous API (blocking wait until a job ends)
        self.CLOUDCONVERT_SYNC_API_URL: str = os.getenv(
            "CLOUDCONVERT_SYNC_API_URL", "https://sync.api.cloudconvert.com"
        ).rstrip("/")
        # Tag attached to every created job
        self.CLOUDCONVERT_JOB_TAG: str = os.getenv("CLOUDCONVERT_JOB_TAG", "cloudconvert-node")
        # Prefix of task names inside a job (Ex: cc-upload, cc-process, cc-export)
        self.CLOUDCONVERT_TASK_PREFIX: str = os.getenv("CLOUDCONVERT_TASK_PREFIX", "cc-")

        # Default outbound credentials, used when an execution request carries none
        self.CLOUDCONVERT_API_KEY: str = os.getenv("CLOUDCONVERT_API_KEY", "")
        self.CLOUDCONVERT_OAUTH_TOKEN: str = os.getenv("CLOUDCONVERT_OAUTH_TOKEN", "")

        # Timeout (seconds) for job creation, uploads, downloads and catalog calls.
        # The wait on the synchronous API is never bounded client-side.
        self.HTTP_TIMEOUT_SECONDS: float = _parse_float(
            os.getenv("HTTP_TIMEOUT_SECONDS"), 60.0, min_value=1.0
        )

        # # # HTTP boundary # # #
        self.NODE_HOST: str = os.getenv("NODE_HOST", "0.0.0.0")
        self.NODE_PORT: int = _parse_int(os.getenv("NODE_PORT"), 8090, min_value=1, max_value=65535)
        # API token authentication: access token the host pipeline must present
        self.NODE_API_TOKEN: str = os.getenv("NODE_API_TOKEN", DEFAULT_NODE_API_TOKEN)

        # CORS configuration
        self.CORS_ALLOW_ORIGINS = _parse_csv(os.getenv("CORS_ALLOW_ORIGINS"))
        self.CORS_ALLOW_CREDENTIALS: bool = _parse_bool(
            os.getenv("CORS_ALLOW_CREDENTIALS"), default=False
        )
        self.CORS_ALLOW_METHODS = _parse_csv(os.getenv("CORS_ALLOW_METHODS"))
        self.CORS_ALLOW_HEADERS = _parse_csv(os.getenv("CORS_ALLOW_HEADERS"))

        # Log directory
        self.LOG_DIRECTORY: str = os.getenv("LOG_DIRECTORY", "/tmp/cloudconvert-node/logs")
        # Add slash at end if missing
        if not self.LOG_DIRECTORY.endswith("/"):
            self.LOG_DIRECTORY += "/"

        # Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def validate_configuration(self) -> None:
        """
        Validate critical configuration settings.

        Raises:
            ValueError: If essential configuration is missing or invalid
        """
        self._validate_endpoints()
        self._validate_tokens()
        self._validate_cors()

    def _validate_endpoints(self) -> None:
        for name in ("CLOUDCONVERT_API_URL", "CLOUDCONVERT_SYNC_API_URL"):
            value = getattr(self, name)
            if not value.startswith(("http://", "https://")):
                raise ValueError(f"{name} must be an http(s) URL")

    def _validate_tokens(self) -> None:
        if not self.NODE_API_TOKEN or self.NODE_API_TOKEN == DEFAULT_NODE_API_TOKEN:
            raise ValueError("NODE_API_TOKEN must be set to a secure value")

    def _validate_cors(self) -> None:
        if self.CORS_ALLOW_CREDENTIALS and ("*" in self.CORS_ALLOW_ORIGINS):
            raise ValueError(
                "Invalid CORS configuration: CORS_ALLOW_CREDENTIALS=true is not compatible with CORS_ALLOW_ORIGINS=*"
            )


# Create global config instance using the factory function
config = get_config()


def _is_pytest_run() -> bool:
    # `PYTEST_CURRENT_TEST` is only set while executing a test; during collection it
    # may be absent. We also check loaded modules/argv to reliably detect pytest.
    return (
        os.getenv("PYTEST_CURRENT_TEST") is not None
        or "pytest" in sys.modules
        or any(os.path.basename(arg).startswith("pytest") for arg in sys.argv)
    )

