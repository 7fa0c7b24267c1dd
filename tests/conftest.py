"""Pytest configuration for adding the project root to sys.path."""

import os
import sys
import tempfile

# Ensure the repository root (containing the `cloudconvert_node` package) is on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Isolate the configuration from any local .env before the package is imported
os.environ.setdefault("CONFIG_ENV_PATH", os.path.join(PROJECT_ROOT, "tests", "missing.env"))
os.environ.setdefault("LOG_DIRECTORY", os.path.join(tempfile.gettempdir(), "cloudconvert-node-tests"))
os.environ.setdefault("CLOUDCONVERT_API_KEY", "test-api-key")
