# launcher.py
"""
Launcher for the CloudConvert node API.
"""

import sys

import uvicorn

from cloudconvert_node.core.config import config
from cloudconvert_node.core.setup_logging import get_uvicorn_log_config, setup_default_logging

# Configure logging
logger = setup_default_logging()


def main():
    """Run the node API with Uvicorn."""
    print(f"🚀 Starting CloudConvert node on {config.NODE_HOST}:{config.NODE_PORT}...")
    try:
        uvicorn.run(
            "cloudconvert_node.main:app",
            host=config.NODE_HOST,
            port=config.NODE_PORT,
            log_config=get_uvicorn_log_config(),
            access_log=True,
            workers=1,
        )
    except KeyboardInterrupt:
        print("\n⏹️  Node stopped")
    except Exception as e:
        print(f"❌ Launcher error: {e}")
        sys.exit(1)


def run_dev():
    """Run the node API with Uvicorn reload (development mode)."""
    print(f"[DEV] Starting CloudConvert node on {config.NODE_HOST}:{config.NODE_PORT}")
    print(f"CloudConvert API: {config.CLOUDCONVERT_API_URL}")

    uvicorn.run(
        "cloudconvert_node.main:app",
        host=config.NODE_HOST,
        port=config.NODE_PORT,
        reload=True,
        access_log=True,
        workers=1,
    )


if __name__ == "__main__":
    main()
