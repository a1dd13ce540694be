"""API server lifecycle.

PUBLIC API:
  - run_server: Run API server in foreground (blocking)
"""

import logging

import uvicorn

from replaytap.api.app import create_app
from replaytap.config import ViewerConfig

logger = logging.getLogger(__name__)


def run_server(config: ViewerConfig) -> None:
    """Run the API server in foreground (blocking).

    Args:
        config: Host, port and data directory come from here.
    """
    api = create_app(config)
    logger.info(f"replaytap serving {config.data_dir} at http://{config.host}:{config.port}")

    try:
        uvicorn.run(api, host=config.host, port=config.port, log_level=config.log_level.lower(), access_log=False)
    except (SystemExit, KeyboardInterrupt):
        pass
    finally:
        logger.info("Server stopped")
