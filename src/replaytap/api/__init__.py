"""HTTP API serving recordings, video bytes and the rendered viewer page.

PUBLIC API:
  - create_app: Build the FastAPI application for a store
  - run_server: Run the API server in foreground (blocking)
"""

from replaytap.api.app import create_app
from replaytap.api.server import run_server

__all__ = ["create_app", "run_server"]
