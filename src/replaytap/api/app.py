"""FastAPI application and shared server state."""

from dataclasses import dataclass

from fastapi import FastAPI

from replaytap.config import ViewerConfig
from replaytap.storage import DiskStore


@dataclass
class ServerState:
    """State shared by all routes.

    Attributes:
        store: Recording store.
        config: Viewer and server settings.
    """

    store: DiskStore
    config: ViewerConfig


# Set by create_app(), read by route modules
app_state: ServerState | None = None


def create_app(config: ViewerConfig | None = None, store: DiskStore | None = None) -> FastAPI:
    """Build the API with all routes registered.

    Args:
        config: Settings, defaults when None.
        store: Recording store, opened at config.data_dir when None.

    Returns:
        FastAPI application.
    """
    from replaytap.api.routes import include_routes

    global app_state
    config = config or ViewerConfig()
    app_state = ServerState(store=store or DiskStore(config.data_dir), config=config)

    api = FastAPI(title="replaytap", description="Session replay viewer")
    include_routes(api)
    return api
