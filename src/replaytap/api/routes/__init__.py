"""Route registration.

PUBLIC API:
  - include_routes: Register all API route modules with FastAPI app

Route Modules:
  - recordings.py: Recording snapshot endpoint
  - video.py: Video byte delivery
  - viewer.py: Server-rendered viewer page
"""

from fastapi import FastAPI


def include_routes(app: FastAPI):
    """Include all route modules.

    Args:
        app: FastAPI application instance
    """
    from replaytap.api.routes import recordings, video, viewer

    app.include_router(recordings.router)
    app.include_router(video.router)
    app.include_router(viewer.router)
