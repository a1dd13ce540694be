"""HTTP client for fetching recordings from a replaytap server.

PUBLIC API:
  - RecordingClient: Fetch recording snapshots over HTTP
"""

import logging
from typing import Any, Dict

import httpx

from replaytap.errors import FetchFailure, RecordingNotFound
from replaytap.models import RecordingSession

logger = logging.getLogger(__name__)


class RecordingClient:
    """HTTP client for the recording API.

    Any failure (connection, HTTP status, bad payload) surfaces as a single
    FetchFailure. Nothing is retried.

    Attributes:
        base_url: Base URL of the server (default: http://localhost:3000)
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            base_url: Base URL of the server
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def fetch(self, recording_id: str) -> Dict[str, Any]:
        """Fetch a recording snapshot.

        Args:
            recording_id: Recording id

        Returns:
            {metadata, consoleLogs, networkRequests, webSocketLogs}

        Raises:
            RecordingNotFound: Server answered 404
            FetchFailure: Any other failure
        """
        try:
            response = self._client.get(f"{self.base_url}/api/recordings/{recording_id}")
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach {self.base_url}: {e}")
            raise FetchFailure(recording_id, f"network error: {e}") from e

        if response.status_code == 404:
            raise RecordingNotFound(recording_id)
        if response.is_error:
            logger.error(f"HTTP {response.status_code} fetching recording {recording_id}")
            raise FetchFailure(recording_id, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise FetchFailure(recording_id, "invalid JSON response") from e

        if not isinstance(data, dict) or not data.get("ok"):
            reason = data.get("error", "server reported failure") if isinstance(data, dict) else "unexpected payload"
            raise FetchFailure(recording_id, reason)

        return {
            "metadata": data.get("metadata") or {},
            "consoleLogs": data.get("consoleLogs") or [],
            "networkRequests": data.get("networkRequests") or [],
            "webSocketLogs": data.get("webSocketLogs") or [],
        }

    def load_session(self, recording_id: str) -> RecordingSession:
        """Fetch a recording and wrap it as a RecordingSession."""
        return RecordingSession.from_snapshot(self.fetch(recording_id))

    def close(self):
        """Close the HTTP client."""
        self._client.close()


__all__ = ["RecordingClient"]
