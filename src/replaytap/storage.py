"""On-disk recording store.

Layout per recording: {data_dir}/{id}/ holding console-logs.json,
network-requests.json, optional websocket-logs.json, metadata.json and an
optional recording.webm.

PUBLIC API:
  - DiskStore: Read, write and locate recordings
"""

import json
import logging
import re
import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from replaytap.models import RecordingMetadata

logger = logging.getLogger(__name__)

CONSOLE_FILE = "console-logs.json"
NETWORK_FILE = "network-requests.json"
WEBSOCKET_FILE = "websocket-logs.json"
METADATA_FILE = "metadata.json"
VIDEO_FILE = "recording.webm"

_ID_PATTERN = re.compile(r"[a-f0-9]+")


class DiskStore:
    """Recording store rooted at a data directory."""

    def __init__(self, data_dir: Path):
        """Initialize store.

        Args:
            data_dir: Root directory, created if missing.
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _generate_id(self) -> str:
        for _ in range(10):
            recording_id = secrets.token_hex(4)
            if not (self.data_dir / recording_id).exists():
                return recording_id
        # Fallback to longer ID
        return secrets.token_hex(8)

    def exists(self, recording_id: str) -> bool:
        """Check a recording exists; ids outside lowercase hex never do."""
        if not recording_id or not _ID_PATTERN.fullmatch(recording_id):
            return False
        return (self.data_dir / recording_id / METADATA_FILE).exists()

    def save_recording(
        self,
        console_logs: Any = None,
        network_requests: Any = None,
        websocket_logs: Any = None,
        metadata: dict | None = None,
        video: bytes | None = None,
    ) -> str:
        """Persist a recording and return its new id.

        Args:
            console_logs: Console-log array.
            network_requests: HAR document or flat array.
            websocket_logs: WebSocket logs, omitted from disk when None.
            metadata: Metadata object; id and createdAt are added.
            video: Raw video bytes.

        Returns:
            Recording id.
        """
        recording_id = self._generate_id()
        directory = self.data_dir / recording_id
        directory.mkdir(parents=True)

        if video:
            (directory / VIDEO_FILE).write_bytes(video)

        self._write_json(directory / CONSOLE_FILE, console_logs if console_logs is not None else [])
        self._write_json(directory / NETWORK_FILE, network_requests if network_requests is not None else {})
        if websocket_logs is not None:
            self._write_json(directory / WEBSOCKET_FILE, websocket_logs)

        meta = RecordingMetadata.parse(metadata or {})
        meta.id = recording_id
        meta.created_at = datetime.now(timezone.utc).isoformat()
        self._write_json(directory / METADATA_FILE, meta.model_dump(by_alias=True, exclude_none=True))

        logger.info(f"Saved recording {recording_id} to {directory}")
        return recording_id

    def get_recording(self, recording_id: str) -> dict | None:
        """Load a recording snapshot.

        Returns:
            {metadata, consoleLogs, networkRequests, webSocketLogs}, or None
            when the id is unknown or a file is unreadable.
        """
        if not self.exists(recording_id):
            return None
        directory = self.data_dir / recording_id

        try:
            metadata = self._read_json(directory / METADATA_FILE)
            console_logs = self._read_json(directory / CONSOLE_FILE)
            network_requests = self._read_json(directory / NETWORK_FILE)
            websocket_path = directory / WEBSOCKET_FILE
            websocket_logs = self._read_json(websocket_path) if websocket_path.exists() else []
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read recording {recording_id}: {e}")
            return None

        return {
            "metadata": metadata,
            "consoleLogs": console_logs,
            "networkRequests": network_requests,
            "webSocketLogs": websocket_logs,
        }

    def get_video_path(self, recording_id: str) -> Path | None:
        """Path of the recording's video, or None."""
        if not self.exists(recording_id):
            return None
        path = self.data_dir / recording_id / VIDEO_FILE
        return path if path.exists() else None

    @staticmethod
    def _read_json(path: Path) -> Any:
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    @staticmethod
    def _write_json(path: Path, data: Any) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)


__all__ = ["DiskStore"]
