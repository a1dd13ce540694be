"""Configuration management for replaytap.

Handles viewer and server settings from replaytap.toml.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import tomllib

DEFAULT_PROXIMITY_MS = 1500
DEFAULT_TICK_INTERVAL_MS = 250


def _find_config_file() -> Optional[Path]:
    """Find replaytap.toml in current or parent directories."""
    current = Path.cwd()

    for parent in [current] + list(current.parents):
        config_file = parent / "replaytap.toml"
        if config_file.exists():
            return config_file

    return None


def _load_config(path: Optional[Path] = None) -> dict:
    """Load raw configuration from file."""
    if path is None:
        path = _find_config_file()

    if path is None or not path.exists():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


@dataclass
class ViewerConfig:
    """Settings shared by the viewer core, the store and the API server.

    Attributes:
        proximity_ms: Max distance between clock and entry for the active highlight.
        tick_interval_ms: Minimum wall time between two playback ticks.
        body_display_limit: Response bodies longer than this are truncated.
        max_ws_frames: Frames listed per WebSocket connection.
        ws_payload_limit: Characters shown per WebSocket frame payload.
        data_dir: Root directory of the recording store.
        host: API bind host.
        port: API bind port.
        log_level: Logging level name for the CLI.
    """

    proximity_ms: int = DEFAULT_PROXIMITY_MS
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    body_display_limit: int = 10240
    max_ws_frames: int = 100
    ws_payload_limit: int = 200
    data_dir: Path = field(default_factory=lambda: Path.cwd() / "data")
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict, base_dir: Optional[Path] = None) -> "ViewerConfig":
        """Build config from parsed TOML tables.

        Args:
            data: Parsed TOML with optional [viewer] and [server] tables.
            base_dir: Directory relative data_dir values resolve against.

        Returns:
            ViewerConfig with defaults for missing keys.
        """
        viewer = data.get("viewer", {})
        server = data.get("server", {})
        config = cls()

        for key in ("proximity_ms", "tick_interval_ms", "body_display_limit", "max_ws_frames", "ws_payload_limit"):
            if key in viewer:
                setattr(config, key, int(viewer[key]))

        if "data_dir" in server:
            data_dir = Path(server["data_dir"])
            if not data_dir.is_absolute():
                data_dir = (base_dir or Path.cwd()) / data_dir
            config.data_dir = data_dir
        config.host = server.get("host", config.host)
        config.port = int(server.get("port", config.port))
        config.log_level = str(server.get("log_level", config.log_level)).upper()

        # Environment wins over file
        if env_dir := os.environ.get("REPLAYTAP_DATA_DIR"):
            config.data_dir = Path(env_dir)
        if env_port := os.environ.get("REPLAYTAP_PORT"):
            config.port = int(env_port)

        return config


def load_config(path: Optional[Path] = None) -> ViewerConfig:
    """Load replaytap.toml (searched upwards from cwd when path is None)."""
    if path is None:
        path = _find_config_file()
    base_dir = path.parent if path else None
    return ViewerConfig.from_dict(_load_config(path), base_dir=base_dir)


__all__ = ["ViewerConfig", "load_config", "DEFAULT_PROXIMITY_MS", "DEFAULT_TICK_INTERVAL_MS"]
