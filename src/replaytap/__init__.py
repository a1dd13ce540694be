"""replaytap - session replay viewer.

Plays back a recorded browser session while progressively revealing the
console messages and network activity captured alongside it. The core maps
the playback clock onto each stream's visible prefix, renders captured
runtime values safely and applies facet filters on top.

PUBLIC API:
  - Viewer: Recording loaded into panels and wired to a clock
  - RecordingSession: Immutable recording snapshot
  - render_page: Full viewer page at the current clock
  - main: Entry point function for CLI
  - __version__: Package version string
"""

import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from replaytap.models import RecordingSession
from replaytap.viewer import Viewer, render_page

try:
    __version__ = version("replaytap")
except PackageNotFoundError:
    __version__ = "0.0.0"

USAGE = "Usage: replaytap serve | replaytap render <recording-id> [time-ms] [--server URL]"


def _handle_serve():
    """Handle serve subcommand (replaytap serve)."""
    from replaytap.api import run_server
    from replaytap.config import load_config

    config = load_config()
    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_server(config)


def _handle_render():
    """Handle render subcommand (replaytap render <id> [ms] [--server URL]).

    Prints the viewer page at the given clock position. Reads the local store
    unless --server points at a running replaytap server.
    """
    from replaytap.client import RecordingClient
    from replaytap.config import load_config
    from replaytap.errors import FetchFailure, RecordingNotFound
    from replaytap.storage import DiskStore

    args = sys.argv[2:]
    server = None
    if "--server" in args:
        i = args.index("--server")
        server = args[i + 1] if i + 1 < len(args) else None
        args = args[:i] + args[i + 2 :]

    if not args:
        print(USAGE)
        sys.exit(1)

    recording_id = args[0]
    try:
        clock_ms = float(args[1]) if len(args) > 1 else 0.0
    except ValueError:
        print(f"Error: invalid time {args[1]!r}")
        sys.exit(1)

    config = load_config()
    logging.basicConfig(level=config.log_level)

    try:
        if server:
            client = RecordingClient(server)
            try:
                session = client.load_session(recording_id)
            finally:
                client.close()
        else:
            snapshot = DiskStore(config.data_dir).get_recording(recording_id)
            if snapshot is None:
                raise RecordingNotFound(recording_id)
            session = RecordingSession.from_snapshot(snapshot)
    except FetchFailure as e:
        print(f"Error: {e}")
        sys.exit(1)

    viewer = Viewer.from_session(session, config, recording_id)
    viewer.seek(clock_ms)
    print(render_page(viewer))


CLI_SUBCOMMANDS = {
    "serve": _handle_serve,
    "render": _handle_render,
}


def main():
    """Entry point for replaytap.

    Subcommands:
    - serve: Run the HTTP API and viewer
    - render: Print the viewer page for a recording at a clock position
    """
    if len(sys.argv) > 1 and sys.argv[1] in CLI_SUBCOMMANDS:
        CLI_SUBCOMMANDS[sys.argv[1]]()
        return

    print(USAGE)
    sys.exit(1)


__all__ = ["Viewer", "RecordingSession", "render_page", "main", "__version__"]
