"""Error types for replaytap.

Only fetch failures are surfaced to the user. Malformed records, missing
fields and unknown value shapes degrade to best-effort rendering and never
raise.

PUBLIC API:
  - ReplayError: Base class for replaytap errors
  - FetchFailure: Recording could not be fetched or decoded
  - RecordingNotFound: Recording id unknown to the store
  - error_page: Build the single terminal error view
"""

from html import escape


class ReplayError(Exception):
    """Base class for replaytap errors."""


class FetchFailure(ReplayError):
    """Recording could not be fetched (not found, network error, bad payload)."""

    def __init__(self, recording_id: str, reason: str):
        self.recording_id = recording_id
        self.reason = reason
        super().__init__(f"Failed to load recording {recording_id!r}: {reason}")


class RecordingNotFound(FetchFailure):
    """Recording id does not exist in the store."""

    def __init__(self, recording_id: str):
        super().__init__(recording_id, "Recording not found")


def error_page(message: str = "Recording not found") -> str:
    """Build the terminal error view shown instead of a partially loaded recording.

    Args:
        message: Text shown to the user.

    Returns:
        Complete HTML document.
    """
    return (
        "<!DOCTYPE html>\n"
        '<html><head><meta charset="utf-8"><title>replaytap - error</title></head>'
        f'<body><div id="error-view" class="error-view"><h2>{escape(message)}</h2>'
        "<p>The recording may have expired or the link is invalid.</p></div></body></html>"
    )
