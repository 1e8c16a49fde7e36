"""Exception types raised while analyzing an image.

Each error carries the HTTP status and the public message that the API
returns in its `{"error": ...}` envelope. Services raise them where the
failure happens; `main.py` translates them once at the boundary.
"""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for failures of a single analysis request."""

    status_code = 500
    default_message = "Failed to analyze image"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InputError(AnalysisError):
    """The request payload is missing or unusable."""

    status_code = 400
    default_message = "Image URL is required"


class UpstreamError(AnalysisError):
    """The external model could not be reached, failed, or returned nothing."""

    status_code = 500
    default_message = "Failed to analyze image"


class ParseError(AnalysisError):
    """The model reply does not follow the labelled output convention."""

    status_code = 500
    default_message = "Invalid response format from the analysis model"
